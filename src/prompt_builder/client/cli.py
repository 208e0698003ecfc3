"""Command-line client: turn a website idea into two prompts via the relay."""
from __future__ import annotations
import argparse
import asyncio
import logging
import os
import sys

from prompt_builder.client.api import RelayClient
from prompt_builder.client.controller import Controller
from prompt_builder.client.preferences import PreferenceStore
from prompt_builder.client.view import DETAILED_OUTPUT, SHORT_OUTPUT, TerminalView
from prompt_builder.common.config import load_models
from prompt_builder.common.logging_setup import setup_logging

LOGGER = logging.getLogger("prompt_builder.client.cli")

COPY_TARGETS = {"short": SHORT_OUTPUT, "detailed": DETAILED_OUTPUT}


async def run(idea: str, model: str | None, server: str, copy: str | None, prefs: PreferenceStore) -> bool:
    """
    Generate both prompts for one idea.

    Returns:
        True if either prompt failed.
    """
    models = {m.id: m.label for m in load_models()}
    view = TerminalView(models)
    controller = Controller(view, RelayClient(server), prefs)
    controller.initialize()
    if model:
        view.change_model(model)

    await controller.fill_example(idea)
    if copy:
        await controller.copy(COPY_TARGETS[copy])
    return any(view.output_text(target).startswith("Error: ") for target in COPY_TARGETS.values())


def main() -> None:
    setup_logging(os.getenv("LOG_LEVEL", "WARNING"))
    ap = argparse.ArgumentParser(description="Generate short and detailed website-building prompts")
    ap.add_argument("idea", help="Website idea, e.g. 'a bakery website'")
    ap.add_argument("--model", help="Model id; remembered for next time")
    ap.add_argument("--server", default=os.getenv("PROMPT_BUILDER_SERVER", "http://localhost:3000"))
    ap.add_argument("--copy", choices=sorted(COPY_TARGETS), help="Copy one prompt to the clipboard")
    ap.add_argument("--prefs", help="Preferences file path")
    args = ap.parse_args()
    if not args.idea.strip():
        ap.error("idea must not be empty")

    if asyncio.run(run(args.idea, args.model, args.server, args.copy, PreferenceStore(args.prefs))):
        sys.exit(1)

if __name__ == "__main__":
    main()
