"""Client controller: idea -> short and detailed prompts.

Both generation calls run as independent asyncio tasks. Each one renders its
own output region the moment it settles; the trigger is re-enabled only once
both have settled, whatever their outcome.
"""
from __future__ import annotations
import asyncio
import logging
from typing import Protocol

from prompt_builder.client.preferences import MODEL_KEY, PreferenceStore
from prompt_builder.client.view import (
    DETAILED_OUTPUT,
    GENERATE_LABEL,
    IDLE_TEXT,
    LOADING_TEXT,
    SHORT_OUTPUT,
    WORKING_LABEL,
    View,
)
from prompt_builder.common.templates import (
    DETAILED_SYSTEM_PROMPT,
    SHORT_SYSTEM_PROMPT,
    build_user_prompt,
)

LOGGER = logging.getLogger("prompt_builder.client.controller")


class Relay(Protocol):
    async def generate(self, system_prompt: str, user_prompt: str, model: str) -> str: ...


class Controller:
    def __init__(
        self,
        view: View,
        relay: Relay,
        preferences: PreferenceStore,
        toast_seconds: float = 4.0,
        copied_seconds: float = 2.0,
    ) -> None:
        self.view = view
        self.relay = relay
        self.preferences = preferences
        self.toast_seconds = toast_seconds
        self.copied_seconds = copied_seconds
        self._toast_timer: asyncio.TimerHandle | None = None

    def initialize(self) -> None:
        """Restore the last model choice and persist future ones."""
        saved = self.preferences.get(MODEL_KEY)
        if saved:
            self.view.select_model(saved)
        self.view.on_model_change(self._persist_model)

    def _persist_model(self, model: str) -> None:
        self.preferences.set(MODEL_KEY, model)

    async def _render(self, target: str, system_prompt: str, user_prompt: str, model: str) -> None:
        try:
            text = await self.relay.generate(system_prompt, user_prompt, model)
        except Exception as e:
            LOGGER.warning("Generation for %s failed: %s", target, e)
            self.view.set_output(target, f"Error: {e}")
        else:
            self.view.set_output(target, text)

    async def generate(self) -> None:
        idea = self.view.idea_text().strip()
        if not idea:
            self.view.focus_idea()
            return

        model = self.view.selected_model()
        self.view.show_results(self.view.model_label())
        self.view.set_output(SHORT_OUTPUT, LOADING_TEXT, loading=True)
        self.view.set_output(DETAILED_OUTPUT, LOADING_TEXT, loading=True)
        self.view.set_trigger(False, WORKING_LABEL)

        user_prompt = build_user_prompt(idea)
        tasks = [
            asyncio.create_task(self._render(SHORT_OUTPUT, SHORT_SYSTEM_PROMPT, user_prompt, model)),
            asyncio.create_task(self._render(DETAILED_OUTPUT, DETAILED_SYSTEM_PROMPT, user_prompt, model)),
        ]
        try:
            await asyncio.gather(*tasks, return_exceptions=True)
        finally:
            self.view.set_trigger(True, GENERATE_LABEL)
        self.view.scroll_to_results()

    async def copy(self, target: str) -> bool:
        """
        Copy an output region to the clipboard.

        Returns:
            True if the clipboard was written.
        """
        text = self.view.output_text(target)
        if not text or text == LOADING_TEXT or text == IDLE_TEXT.get(target):
            return False
        try:
            self.view.write_clipboard(text)
        except Exception as e:
            LOGGER.warning("Clipboard write failed: %s", e)
            self.show_toast("Could not copy to clipboard")
            return False
        self.view.set_copied(target, True)
        asyncio.get_running_loop().call_later(self.copied_seconds, self.view.set_copied, target, False)
        return True

    async def fill_example(self, text: str) -> None:
        self.view.set_idea(text)
        self.view.focus_idea()
        await self.generate()

    async def on_key(self, key: str) -> None:
        if key == "Enter" and self.view.trigger_enabled():
            await self.generate()

    def show_toast(self, message: str) -> None:
        """Show a transient notification, replacing any pending auto-hide."""
        if self._toast_timer is not None:
            self._toast_timer.cancel()
        self.view.show_toast(message)
        self._toast_timer = asyncio.get_running_loop().call_later(self.toast_seconds, self._hide_toast)

    def _hide_toast(self) -> None:
        self._toast_timer = None
        self.view.hide_toast()
