"""Launch the relay with uvicorn."""
from __future__ import annotations
import argparse
import logging

import uvicorn

from prompt_builder.common.config import Settings
from prompt_builder.common.logging_setup import setup_logging

LOGGER = logging.getLogger("prompt_builder.relay.serve")

def main() -> None:
    setup_logging()
    settings = Settings.from_env()
    ap = argparse.ArgumentParser(description="Run the Prompt Builder relay server")
    ap.add_argument("--host", default=settings.host)
    ap.add_argument("--port", type=int, default=settings.port)
    ap.add_argument("--reload", action="store_true", help="Reload on code changes (development)")
    args = ap.parse_args()

    if not settings.configured:
        LOGGER.warning("OPENROUTER_API_KEY is not set; every generation request will fail")
    LOGGER.info("Prompt Builder running at http://localhost:%s", args.port)
    uvicorn.run(
        "prompt_builder.relay.fastapi_app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_config=None,
    )

if __name__ == "__main__":
    main()
