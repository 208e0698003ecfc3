"""Client-side preference persistence (the CLI's equivalent of localStorage)."""
from __future__ import annotations
import json
import logging
import os
from pathlib import Path

LOGGER = logging.getLogger("prompt_builder.client.preferences")

MODEL_KEY = "pb_model"
DEFAULT_PATH = Path.home() / ".config" / "prompt_builder" / "preferences.json"


class PreferenceStore:
    """Small JSON key-value file. A missing or unreadable file reads as empty."""

    def __init__(self, path: str | Path | None = None) -> None:
        if path is None:
            path = os.getenv("PROMPT_BUILDER_PREFS", str(DEFAULT_PATH))
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            LOGGER.warning("Ignoring unreadable preferences at %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
