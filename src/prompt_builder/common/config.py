"""Runtime settings read once at process startup."""
from __future__ import annotations
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from dotenv import find_dotenv, load_dotenv

from prompt_builder.common.schema import ModelOption

PACKAGE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_STATIC_DIR = PACKAGE_DIR / "static"
DEFAULT_MODELS_PATH = PACKAGE_DIR / "configs" / "models.yaml"
DEFAULT_UPSTREAM_URL = "https://openrouter.ai/api/v1/chat/completions"


@dataclass(frozen=True)
class Settings:
    """Relay configuration. Passed explicitly to create_app."""
    api_key: str | None = None
    host: str = "0.0.0.0"
    port: int = 3000
    upstream_url: str = DEFAULT_UPSTREAM_URL
    upstream_timeout: float = 120.0
    referer: str = "https://promptbuilder.aibuildmastery.com"
    title: str = "Prompt Builder"
    max_tokens: int = 4096
    temperature: float = 0.7
    static_dir: Path = field(default=DEFAULT_STATIC_DIR)
    models_path: Path = field(default=DEFAULT_MODELS_PATH)

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> "Settings":
        """
        Build settings from the environment, loading a .env file first.

        Variables already set in the environment take precedence over .env.
        """
        load_dotenv(dotenv_path or find_dotenv(usecwd=True), override=False)
        return cls(
            api_key=os.getenv("OPENROUTER_API_KEY") or None,
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
            upstream_url=os.getenv("UPSTREAM_URL", DEFAULT_UPSTREAM_URL),
            upstream_timeout=float(os.getenv("UPSTREAM_TIMEOUT", "120")),
            models_path=Path(os.getenv("PROMPT_BUILDER_MODELS", str(DEFAULT_MODELS_PATH))),
        )


def load_models(path: str | Path = DEFAULT_MODELS_PATH) -> list[ModelOption]:
    """
    Load the model catalog shown in the model selector.

    Args:
        path: YAML file with a top-level `models` list of {id, label}.
    """
    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    entries = cfg.get("models") if isinstance(cfg, dict) else None
    models = [ModelOption(**entry) for entry in entries or []]
    if not models:
        raise ValueError(f"No models defined in {path}")
    return models
