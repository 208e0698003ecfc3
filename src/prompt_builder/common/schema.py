"""Pydantic models for relay request/response types."""
from __future__ import annotations

from pydantic import BaseModel

REQUIRED_FIELDS = ("model", "systemPrompt", "userPrompt")


class GenerationRequest(BaseModel):
    """Body of POST /api/generate. Fields are checked by the handler, not the parser."""
    model: str | None = None
    systemPrompt: str | None = None
    userPrompt: str | None = None

    def missing_fields(self) -> list[str]:
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]


class GenerationResult(BaseModel):
    content: str
    model: str | None = None


class ErrorOut(BaseModel):
    error: str


class ModelOption(BaseModel):
    id: str
    label: str
