"""Async client for the relay's /api/generate endpoint."""
from __future__ import annotations
import logging

import httpx

LOGGER = logging.getLogger("prompt_builder.client.api")


class GenerationError(Exception):
    """A generation call failed; the message is shown to the user as-is."""


class RelayClient:
    def __init__(self, base_url: str = "http://localhost:3000", client: httpx.AsyncClient | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = client

    async def generate(self, system_prompt: str, user_prompt: str, model: str) -> str:
        """
        Ask the relay for one completion.

        Args:
            system_prompt: Template describing the requested prompt style.
            user_prompt: The "Website idea: ..." message.
            model: Provider model identifier.

        Returns:
            The generated text.

        Raises:
            GenerationError: On a non-success status or a transport failure.
        """
        payload = {"model": model, "systemPrompt": system_prompt, "userPrompt": user_prompt}
        url = f"{self.base_url}/api/generate"
        try:
            if self._client is not None:
                r = await self._client.post(url, json=payload)
            else:
                async with httpx.AsyncClient(timeout=None) as client:
                    r = await client.post(url, json=payload)
        except httpx.HTTPError as e:
            LOGGER.debug("Relay request failed: %s", e)
            raise GenerationError(str(e) or type(e).__name__) from e

        try:
            data = r.json()
        except ValueError:
            data = {}
        if not r.is_success:
            error = data.get("error") if isinstance(data, dict) else None
            raise GenerationError(error or f"Server error {r.status_code}")
        if not isinstance(data, dict) or "content" not in data:
            raise GenerationError("Malformed server response")
        return data["content"]
