from __future__ import annotations

import json
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

from prompt_builder.common.config import Settings
from prompt_builder.common.templates import DETAILED_SYSTEM_PROMPT, SHORT_SYSTEM_PROMPT
from prompt_builder.relay.fastapi_app import create_app

BODY = {"model": "openai/gpt-4o", "systemPrompt": "be brief", "userPrompt": "Website idea: a bakery website"}


class _FakeUpstream:
    """Records upstream requests and replies with a canned response."""

    def __init__(self, status: int = 200, json_data: Any = None, content: bytes | None = None, exc: Exception | None = None) -> None:
        self.status = status
        self.json_data = json_data
        self.content = content
        self.exc = exc
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.content is not None:
            return httpx.Response(self.status, content=self.content)
        return httpx.Response(self.status, json=self.json_data)


def _client(upstream: _FakeUpstream, api_key: str | None = "test-key") -> TestClient:
    settings = Settings(api_key=api_key)
    return TestClient(create_app(settings, transport=httpx.MockTransport(upstream)))


def _completion(content: str) -> dict[str, Any]:
    return {
        "model": "openai/gpt-4o-2024-08-06",
        "choices": [{"message": {"role": "assistant", "content": content}, "index": 0}],
    }


def test_health_reports_configuration() -> None:
    r = _client(_FakeUpstream(), api_key=None).get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "configured": False}


def test_generate_returns_content_and_model() -> None:
    upstream = _FakeUpstream(json_data=_completion("Build me a bakery site"))
    r = _client(upstream).post("/api/generate", json=BODY)
    assert r.status_code == 200
    assert r.json() == {"content": "Build me a bakery site", "model": "openai/gpt-4o-2024-08-06"}


def test_generate_sends_credential_and_messages_upstream() -> None:
    upstream = _FakeUpstream(json_data=_completion("ok"))
    _client(upstream).post("/api/generate", json=BODY)

    assert len(upstream.requests) == 1
    req = upstream.requests[0]
    assert str(req.url) == "https://openrouter.ai/api/v1/chat/completions"
    assert req.headers["Authorization"] == "Bearer test-key"
    assert req.headers["X-Title"] == "Prompt Builder"
    assert "HTTP-Referer" in req.headers
    payload = json.loads(req.content)
    assert payload["model"] == "openai/gpt-4o"
    assert payload["messages"] == [
        {"role": "system", "content": "be brief"},
        {"role": "user", "content": "Website idea: a bakery website"},
    ]
    assert payload["max_tokens"] == 4096
    assert payload["temperature"] == 0.7


def test_missing_message_falls_back_to_placeholder() -> None:
    upstream = _FakeUpstream(json_data={"model": "x", "choices": [{"index": 0}]})
    r = _client(upstream).post("/api/generate", json=BODY)
    assert r.status_code == 200
    assert r.json()["content"] == "No response generated."


@pytest.mark.parametrize("missing", [["model"], ["systemPrompt"], ["userPrompt"], ["model", "userPrompt"]])
def test_missing_fields_rejected(missing: list[str]) -> None:
    upstream = _FakeUpstream(json_data=_completion("unused"))
    body = {k: v for k, v in BODY.items() if k not in missing}
    r = _client(upstream).post("/api/generate", json=body)
    assert r.status_code == 400
    assert r.json() == {"error": "Missing required fields: model, systemPrompt, userPrompt"}
    assert upstream.requests == []


def test_empty_field_counts_as_missing() -> None:
    r = _client(_FakeUpstream()).post("/api/generate", json={**BODY, "userPrompt": ""})
    assert r.status_code == 400


def test_non_object_body_rejected() -> None:
    r = _client(_FakeUpstream()).post("/api/generate", content=b"not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert "Missing required fields" in r.json()["error"]


def test_missing_credential_never_calls_upstream() -> None:
    upstream = _FakeUpstream(json_data=_completion("unused"))
    r = _client(upstream, api_key=None).post("/api/generate", json=BODY)
    assert r.status_code == 500
    assert r.json() == {"error": "OPENROUTER_API_KEY not configured on server"}
    assert upstream.requests == []


def test_upstream_error_status_and_message_pass_through() -> None:
    upstream = _FakeUpstream(status=429, json_data={"error": {"message": "rate limited"}})
    r = _client(upstream).post("/api/generate", json=BODY)
    assert r.status_code == 429
    assert r.json() == {"error": "rate limited"}


def test_upstream_error_without_body_gets_generic_message() -> None:
    upstream = _FakeUpstream(status=502, content=b"<html>bad gateway</html>")
    r = _client(upstream).post("/api/generate", json=BODY)
    assert r.status_code == 502
    assert r.json() == {"error": "Upstream provider returned status 502"}


def test_transport_failure_is_500_with_message() -> None:
    upstream = _FakeUpstream(exc=httpx.ConnectError("connection refused"))
    r = _client(upstream).post("/api/generate", json=BODY)
    assert r.status_code == 500
    assert r.json() == {"error": "connection refused"}


def test_upstream_timeout_is_504() -> None:
    upstream = _FakeUpstream(exc=httpx.ReadTimeout("read timed out"))
    r = _client(upstream).post("/api/generate", json=BODY)
    assert r.status_code == 504
    assert r.json() == {"error": "Upstream request timed out after 120 seconds"}


def test_unparseable_success_body_is_500() -> None:
    upstream = _FakeUpstream(status=200, content=b"{truncated")
    r = _client(upstream).post("/api/generate", json=BODY)
    assert r.status_code == 500
    assert "error" in r.json()


def test_templates_and_models_routes() -> None:
    client = _client(_FakeUpstream())
    tpl = client.get("/api/templates").json()
    assert tpl == {"short": SHORT_SYSTEM_PROMPT, "detailed": DETAILED_SYSTEM_PROMPT}
    models = client.get("/api/models").json()
    assert models[0].keys() == {"id", "label"}


def test_static_page_served_at_root() -> None:
    client = _client(_FakeUpstream())
    r = client.get("/")
    assert r.status_code == 200
    assert 'id="generateBtn"' in r.text
    assert client.get("/js/app.js").status_code == 200


def test_content_parts_list_falls_back_to_placeholder() -> None:
    data = {"model": "x", "choices": [{"message": {"content": [{"type": "text", "text": "hi"}]}}]}
    r = _client(_FakeUpstream(json_data=data)).post("/api/generate", json=BODY)
    assert r.status_code == 200
    assert r.json() == {"content": "No response generated.", "model": "x"}


def test_non_string_model_echo_becomes_null() -> None:
    data = {**_completion("Build me a bakery site"), "model": 5}
    r = _client(_FakeUpstream(json_data=data)).post("/api/generate", json=BODY)
    assert r.status_code == 200
    assert r.json() == {"content": "Build me a bakery site", "model": None}
