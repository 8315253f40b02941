from __future__ import annotations

import json
import re
from typing import Any, Callable

from .base import RequestOptions


Responder = Callable[[str, str, dict[str, Any]], dict[str, Any]]

_URL_RE = re.compile(r"/models/(?P<model>[^:/?]+):(?P<command>[A-Za-z]+)")


def demo_responder(model: str, command: str, body: dict[str, Any]) -> dict[str, Any]:
    """
    Deterministic responder for local demos (no network).

    It answers by command, echoing the last message it was sent.
    """
    if command == "generateText":
        text = body.get("prompt", {}).get("text", "")
        return {
            "candidates": [{"output": f"(fake {model}) {text}", "safetyRatings": []}],
            "filters": [],
        }

    if command == "generateMessage":
        prompt = body.get("prompt", {})
        messages = prompt.get("messages") or []
        last = messages[-1]["content"] if messages else ""
        return {
            "candidates": [{"author": "1", "content": f"You said: {last}"}],
            "messages": list(messages),
            "filters": [],
        }

    if command == "embedText":
        text = body.get("text", "")
        return {"embedding": {"value": [float(len(text)), float(len(text.split())), 0.0]}}

    return {"error": {"code": 404, "message": f"Unknown command: {command}"}}


class FakeResponse:
    def __init__(self, data: Any, status: int = 200):
        self._data = data
        self.status = status

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    async def json(self) -> Any:
        return self._data


class FakeTransport:
    """Transport-compatible fake for tests/demos. Records every request it sees."""

    def __init__(self, responder: Responder = demo_responder, *, status: int = 200):
        self._responder = responder
        self.status = status
        self.requests: list[tuple[str, RequestOptions, dict[str, Any]]] = []

    async def __call__(self, url: str, options: RequestOptions) -> FakeResponse:
        body = json.loads(options["body"])
        self.requests.append((url, options, body))

        m = _URL_RE.search(url)
        if not m:
            return FakeResponse({"error": {"code": 404, "message": f"Unrecognized URL: {url}"}}, status=404)
        data = self._responder(m.group("model"), m.group("command"), body)
        status = 404 if "error" in data and self.status < 300 else self.status
        return FakeResponse(data, status=status)

    @classmethod
    def returning(cls, data: dict[str, Any], *, status: int = 200) -> "FakeTransport":
        """A fake that answers every request with the same decoded body."""
        return cls(lambda model, command, body: data, status=status)
