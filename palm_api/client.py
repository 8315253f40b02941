from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any
from urllib.parse import quote

from .base import ConfigurationError, RemoteAPIError, RequestOptions, expand_examples
from .chat import Chat
from .config import (
    AskConfig,
    ClientConfig,
    CreateChatConfig,
    EmbedTextConfig,
    GenerateTextConfig,
    parse_config,
)
from .env import load_env
from .formatting import FORMATS, first_content, first_output, format_response
from .transport import HttpxTransport


class PaLM:
    """
    Async client for the PaLM API (generateText / generateMessage / embedText).

    Options are keyword arguments checked against a fixed set per call;
    anything unknown raises `ConfigurationError` before a request is made.

    Env helpers (`from_env`):
      - PALM_API_KEY (or GOOGLE_API_KEY)
      - PALM_BASE_URL (default: https://generativelanguage.googleapis.com/v1beta2)
    """

    FORMATS = FORMATS

    def __init__(self, key: str, **options: Any):
        config = parse_config(ClientConfig, options)
        self._owns_transport = config.transport is None
        self._transport = config.transport or HttpxTransport()
        self.key = key
        self.base_url = config.base_url.rstrip("/")
        self.logger = config.logger or logging.getLogger("palm_api.PaLM")

    @classmethod
    def from_env(cls, dotenv_path: Path | None = None, **options: Any) -> "PaLM":
        load_env(dotenv_path)

        key = os.getenv("PALM_API_KEY") or os.getenv("GOOGLE_API_KEY") or ""
        if not key:
            raise ConfigurationError("Missing API key. Set PALM_API_KEY (or GOOGLE_API_KEY).")
        base_url = os.getenv("PALM_BASE_URL")
        if base_url and "base_url" not in options:
            options["base_url"] = base_url
        return cls(key, **options)

    async def __aenter__(self) -> "PaLM":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the default transport. Transports passed in by the caller are left open."""
        if self._owns_transport:
            await self._transport.aclose()

    async def _query(self, model: str, command: str, body: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.base_url}/models/{model}:{command}?key={quote(self.key, safe='')}"
        opts: RequestOptions = {
            "method": "POST",
            "headers": {"Content-Type": "application/json"},
            "body": json.dumps(body),
        }

        self.logger.debug("PaLM request: model=%s command=%s", model, command)
        response = await self._transport(url, opts)
        status = getattr(response, "status", None)
        try:
            data = await response.json()
        except ValueError as e:
            if response.ok:
                raise
            self.logger.warning("PaLM %s:%s failed (status=%s) with a non-JSON body", model, command, status)
            raise RemoteAPIError(f"PaLM request failed (status={status}): non-JSON error body", status=status) from e

        if not response.ok:
            error = data.get("error") if isinstance(data, dict) else None
            message = error.get("message") if isinstance(error, dict) else None
            self.logger.warning("PaLM %s:%s failed (status=%s): %s", model, command, status, message or data)
            raise RemoteAPIError(message or f"PaLM request failed: {data}", status=status, body=data)

        return data

    async def generate_text(self, message: str, **options: Any) -> dict[str, Any] | str:
        """Let a `generateText` model complete `message`."""
        config = parse_config(GenerateTextConfig, options)

        response = await self._query(
            config.model,
            "generateText",
            {
                "prompt": {"text": message},
                "candidate_count": config.candidate_count,
                "temperature": config.temperature,
                "top_p": config.top_p,
                "top_k": config.top_k,
            },
        )
        return format_response(response, config.format, first_output)

    async def ask(self, message: str, **options: Any) -> dict[str, Any] | str:
        """One-off `generateMessage` call, with optional context and few-shot examples."""
        config = parse_config(AskConfig, options)

        response = await self._query(
            config.model,
            "generateMessage",
            {
                "prompt": {
                    "context": config.context,
                    "messages": [{"content": message}],
                    "examples": expand_examples(config.examples),
                },
                "candidate_count": config.candidate_count,
                "temperature": config.temperature,
                "top_p": config.top_p,
                "top_k": config.top_k,
            },
        )
        return format_response(response, config.format, first_content)

    async def embed(self, message: str, **options: Any) -> list[float]:
        config = parse_config(EmbedTextConfig, options)
        response = await self._query(config.model, "embedText", {"text": message})
        return response["embedding"]["value"]

    def create_chat(self, **options: Any) -> Chat:
        config = parse_config(CreateChatConfig, options)
        return Chat(self._query, config, logger=self.logger.getChild("Chat"))
