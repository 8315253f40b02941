from __future__ import annotations

import asyncio
import copy
import logging
from typing import Any

from .base import Example, Message, ProtocolError, QueryFn, expand_examples
from .config import ChatAskConfig, CreateChatConfig, parse_config
from .formatting import first_content, format_response


class Chat:
    """
    Multi-turn chat over `generateMessage`.

    Remembers every exchanged message and sends the whole history with each
    new question. History only grows after a usable reply, two entries per
    `ask` (question, then answer). Concurrent `ask` calls on the same chat
    are serialized.
    """

    def __init__(
        self,
        query: QueryFn,
        config: CreateChatConfig,
        *,
        logger: logging.Logger | None = None,
    ):
        self._query = query
        self.config = config
        self._messages: list[Message] = copy.deepcopy(config.messages)
        self._lock = asyncio.Lock()
        self.logger = logger or logging.getLogger("palm_api.Chat")

    @property
    def context(self) -> str:
        return self.config.context

    @property
    def examples(self) -> list[Example]:
        return list(self.config.examples)

    def __len__(self) -> int:
        return len(self._messages)

    def _build_body(self, message: str, config: ChatAskConfig) -> dict[str, Any]:
        return {
            "prompt": {
                "context": self.config.context,
                "messages": [*self._messages, {"content": message}],
                "examples": expand_examples(self.config.examples),
            },
            "candidate_count": config.candidate_count,
            "temperature": config.temperature,
            "top_p": config.top_p,
            "top_k": config.top_k,
        }

    async def ask(self, message: str, **options: Any) -> dict[str, Any] | str:
        """Same as `PaLM.ask` but with the conversation so far sent along."""
        config = parse_config(ChatAskConfig, options, base=self.config.to_dict())

        async with self._lock:
            response = await self._query(config.model, "generateMessage", self._build_body(message, config))
            try:
                reply = first_content(response)
            except ProtocolError:
                self.logger.warning("Chat reply rejected (history kept at %d messages)", len(self._messages))
                raise

            self._messages.append({"content": message})
            self._messages.append({"content": reply})

        return format_response(response, config.format, first_content)

    def export(self) -> list[Message]:
        """Return a copy of the message history; changing it does not affect the chat."""
        return copy.deepcopy(self._messages)
