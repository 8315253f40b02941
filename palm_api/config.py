from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
import logging
from typing import Any, Mapping, Optional, Type, TypeVar

from .base import ConfigurationError, Example, Message, Transport
from .formatting import FORMATS, check_format


DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta2"

C = TypeVar("C")


def parse_config(schema: Type[C], raw: Mapping[str, Any] | None = None, base: Mapping[str, Any] | None = None) -> C:
    """
    Merge user-supplied options over a schema's defaults.

    `base` (optional) replaces the schema's static defaults, e.g. a chat
    session's own settings underneath per-call overrides. Unknown keys in
    `raw` are rejected all at once.
    """
    raw = raw or {}
    names = {f.name for f in fields(schema)}
    extras = [key for key in raw if key not in names]
    if extras:
        raise ConfigurationError(
            f"These following configurations are not available on this function: {', '.join(extras)}"
        )
    merged = {key: value for key, value in (base or {}).items() if key in names}
    merged.update(raw)
    return schema(**merged)


@dataclass(frozen=True)
class _Options:
    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ClientConfig:
    transport: Optional[Transport] = None
    base_url: str = DEFAULT_BASE_URL
    logger: Optional[logging.Logger] = None

    def __post_init__(self) -> None:
        if self.transport is not None and not callable(self.transport):
            raise ConfigurationError(
                f"transport must be an async callable (url, options) -> response, got {type(self.transport).__name__}."
            )


@dataclass(frozen=True)
class GenerateTextConfig(_Options):
    candidate_count: int = 1
    temperature: float = 0
    top_p: float = 0.95
    top_k: int = 40
    model: str = "text-bison-001"
    format: str = FORMATS.MD

    def __post_init__(self) -> None:
        check_format(self.format)


@dataclass(frozen=True)
class AskConfig(_Options):
    candidate_count: int = 1
    temperature: float = 0.7
    top_p: float = 0.95
    top_k: int = 40
    model: str = "chat-bison-001"
    format: str = FORMATS.MD
    context: str = ""
    examples: list[Example] = field(default_factory=list)

    def __post_init__(self) -> None:
        check_format(self.format)


@dataclass(frozen=True)
class EmbedTextConfig(_Options):
    model: str = "embedding-gecko-001"


@dataclass(frozen=True)
class CreateChatConfig(_Options):
    context: str = ""
    messages: list[Message] = field(default_factory=list)
    examples: list[Example] = field(default_factory=list)
    temperature: float = 0.5
    candidate_count: int = 1
    top_p: float = 0.95
    top_k: int = 40
    model: str = "chat-bison-001"
    # generateMessage has no such field; kept for callers that read it back
    max_output_tokens: int = 1024


@dataclass(frozen=True)
class ChatAskConfig(_Options):
    temperature: float = 0.5
    candidate_count: int = 1
    top_p: float = 0.95
    top_k: int = 40
    model: str = "chat-bison-001"
    max_output_tokens: int = 1024
    format: str = FORMATS.MD

    def __post_init__(self) -> None:
        check_format(self.format)
