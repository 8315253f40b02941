from __future__ import annotations

from typing import Any, Awaitable, Callable, Protocol, Sequence, Tuple, TypedDict


class CitationSource(TypedDict, total=False):
    startIndex: int
    endIndex: int
    uri: str
    license: str


class CitationMetadata(TypedDict):
    citationSources: list[CitationSource]


class _MessageBase(TypedDict):
    content: str


class Message(_MessageBase, total=False):
    author: str
    citationMetadata: CitationMetadata


# (input, output) few-shot pair
Example = Tuple[str, str]


class RequestOptions(TypedDict):
    method: str
    headers: dict[str, str]
    body: str


class TransportResponse(Protocol):
    """What the client needs back from a transport call."""

    @property
    def ok(self) -> bool: ...

    async def json(self) -> Any: ...


Transport = Callable[[str, RequestOptions], Awaitable[TransportResponse]]


class QueryFn(Protocol):
    """Dispatch capability a client hands to the chats it creates."""

    async def __call__(self, model: str, command: str, body: dict[str, Any]) -> dict[str, Any]: ...


def expand_examples(examples: Sequence[Sequence[str]]) -> list[dict[str, Message]]:
    return [{"input": {"content": ex[0]}, "output": {"content": ex[1]}} for ex in examples]


class PaLMError(RuntimeError):
    """Base class for every error raised by palm_api."""


class ConfigurationError(PaLMError, ValueError):
    """Raised for unknown options, invalid formats or an unusable transport."""


class RemoteAPIError(PaLMError):
    """Raised when the remote API answers with a failure status."""

    def __init__(self, message: str, *, status: int | None = None, body: Any = None):
        super().__init__(message)
        self.status = status
        self.body = body


class ProtocolError(PaLMError):
    """Raised when a successful response cannot be used (e.g. no reply candidate)."""

    def __init__(self, message: str, *, response: Any = None):
        super().__init__(message)
        self.response = response
