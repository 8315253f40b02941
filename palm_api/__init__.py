"""
Async client for the Google PaLM API.

Text generation, one-off chat messages, embeddings, and `Chat` sessions
that remember the conversation.
"""

from .base import ConfigurationError, Message, PaLMError, ProtocolError, RemoteAPIError
from .chat import Chat
from .client import PaLM
from .formatting import FORMATS

__all__ = [
    "Chat",
    "ConfigurationError",
    "FORMATS",
    "Message",
    "PaLM",
    "PaLMError",
    "ProtocolError",
    "RemoteAPIError",
]
