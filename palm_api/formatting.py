from __future__ import annotations

from typing import Any, Callable, TypeVar

from .base import ConfigurationError, ProtocolError


T = TypeVar("T")


class FORMATS:
    """Available response formats."""

    JSON = "json"
    MD = "markdown"


def check_format(fmt: str) -> str:
    if fmt not in (FORMATS.JSON, FORMATS.MD):
        raise ConfigurationError(
            f'{fmt} is not a valid format. Use FORMATS.MD ("markdown") or FORMATS.JSON ("json").'
        )
    return fmt


def format_response(response: dict[str, Any], fmt: str, extractor: Callable[[dict[str, Any]], T]) -> dict[str, Any] | T:
    """
    Shape a decoded response for the caller.

    - "json": the decoded response, untouched
    - "markdown": whatever `extractor` pulls out of it (usually the first candidate's text)
    """
    check_format(fmt)
    if fmt == FORMATS.JSON:
        return response
    return extractor(response)


def _first_candidate_field(response: dict[str, Any], key: str) -> str:
    candidates = response.get("candidates") or []
    value = candidates[0].get(key) if candidates else None
    if value:
        return value

    reasons = [f.get("reason", "UNKNOWN") for f in response.get("filters") or []]
    detail = f" Filters: {', '.join(reasons)}." if reasons else ""
    raise ProtocolError(
        f"Request rejected. The response contains no reply content.{detail}",
        response=response,
    )


def first_output(response: dict[str, Any]) -> str:
    return _first_candidate_field(response, "output")


def first_content(response: dict[str, Any]) -> str:
    return _first_candidate_field(response, "content")
