r"""Formatting of request and response payloads for the debug logs."""

from __future__ import annotations

__all__ = ["DEFAULT_TRACE_LENGTH", "format_payload", "response_payload"]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

# Maximum number of characters of a text payload kept in a log line
DEFAULT_TRACE_LENGTH = 50

_TEXT_MEDIA_SUFFIXES = ("+json", "+xml")
_TEXT_MEDIA_TYPES = (
    "application/json",
    "application/javascript",
    "application/x-www-form-urlencoded",
    "application/xml",
)


def format_payload(
    payload: str | bytes | bytearray | memoryview | None,
    max_length: int = DEFAULT_TRACE_LENGTH,
) -> str:
    """Format a payload so it can be safely written to a log line.

    Binary payloads are replaced by a placeholder with their size. Text
    payloads longer than ``max_length`` characters are truncated.

    Args:
        payload: The request or response body.
        max_length: The maximum number of characters kept.

    Returns:
        The formatted payload.

    Example:
        ```pycon
        >>> from storagenet.trace import format_payload
        >>> format_payload('[{"a":"us"}]')
        '[{"a":"us"}]'
        >>> format_payload("x" * 60, max_length=5)
        'xxxxx...'
        >>> format_payload(b"\x00\x01\x02")
        '<binary data, 3 bytes>'

        ```
    """
    if payload is None:
        return ""
    if isinstance(payload, (bytes, bytearray, memoryview)):
        return f"<binary data, {len(payload)} bytes>"
    if len(payload) <= max_length:
        return payload
    return f"{payload[:max_length]}..."


def response_payload(response: httpx.Response) -> str | bytes:
    """Return the body of a response as text or bytes depending on its
    media type.

    Args:
        response: The HTTP response. Its content must have been read.

    Returns:
        The decoded text for textual media types, the raw bytes otherwise.
    """
    content_type = response.headers.get("Content-Type", "")
    media_type = content_type.split(";", 1)[0].strip().lower()
    if (
        media_type.startswith("text/")
        or media_type in _TEXT_MEDIA_TYPES
        or media_type.endswith(_TEXT_MEDIA_SUFFIXES)
    ):
        return response.text
    return response.content
