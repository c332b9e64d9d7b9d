r"""Single GET and POST requests against the storage servers.

Each call builds its own client with ``storagenet.transport.build_client``
and closes it before returning. No retry happens here: wrap the calls
with ``storagenet.retry.survive`` to retry transient failures.
"""

from __future__ import annotations

__all__ = [
    "RATE_LIMIT_STATUS_CODE",
    "ResponseClass",
    "ResponseResult",
    "get_content",
    "post",
]

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

import httpx

from storagenet.exceptions import BandwidthLimitExceeded
from storagenet.trace import format_payload, response_payload
from storagenet.transport import RequestSpec, build_client

if TYPE_CHECKING:
    from storagenet.core.config import Options

logger: logging.Logger = logging.getLogger(__name__)

# Status code sent with an empty body when the transfer quota is exhausted
RATE_LIMIT_STATUS_CODE = 509


class ResponseClass(Enum):
    """Classification of a response."""

    NORMAL = "normal"
    RATE_LIMITED = "rate_limited"


@dataclass(frozen=True)
class ResponseResult:
    """The status code and the raw body of a response.

    Args:
        status_code: The HTTP status code.
        content: The raw response body.
        headers: The response headers.
        encoding: The character encoding used to decode ``text``.

    Example:
        ```pycon
        >>> from storagenet.http import ResponseClass, ResponseResult
        >>> result = ResponseResult(status_code=509, content=b"")
        >>> result.classification
        <ResponseClass.RATE_LIMITED: 'rate_limited'>
        >>> ResponseResult(status_code=200, content=b"[0]").text
        '[0]'

        ```
    """

    status_code: int
    content: bytes
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    encoding: str = "utf-8"

    @classmethod
    def from_response(cls, response: httpx.Response) -> ResponseResult:
        return cls(
            status_code=response.status_code,
            content=response.content,
            headers=response.headers,
            encoding=response.encoding or "utf-8",
        )

    @property
    def classification(self) -> ResponseClass:
        if self.status_code == RATE_LIMIT_STATUS_CODE and not self.content:
            return ResponseClass.RATE_LIMITED
        return ResponseClass.NORMAL

    @property
    def is_rate_limited(self) -> bool:
        return self.classification is ResponseClass.RATE_LIMITED

    @property
    def text(self) -> str:
        return self.content.decode(self.encoding, errors="replace")


def get_content(url: str, options: Options) -> bytes:
    r"""Download the body of a URL with a single GET request.

    Args:
        url: The absolute URL to download.
        options: The session options used to configure the client.

    Returns:
        The raw response body, whatever the status code.

    Raises:
        BandwidthLimitExceeded: If the server answers with status 509 and
            an empty body.
        httpx.HTTPError: If the request fails at the transport level.

    Example:
        ```pycon
        >>> from storagenet.core import Options
        >>> from storagenet.http import get_content
        >>> content = get_content("https://httpbin.org/bytes/16", Options())  # doctest: +SKIP

        ```
    """
    request = RequestSpec(url)
    client = build_client(request, options)
    try:
        response = client.get(request.request_uri)
    finally:
        client.close()

    logger.debug(f"REP GET {response.status_code} {format_payload(response_payload(response))}")
    if ResponseResult.from_response(response).is_rate_limited:
        raise BandwidthLimitExceeded(url=url, status_code=response.status_code)
    return response.content


def post(url: str, data: str | bytes, options: Options) -> ResponseResult:
    r"""Send a single POST request.

    The ``Connection: keep-alive`` header is always sent, otherwise the
    storage servers may reset the connection. The response is returned
    whatever its status code: classifying it is left to the caller.

    Args:
        url: The absolute URL to post to.
        data: The raw request body.
        options: The session options used to configure the client.

    Returns:
        The status code and body of the response.

    Raises:
        httpx.HTTPError: If the request fails at the transport level.

    Example:
        ```pycon
        >>> from storagenet.core import Options
        >>> from storagenet.http import post
        >>> result = post("https://httpbin.org/post", '[{"a":"us"}]', Options())  # doctest: +SKIP
        >>> result.status_code  # doctest: +SKIP
        200

        ```
    """
    request = RequestSpec(url, body=data)
    logger.debug(f"REQ POST {url} {format_payload(data)}")
    client = build_client(request, options)
    try:
        response = client.post(
            request.request_uri, content=data, headers={"Connection": "keep-alive"}
        )
    finally:
        client.close()

    logger.debug(f"REP {response.status_code} {format_payload(response_payload(response))}")
    return ResponseResult.from_response(response)
