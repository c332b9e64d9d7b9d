r"""Exceptions raised by the storage transport layer.

Only the ``ServerError`` family is treated as fatal by the retry
executor. Any other exception, including the ``httpx`` transport errors,
is considered transient and retried.
"""

from __future__ import annotations

__all__ = ["BandwidthLimitExceeded", "ServerError", "StorageNetError"]


class StorageNetError(Exception):
    """Base class for all the exceptions of this package."""


class ServerError(StorageNetError):
    """Raised when the server signals a condition that retrying the same
    request cannot resolve.

    Args:
        message: The error message.
        url: The URL that was requested, if known.
        status_code: The HTTP status code of the response, if any.

    Example:
        ```pycon
        >>> from storagenet.exceptions import ServerError
        >>> error = ServerError("server refused the request", status_code=403)
        >>> error.status_code
        403

        ```
    """

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.url = url
        self.status_code = status_code


class BandwidthLimitExceeded(ServerError):
    """Raised when the server answers with the rate-limit status code
    and an empty body.

    Args:
        url: The URL that was requested, if known.
        status_code: The HTTP status code of the response.

    Example:
        ```pycon
        >>> from storagenet.exceptions import BandwidthLimitExceeded
        >>> error = BandwidthLimitExceeded(url="https://example.com/dl/abc")
        >>> str(error)
        'Bandwidth limit exceeded (status 509) for https://example.com/dl/abc'

        ```
    """

    def __init__(self, *, url: str | None = None, status_code: int = 509) -> None:
        message = f"Bandwidth limit exceeded (status {status_code})"
        if url is not None:
            message = f"{message} for {url}"
        super().__init__(message, url=url, status_code=status_code)
