r"""Session object bundling the options and the HTTP operations.

This module provides ``StorageTransport``, the object a storage API
client holds for its whole session. It owns the read-only ``Options``
and exposes the single-shot HTTP operations and the retry loop
configured from them.
"""

from __future__ import annotations

__all__ = ["StorageTransport"]

from typing import TYPE_CHECKING, TypeVar

from storagenet import http
from storagenet.core.config import Options
from storagenet.retry import survive

if TYPE_CHECKING:
    from collections.abc import Callable

    from storagenet.callbacks import RetryInfo
    from storagenet.http import ResponseResult

T = TypeVar("T")


class StorageTransport:
    r"""HTTP transport of a storage API client session.

    The options are shared by every call and never mutated, so a single
    instance can be used from several threads. Every call builds and
    closes its own HTTP client.

    Args:
        options: The session options. If ``None``, default ``Options``
            are used.
        on_retry: Optional callback invoked before each retry of
            ``survive``.

    Example:
        ```pycon
        >>> from storagenet import Options, StorageTransport
        >>> transport = StorageTransport(Options(max_retries=5, retry_interval=1.0))
        >>> transport.options.max_retries
        5
        >>> result = transport.survive(  # doctest: +SKIP
        ...     lambda: transport.post("https://g.api.example.com/cs?id=1", '[{"a":"us"}]')
        ... )

        ```
    """

    def __init__(
        self,
        options: Options | None = None,
        *,
        on_retry: Callable[[RetryInfo], None] | None = None,
    ) -> None:
        self._options: Options = options or Options()
        self._on_retry = on_retry

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(options={self._options!r})"

    @property
    def options(self) -> Options:
        return self._options

    def survive(self, operation: Callable[[], T]) -> T:
        """Run an operation, retrying it on transient errors with the
        session retry options.

        Args:
            operation: A callable without argument performing one attempt.

        Returns:
            The value returned by the first successful attempt.

        Raises:
            ServerError: As soon as an attempt raises it.
            Exception: The exception of the last attempt once the retry
                budget is exhausted.
        """
        return survive(
            operation,
            max_retries=self._options.max_retries,
            retry_interval=self._options.retry_interval,
            on_retry=self._on_retry,
        )

    def get_content(self, url: str) -> bytes:
        """Download the body of a URL with a single GET request.

        See ``storagenet.http.get_content``.
        """
        return http.get_content(url, self._options)

    def post(self, url: str, data: str | bytes) -> ResponseResult:
        """Send a single POST request.

        See ``storagenet.http.post``.
        """
        return http.post(url, data, self._options)

    def get_content_with_retry(self, url: str) -> bytes:
        """Download the body of a URL, retrying transient failures."""
        return self.survive(lambda: self.get_content(url))

    def post_with_retry(self, url: str, data: str | bytes) -> ResponseResult:
        """Send a POST request, retrying transient failures."""
        return self.survive(lambda: self.post(url, data))
