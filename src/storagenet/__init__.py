r"""storagenet - Resilient HTTP transport for a cloud-storage API client.

This package issues the GET and POST requests of a storage API client
over ``httpx``. It retries transient failures with a constant interval,
turns the rate-limit signal of the storage servers into a fatal
``BandwidthLimitExceeded`` error, and keeps binary or large payloads out
of the debug logs.

Key Features:
    - Bounded retry loop with a constant interval (``survive``)
    - Fatal ``ServerError`` family never retried
    - Per-request client configured from ``http_*`` options
      (proxy, timeouts, SSL verification, client certificate)
    - Explicit proxy settings take precedence over the environment
    - Truncated, binary-safe request/response traces at DEBUG level

Example:
    ```pycon
    >>> from storagenet import Options, StorageTransport
    >>> transport = StorageTransport(Options(max_retries=3, http_read_timeout=60))
    >>> content = transport.get_content_with_retry(
    ...     "https://httpbin.org/bytes/16"
    ... )  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "BandwidthLimitExceeded",
    "Options",
    "ResponseResult",
    "RetryExecutor",
    "ServerError",
    "StorageNetError",
    "StorageTransport",
    "__version__",
    "format_payload",
    "get_content",
    "post",
    "survive",
]

from importlib.metadata import PackageNotFoundError, version

from storagenet.client import StorageTransport
from storagenet.core.config import Options
from storagenet.exceptions import BandwidthLimitExceeded, ServerError, StorageNetError
from storagenet.http import ResponseResult, get_content, post
from storagenet.retry import RetryExecutor, survive
from storagenet.trace import format_payload

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
