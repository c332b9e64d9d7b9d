r"""Callback data structures for observing the retry loop.

Example:
    ```pycon
    >>> from storagenet.callbacks import RetryInfo
    >>> from storagenet.retry import survive
    >>> def log_retry(retry_info: RetryInfo) -> None:
    ...     print(f"Retry {retry_info.attempt}, {retry_info.retries_left} left")
    ...
    >>> survive(lambda: 42, max_retries=3, retry_interval=1.0, on_retry=log_retry)
    42

    ```
"""

from __future__ import annotations

__all__ = ["RetryInfo", "invoke_on_retry"]

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass
class RetryInfo:
    """Information passed to the on_retry callback.

    Attributes:
        attempt: The number of the attempt about to start (1-indexed).
            The first retry is attempt 2.
        max_retries: Maximum number of retry attempts configured.
        retries_left: Number of retries left after this one.
        wait_time: The sleep time in seconds before this retry.
        error: The exception that triggered the retry.
    """

    attempt: int
    max_retries: int
    retries_left: int
    wait_time: float
    error: Exception


def invoke_on_retry(
    on_retry: Callable[[RetryInfo], None] | None,
    *,
    attempt: int,
    max_retries: int,
    retries_left: int,
    wait_time: float,
    error: Exception,
) -> None:
    """Invoke the on_retry callback if it is provided.

    Args:
        on_retry: Optional callback to invoke.
        attempt: The number of the attempt about to start (1-indexed).
        max_retries: Maximum number of retry attempts.
        retries_left: Number of retries left after this one.
        wait_time: The sleep time in seconds before this retry.
        error: The exception that triggered the retry.
    """
    if on_retry is None:
        return
    on_retry(
        RetryInfo(
            attempt=attempt,
            max_retries=max_retries,
            retries_left=retries_left,
            wait_time=wait_time,
            error=error,
        )
    )
