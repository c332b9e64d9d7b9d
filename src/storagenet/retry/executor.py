r"""Bounded retry loop with a constant interval between attempts."""

from __future__ import annotations

__all__ = ["RetryExecutor", "survive"]

import logging
import time
from typing import TYPE_CHECKING, Generic, TypeVar

from storagenet.callbacks import invoke_on_retry
from storagenet.core.config import DEFAULT_MAX_RETRIES, DEFAULT_RETRY_INTERVAL
from storagenet.core.validation import validate_retry_params
from storagenet.retry.decider import should_retry

if TYPE_CHECKING:
    from collections.abc import Callable

    from storagenet.callbacks import RetryInfo

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class RetryExecutor(Generic[T]):
    """Run an operation and run it again when it fails with a transient
    error.

    Each attempt is a complete call of the operation. ``ServerError``
    exceptions are raised at once without sleeping. Any other exception
    is retried up to ``max_retries`` times, sleeping ``retry_interval``
    seconds before each retry. When the budget is exhausted, the last
    exception is raised unchanged.

    Args:
        max_retries: Maximum number of retry attempts. Must be >= 0.
            ``0`` means a single attempt.
        retry_interval: Seconds to sleep before each retry. Must be >= 0.
        on_retry: Optional callback invoked before each retry, after the
            sleep.

    Raises:
        ValueError: If max_retries or retry_interval are negative.

    Example:
        ```pycon
        >>> from storagenet.retry import RetryExecutor
        >>> executor = RetryExecutor(max_retries=2, retry_interval=0.0)
        >>> executor.execute(lambda: "done")
        'done'

        ```
    """

    def __init__(
        self,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_interval: float = DEFAULT_RETRY_INTERVAL,
        on_retry: Callable[[RetryInfo], None] | None = None,
    ) -> None:
        validate_retry_params(max_retries=max_retries, retry_interval=retry_interval)
        self.max_retries = max_retries
        self.retry_interval = retry_interval
        self.on_retry = on_retry

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(max_retries={self.max_retries}, "
            f"retry_interval={self.retry_interval})"
        )

    def execute(self, operation: Callable[[], T]) -> T:
        """Run the operation until it succeeds or fails for good.

        Args:
            operation: A callable without argument performing one attempt.

        Returns:
            The value returned by the first successful attempt.

        Raises:
            ServerError: As soon as an attempt raises it.
            Exception: The exception of the last attempt once the retry
                budget is exhausted.
        """
        retries = self.max_retries
        attempt = 1
        while True:
            try:
                return operation()
            except Exception as exc:
                retries -= 1
                if not should_retry(exc, retries):
                    raise

                logger.debug(f"[{type(exc).__name__}] {exc}. {retries} attempt(s) left.")
                time.sleep(self.retry_interval)
                attempt += 1
                invoke_on_retry(
                    self.on_retry,
                    attempt=attempt,
                    max_retries=self.max_retries,
                    retries_left=retries,
                    wait_time=self.retry_interval,
                    error=exc,
                )


def survive(
    operation: Callable[[], T],
    *,
    max_retries: int = DEFAULT_MAX_RETRIES,
    retry_interval: float = DEFAULT_RETRY_INTERVAL,
    on_retry: Callable[[RetryInfo], None] | None = None,
) -> T:
    r"""Run an operation, retrying it on transient errors.

    This is a shortcut for ``RetryExecutor(...).execute(operation)``.

    Args:
        operation: A callable without argument performing one attempt.
        max_retries: Maximum number of retry attempts. Must be >= 0.
        retry_interval: Seconds to sleep before each retry. Must be >= 0.
        on_retry: Optional callback invoked before each retry.

    Returns:
        The value returned by the first successful attempt.

    Raises:
        ServerError: As soon as an attempt raises it.
        Exception: The exception of the last attempt once the retry
            budget is exhausted.
        ValueError: If max_retries or retry_interval are negative.

    Example:
        ```pycon
        >>> from storagenet.core import Options
        >>> from storagenet.http import get_content
        >>> from storagenet.retry import survive
        >>> options = Options(max_retries=3, retry_interval=1.0)
        >>> content = survive(
        ...     lambda: get_content("https://httpbin.org/bytes/16", options),
        ...     max_retries=options.max_retries,
        ...     retry_interval=options.retry_interval,
        ... )  # doctest: +SKIP

        ```
    """
    executor: RetryExecutor[T] = RetryExecutor(
        max_retries=max_retries, retry_interval=retry_interval, on_retry=on_retry
    )
    return executor.execute(operation)
