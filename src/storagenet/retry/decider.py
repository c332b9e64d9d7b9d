r"""Classification of the errors raised by a retried operation.

Classification is by exclusion: only the ``ServerError`` family is
fatal, every other exception is transient.
"""

from __future__ import annotations

__all__ = ["ErrorKind", "classify_error", "should_retry"]

from enum import Enum

from storagenet.exceptions import ServerError


class ErrorKind(Enum):
    """Verdict of the error classification."""

    FATAL = "fatal"
    TRANSIENT = "transient"


def classify_error(error: Exception) -> ErrorKind:
    """Classify an error raised by a retried operation.

    Args:
        error: The exception to classify.

    Returns:
        ``ErrorKind.FATAL`` for the ``ServerError`` family,
        ``ErrorKind.TRANSIENT`` otherwise.

    Example:
        ```pycon
        >>> from storagenet.exceptions import BandwidthLimitExceeded
        >>> from storagenet.retry.decider import classify_error
        >>> classify_error(BandwidthLimitExceeded())
        <ErrorKind.FATAL: 'fatal'>
        >>> classify_error(TimeoutError("read timed out"))
        <ErrorKind.TRANSIENT: 'transient'>

        ```
    """
    if isinstance(error, ServerError):
        return ErrorKind.FATAL
    return ErrorKind.TRANSIENT


def should_retry(error: Exception, retries_left: int) -> bool:
    """Indicate if an operation should be attempted again.

    Args:
        error: The exception raised by the last attempt.
        retries_left: Number of retries left once this one is consumed.

    Returns:
        ``True`` if the error is transient and the retry budget is not
        exhausted, otherwise ``False``.
    """
    return classify_error(error) is ErrorKind.TRANSIENT and retries_left >= 0
