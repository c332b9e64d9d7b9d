r"""Parameter validation utilities for the transport options.

This module provides validation functions to ensure the retry
parameters meet the required constraints before they are used by the
retry executor.
"""

from __future__ import annotations

__all__ = ["validate_retry_params"]


def validate_retry_params(max_retries: int, retry_interval: float) -> None:
    """Validate retry parameters.

    Args:
        max_retries: Maximum number of retry attempts for failed operations.
            Must be >= 0. A value of 0 means no retries (only the initial
            attempt).
        retry_interval: Seconds to sleep between two attempts. Must be >= 0.

    Raises:
        ValueError: If max_retries or retry_interval are negative.

    Example:
        ```pycon
        >>> from storagenet.core import validate_retry_params
        >>> validate_retry_params(max_retries=3, retry_interval=1.0)
        >>> validate_retry_params(max_retries=0, retry_interval=0.0)
        >>> validate_retry_params(max_retries=-1, retry_interval=1.0)  # doctest: +SKIP

        ```
    """
    if max_retries < 0:
        msg = f"max_retries must be >= 0, got {max_retries}"
        raise ValueError(msg)
    if retry_interval < 0:
        msg = f"retry_interval must be >= 0, got {retry_interval}"
        raise ValueError(msg)
