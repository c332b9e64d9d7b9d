r"""Core configuration of the storage transport.

This module contains the session options, their defaults, and the
validation of the retry parameters.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_HTTP_OPEN_TIMEOUT",
    "DEFAULT_HTTP_READ_TIMEOUT",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_RETRY_INTERVAL",
    "HTTP_OPTION_PREFIX",
    "Options",
    "validate_retry_params",
]

from storagenet.core.config import (
    DEFAULT_HTTP_OPEN_TIMEOUT,
    DEFAULT_HTTP_READ_TIMEOUT,
    DEFAULT_MAX_RETRIES,
    DEFAULT_RETRY_INTERVAL,
    HTTP_OPTION_PREFIX,
    Options,
)
from storagenet.core.validation import validate_retry_params
