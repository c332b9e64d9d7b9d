r"""Retry package.

Public API:
    - ErrorKind: Verdict of the error classification
    - classify_error: Split errors between fatal and transient
    - should_retry: Decide whether to run an operation again
    - RetryExecutor: Bounded retry loop with a constant interval
    - survive: Functional shortcut of RetryExecutor
"""

from __future__ import annotations

__all__ = ["ErrorKind", "RetryExecutor", "classify_error", "should_retry", "survive"]

from storagenet.retry.decider import ErrorKind, classify_error, should_retry
from storagenet.retry.executor import RetryExecutor, survive
