"""taskman: bounded retry with exponential backoff for async operations."""

from taskman.core.errors import AppError, AuthError, DatabaseError, NetworkError, ValidationError
from taskman.core.execution import (
    ErrorClassifier,
    RetryExecutor,
    is_retryable,
    make_retryable,
    retryable,
    with_retry,
)
from taskman.core.logging import log_retry
from taskman.core.retry_config import DEFAULT_RETRY_POLICY, RetryPolicy, merge_policy

__all__ = [
    "AppError",
    "AuthError",
    "DatabaseError",
    "NetworkError",
    "ValidationError",
    "ErrorClassifier",
    "RetryExecutor",
    "is_retryable",
    "make_retryable",
    "retryable",
    "with_retry",
    "log_retry",
    "DEFAULT_RETRY_POLICY",
    "RetryPolicy",
    "merge_policy",
]
