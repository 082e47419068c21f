"""Execution module for taskman.

Provides error classification, the retry executor and retryable wrappers.
"""

from taskman.core.execution.error_classifier import ErrorClassifier, is_retryable
from taskman.core.execution.retry_executor import RetryExecutor, with_retry
from taskman.core.execution.retryable import make_retryable, retryable

__all__ = [
    "ErrorClassifier",
    "is_retryable",
    "RetryExecutor",
    "with_retry",
    "make_retryable",
    "retryable",
]
