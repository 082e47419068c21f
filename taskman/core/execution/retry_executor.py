"""Retry executor for taskman.

Runs a fallible async operation under a retry policy with bounded exponential backoff.
"""

import asyncio
import inspect
from typing import Awaitable, Callable, Optional, TypeVar

from taskman.config import config
from taskman.core.execution.error_classifier import ErrorClassifier
from taskman.core.logging import logger
from taskman.core.retry_config import (
    DEFAULT_RETRY_POLICY,
    PolicyOverrides,
    RetryPolicy,
    merge_policy,
)

T = TypeVar("T")

Operation = Callable[[], Awaitable[T]]
Sleeper = Callable[[float], Awaitable[None]]


class RetryExecutor:
    """Executes async operations with automatic retry on transient failures.

    Attempts run strictly one after another. A call holds its own effective
    policy and attempt counter, so concurrent calls on one executor share
    nothing mutable.

    Operations are re-run as-is on retry: callers must only wrap operations
    that are safe to repeat (reads, idempotent writes).
    """

    def __init__(self, policy: Optional[RetryPolicy] = None, sleep: Sleeper = asyncio.sleep):
        """Initialize RetryExecutor with a base policy.

        Args:
            policy: Base policy that per-call overrides are merged onto
                (defaults to DEFAULT_RETRY_POLICY)
            sleep: Awaitable sleep used between attempts
        """
        self.policy = policy or DEFAULT_RETRY_POLICY
        self.sleep = sleep

    @classmethod
    def from_config(cls, sleep: Sleeper = asyncio.sleep) -> "RetryExecutor":
        """Build an executor whose base policy includes TASKMAN_RETRY_* overrides."""
        return cls(merge_policy(DEFAULT_RETRY_POLICY, config.retry_overrides()), sleep=sleep)

    async def execute(self, operation: Operation, overrides: PolicyOverrides = None) -> T:
        """Run operation until it succeeds, fails fatally, or the budget runs out.

        Delay before retry k (k = retries already made) is
        min(initial_delay * backoff_factor ^ k, max_delay). After each delay
        the policy's on_retry observer, if any, gets the previous error and
        the index of the attempt about to start.

        Args:
            operation: Zero-argument callable returning an awaitable
            overrides: Partial policy merged over the base policy for this call

        Returns:
            Result of the first successful attempt

        Raises:
            The original exception of a fatal failure or of the final attempt
        """
        policy = merge_policy(self.policy, overrides)
        last_error: Optional[Exception] = None

        for attempt in range(policy.max_retries + 1):
            if attempt > 0:
                delay = policy.delay_for(attempt - 1)
                logger.debug(
                    "retry_scheduled",
                    attempt=attempt,
                    delay=delay,
                    error_type=type(last_error).__name__,
                )
                await self.sleep(delay)

                if policy.on_retry is not None:
                    outcome = policy.on_retry(last_error, attempt)
                    if inspect.isawaitable(outcome):
                        await outcome

            try:
                return await operation()
            except Exception as error:
                last_error = error

                if not ErrorClassifier.is_retryable(error, policy):
                    logger.debug("retry_aborted", attempt=attempt, error_type=type(error).__name__)
                    raise

                if attempt >= policy.max_retries:
                    logger.debug("retry_exhausted", attempts=attempt + 1, error_type=type(error).__name__)
                    raise

        # Unreachable: the final attempt either returns or raises
        raise RuntimeError("retry loop exited without a result")


_default_executor = RetryExecutor()


async def with_retry(operation: Operation, overrides: PolicyOverrides = None) -> T:
    """Run operation with the default retry policy plus overrides."""
    return await _default_executor.execute(operation, overrides)
