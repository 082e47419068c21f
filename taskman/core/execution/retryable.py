"""Retry-enabled function wrappers for taskman.

Wraps async functions so every call runs through the retry executor.
"""

from functools import wraps
from typing import Awaitable, Callable, Optional

from taskman.core.execution.retry_executor import RetryExecutor, _default_executor
from taskman.core.retry_config import PolicyOverrides


def make_retryable(
    fn: Callable[..., Awaitable],
    overrides: PolicyOverrides = None,
    executor: Optional[RetryExecutor] = None,
) -> Callable[..., Awaitable]:
    """Return fn with retry behavior built in.

    The wrapper keeps fn's signature. Each call closes over its own arguments
    and gets a fresh policy merge and attempt budget.

    Args:
        fn: Async function to wrap
        overrides: Partial retry policy applied to every call
        executor: Executor to delegate to (defaults to the shared default executor)

    Returns:
        Async function with the same signature as fn
    """
    runner = executor or _default_executor

    @wraps(fn)
    async def wrapper(*args, **kwargs):
        return await runner.execute(lambda: fn(*args, **kwargs), overrides)

    return wrapper


def retryable(executor: Optional[RetryExecutor] = None, **overrides):
    """Decorator form of make_retryable.

    Usage:
        @retryable(max_retries=2, retryable_status_codes=[503])
        async def fetch_tasks(user_id): ...
    """
    if executor is not None and not isinstance(executor, RetryExecutor):
        raise TypeError("retryable must be called with keyword arguments: @retryable(...)")

    def decorator(fn: Callable[..., Awaitable]):
        return make_retryable(fn, overrides or None, executor=executor)

    return decorator
