"""Retry policy for taskman.

Immutable configuration for retry behavior, with documented defaults and a
single validated merge of per-call overrides.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Callable, FrozenSet, Mapping, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

RetryObserver = Callable[[Exception, int], Any]

DEFAULT_RETRYABLE_STATUS_CODES: FrozenSet[int] = frozenset({408, 429, 500, 502, 503, 504})
DEFAULT_RETRYABLE_ERROR_KINDS: FrozenSet[str] = frozenset({"NetworkError", "TimeoutError"})


@dataclass(frozen=True)
class RetryPolicy:
    """Configuration for retry behavior.

    Total attempts are ``max_retries + 1``. Delays are in seconds; the k-th
    retry waits ``min(initial_delay * backoff_factor ** k, max_delay)``.
    """

    max_retries: int = 3
    initial_delay: float = 0.3  # seconds
    max_delay: float = 5.0  # cap per delay
    backoff_factor: float = 2.0
    retryable_status_codes: FrozenSet[int] = DEFAULT_RETRYABLE_STATUS_CODES
    retryable_error_kinds: FrozenSet[str] = DEFAULT_RETRYABLE_ERROR_KINDS
    on_retry: Optional[RetryObserver] = field(default=None, compare=False)

    def __post_init__(self):
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.initial_delay < 0 or self.max_delay < 0:
            raise ValueError("delays must be >= 0")
        if self.backoff_factor < 1:
            raise ValueError("backoff_factor must be >= 1")
        # Callers commonly pass lists; store them frozen
        object.__setattr__(self, "retryable_status_codes", frozenset(self.retryable_status_codes))
        object.__setattr__(self, "retryable_error_kinds", frozenset(self.retryable_error_kinds))

    def delay_for(self, retry_count: int) -> float:
        """Backoff delay before a retry, given how many retries already ran."""
        try:
            raw = self.initial_delay * (self.backoff_factor**retry_count)
        except OverflowError:
            return self.max_delay
        return min(raw, self.max_delay)


DEFAULT_RETRY_POLICY = RetryPolicy()


class RetryOverrides(BaseModel):
    """Partial retry policy supplied by a caller.

    Accepts the snake_case field names as well as the camelCase option names
    used by the web client (``maxRetries``, ``retryableErrorKinds`` or
    ``retryableErrors``, ...).
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    max_retries: Optional[int] = Field(None, ge=0, alias="maxRetries")
    initial_delay: Optional[float] = Field(None, ge=0.0, alias="initialDelay")
    max_delay: Optional[float] = Field(None, ge=0.0, alias="maxDelay")
    backoff_factor: Optional[float] = Field(None, ge=1.0, alias="backoffFactor")
    retryable_status_codes: Optional[FrozenSet[int]] = Field(None, alias="retryableStatusCodes")
    retryable_error_kinds: Optional[FrozenSet[str]] = Field(
        None,
        validation_alias=AliasChoices("retryable_error_kinds", "retryableErrorKinds", "retryableErrors"),
    )
    on_retry: Optional[Callable[..., Any]] = Field(None, alias="onRetry")


PolicyOverrides = Union[RetryPolicy, Mapping[str, Any], None]


def merge_policy(base: RetryPolicy, overrides: PolicyOverrides = None) -> RetryPolicy:
    """Merge caller overrides onto a base policy.

    Args:
        base: Policy supplying every unspecified field
        overrides: None, a complete RetryPolicy (returned unchanged), or a
            mapping of partial overrides

    Returns:
        Effective RetryPolicy for one call

    Raises:
        pydantic.ValidationError: If an override is unknown or out of range
    """
    if overrides is None:
        return base
    if isinstance(overrides, RetryPolicy):
        return overrides

    parsed = RetryOverrides.model_validate(dict(overrides))
    changes = {
        name: value
        for name, value in parsed.model_dump(exclude_unset=True).items()
        # None keeps the base value, except for the observer which may be cleared
        if value is not None or name == "on_retry"
    }
    if not changes:
        return base
    return replace(base, **changes)

