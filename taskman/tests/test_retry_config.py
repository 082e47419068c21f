"""Unit tests for retry policy defaults and override merging."""

import pytest
from pydantic import ValidationError

from taskman.core.retry_config import DEFAULT_RETRY_POLICY, RetryPolicy, merge_policy


class TestRetryPolicyDefaults:
    """Test default policy values."""

    def test_defaults(self):
        """Test documented defaults."""
        policy = RetryPolicy()

        assert policy.max_retries == 3
        assert policy.initial_delay == 0.3
        assert policy.max_delay == 5.0
        assert policy.backoff_factor == 2.0
        assert policy.retryable_status_codes == frozenset({408, 429, 500, 502, 503, 504})
        assert policy.retryable_error_kinds == frozenset({"NetworkError", "TimeoutError"})
        assert policy.on_retry is None

    def test_policy_is_immutable(self):
        """Test policy fields cannot be reassigned."""
        with pytest.raises(AttributeError):
            DEFAULT_RETRY_POLICY.max_retries = 10

    def test_lists_are_frozen(self):
        """Test list arguments are stored as frozensets."""
        policy = RetryPolicy(retryable_status_codes=[503], retryable_error_kinds=["Boom"])

        assert policy.retryable_status_codes == frozenset({503})
        assert policy.retryable_error_kinds == frozenset({"Boom"})

    @pytest.mark.parametrize(
        "kwargs",
        [{"max_retries": -1}, {"initial_delay": -0.1}, {"max_delay": -1}, {"backoff_factor": 0.5}],
    )
    def test_invalid_values_rejected(self, kwargs):
        """Test out-of-range values raise ValueError."""
        with pytest.raises(ValueError):
            RetryPolicy(**kwargs)


class TestBackoffDelay:
    """Test exponential backoff computation."""

    def test_default_delays(self):
        """Test defaults give 0.3, 0.6, 1.2 for the first three retries."""
        delays = [DEFAULT_RETRY_POLICY.delay_for(k) for k in range(3)]

        assert delays == pytest.approx([0.3, 0.6, 1.2])

    def test_first_retry_waits_initial_delay(self):
        """Test the first retry is not multiplied by the backoff factor."""
        policy = RetryPolicy(initial_delay=1.0, backoff_factor=10.0)

        assert policy.delay_for(0) == 1.0

    def test_delay_clamped_at_max_delay(self):
        """Test large retry counts are capped."""
        assert DEFAULT_RETRY_POLICY.delay_for(5) == 5.0
        assert DEFAULT_RETRY_POLICY.delay_for(50) == 5.0

    def test_huge_retry_count_clamped(self):
        """Test powers past the float range clamp instead of overflowing."""
        policy = RetryPolicy(backoff_factor=10.0, max_delay=1.0)

        assert policy.delay_for(400) == 1.0
        assert DEFAULT_RETRY_POLICY.delay_for(2000) == 5.0

    def test_factor_one_is_constant(self):
        """Test backoff_factor of 1 keeps a constant delay."""
        policy = RetryPolicy(initial_delay=0.5, backoff_factor=1.0)

        assert [policy.delay_for(k) for k in range(4)] == [0.5, 0.5, 0.5, 0.5]


class TestMergePolicy:
    """Test merging overrides onto a base policy."""

    def test_none_returns_base(self):
        """Test no overrides keeps the base policy."""
        assert merge_policy(DEFAULT_RETRY_POLICY, None) is DEFAULT_RETRY_POLICY

    def test_complete_policy_used_as_is(self):
        """Test a RetryPolicy override replaces the base."""
        policy = RetryPolicy(max_retries=7)

        assert merge_policy(DEFAULT_RETRY_POLICY, policy) is policy

    def test_partial_override_keeps_other_fields(self):
        """Test unspecified fields keep base values."""
        merged = merge_policy(DEFAULT_RETRY_POLICY, {"max_retries": 2, "initial_delay": 0.1})

        assert merged.max_retries == 2
        assert merged.initial_delay == 0.1
        assert merged.max_delay == 5.0
        assert merged.backoff_factor == 2.0
        assert merged.retryable_status_codes == DEFAULT_RETRY_POLICY.retryable_status_codes

    def test_merge_does_not_mutate_base(self):
        """Test the base policy is left unchanged."""
        merge_policy(DEFAULT_RETRY_POLICY, {"max_retries": 9})

        assert DEFAULT_RETRY_POLICY.max_retries == 3

    def test_camel_case_aliases(self):
        """Test web-client option names are accepted."""
        observer = lambda error, attempt: None  # noqa: E731
        merged = merge_policy(
            DEFAULT_RETRY_POLICY,
            {
                "maxRetries": 1,
                "initialDelay": 0.05,
                "maxDelay": 1,
                "backoffFactor": 3,
                "retryableStatusCodes": [503],
                "retryableErrors": ["FlakyError"],
                "onRetry": observer,
            },
        )

        assert merged.max_retries == 1
        assert merged.initial_delay == 0.05
        assert merged.max_delay == 1.0
        assert merged.backoff_factor == 3.0
        assert merged.retryable_status_codes == frozenset({503})
        assert merged.retryable_error_kinds == frozenset({"FlakyError"})
        assert merged.on_retry is observer

    @pytest.mark.parametrize("key", ["retryable_error_kinds", "retryableErrorKinds", "retryableErrors"])
    def test_error_kinds_key_spellings(self, key):
        """Test every accepted spelling of the kinds field."""
        merged = merge_policy(DEFAULT_RETRY_POLICY, {key: ["FlakyError"]})

        assert merged.retryable_error_kinds == frozenset({"FlakyError"})

    def test_string_values_are_coerced(self):
        """Test values read from the environment are coerced."""
        merged = merge_policy(DEFAULT_RETRY_POLICY, {"max_retries": "5", "max_delay": "2.5"})

        assert merged.max_retries == 5
        assert merged.max_delay == 2.5

    def test_none_value_keeps_base(self):
        """Test an explicit None falls back to the base value."""
        merged = merge_policy(DEFAULT_RETRY_POLICY, {"max_delay": None})

        assert merged.max_delay == 5.0

    def test_unknown_key_rejected(self):
        """Test typos in override names raise."""
        with pytest.raises(ValidationError):
            merge_policy(DEFAULT_RETRY_POLICY, {"max_retry": 2})

    @pytest.mark.parametrize(
        "overrides",
        [{"max_retries": -1}, {"initial_delay": -1}, {"backoff_factor": 0.9}, {"on_retry": "log"}],
    )
    def test_invalid_override_rejected(self, overrides):
        """Test out-of-range overrides raise ValidationError."""
        with pytest.raises(ValidationError):
            merge_policy(DEFAULT_RETRY_POLICY, overrides)
