"""Error classifier for taskman.

Decides whether a failed attempt is transient (retry) or fatal (propagate).
"""

import errno
from typing import Optional, Set

from taskman.core.retry_config import RetryPolicy

CONNECTION_CODES = frozenset({"ECONNRESET", "ETIMEDOUT"})
CONNECTION_ERRNOS = frozenset({errno.ECONNRESET, errno.ETIMEDOUT})


class ErrorClassifier:
    """Classifies errors as retryable or fatal under a retry policy.

    Static methods for stateless classification. Rules are checked in order
    and the first match wins:

    1. named kind in ``policy.retryable_error_kinds``
    2. status code in ``policy.retryable_status_codes``
    3. connection reset / timed out code (built in, not configurable)
    4. anything else is fatal
    """

    @staticmethod
    def error_kinds(error: BaseException) -> Set[str]:
        """Names an error answers to: its ``name`` attribute plus its class hierarchy."""
        kinds = {cls.__name__ for cls in type(error).__mro__}
        name = getattr(error, "name", None)
        if isinstance(name, str):
            kinds.add(name)
        return kinds

    @staticmethod
    def status_code(error: BaseException) -> Optional[int]:
        """HTTP-style status carried by the error, if any.

        Looks at ``status``, ``status_code`` and ``response.status_code``
        (httpx and requests errors) in that order.
        """
        candidates = (
            getattr(error, "status", None),
            getattr(error, "status_code", None),
            getattr(getattr(error, "response", None), "status_code", None),
        )
        for value in candidates:
            if isinstance(value, int) and not isinstance(value, bool):
                return value
        return None

    @staticmethod
    def is_connection_error(error: BaseException) -> bool:
        """True for connection reset / timed out, by string code or errno."""
        code = getattr(error, "code", None)
        if isinstance(code, str) and code in CONNECTION_CODES:
            return True
        return getattr(error, "errno", None) in CONNECTION_ERRNOS

    @staticmethod
    def is_retryable(error: BaseException, policy: RetryPolicy) -> bool:
        """Return True if the error is transient under the given policy.

        Args:
            error: Exception raised by the failed attempt
            policy: Effective retry policy for the call

        Returns:
            True to retry, False to propagate immediately
        """
        if ErrorClassifier.error_kinds(error) & policy.retryable_error_kinds:
            return True

        status = ErrorClassifier.status_code(error)
        if status is not None and status in policy.retryable_status_codes:
            return True

        if ErrorClassifier.is_connection_error(error):
            return True

        return False


def is_retryable(error: BaseException, policy: RetryPolicy) -> bool:
    """Module-level shortcut for ErrorClassifier.is_retryable."""
    return ErrorClassifier.is_retryable(error, policy)
