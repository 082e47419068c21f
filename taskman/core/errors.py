"""Application error types for taskman.

Errors carry the fields the retry classifier reads: a named kind (``name``),
an HTTP-style ``status`` and a low-level ``code``.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class AppError(Exception):
    """Base class for all application errors."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        name: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code
        self.context = context or {}
        self.name = name or type(self).__name__
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict representation for structured logging."""
        return {
            "name": self.name,
            "message": self.message,
            "status": self.status,
            "code": self.code,
            "context": self.context,
            "timestamp": self.timestamp,
        }


class NetworkError(AppError):
    """Network/API failure. Retryable by default through its kind."""


class DatabaseError(AppError):
    """Database query or write failure."""

    @classmethod
    def from_api_error(cls, error: Exception) -> "DatabaseError":
        """Build from a postgrest APIError, keeping its code and details.

        The caller is expected to ``raise ... from error`` so the original
        stays reachable as ``__cause__``.
        """
        message = getattr(error, "message", None) or str(error)
        code = getattr(error, "code", None)
        context = {}
        for key in ("details", "hint"):
            value = getattr(error, key, None)
            if value:
                context[key] = value
        return cls(message, code=str(code) if code is not None else None, context=context)


class AuthError(AppError):
    """Authentication or permission failure."""


class ValidationError(AppError):
    """Invalid input supplied by a caller."""
