# smart_attendance/app/core/exceptions.py
"""Application-level exceptions used across services.

Only infrastructure and caller problems are raised as exceptions. Problems
found inside a record (missing fields, bad formats, duplicates) are reported
as structured findings on a ``ValidationResult`` and never raised.

Each exception carries an explicit ``code`` and ``status_code`` so the HTTP
layer can translate it without knowing the concrete class, and is
serializable via ``to_dict`` for API responses and logs.
"""
from __future__ import annotations

from typing import Optional, Any, Dict, List
from datetime import datetime, timezone


class AppError(Exception):
    """Base application exception with structured metadata.

    Attributes
    ----------
    message
        Human readable message.
    code
        Machine friendly error code (snake_case).
    status_code
        Suggested HTTP status code for API responses.
    details
        Arbitrary extra data useful for debugging or UX.
    timestamp
        UTC ISO timestamp when the exception was created.
    cause
        Optional underlying exception instance.
    context
        Optional lightweight context dict (entity kind, record counts).
    """

    code: str = "app_error"
    status_code: int = 500

    def __init__(
        self,
        message: str = "An application error occurred",
        *,
        details: Optional[Any] = None,
        cause: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details
        self.cause = cause
        self.context = context or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        base = f"{self.__class__.__name__}({self.code}): {self.message}"
        if self.context:
            base += f" | context={self.context}"
        if self.details is not None:
            base += f" | details={self.details}"
        if self.cause is not None:
            base += f" | cause={repr(self.cause)}"
        return base

    def to_dict(self) -> Dict[str, Any]:
        """Return a serializable representation suitable for API responses."""
        return {
            "error": {
                "type": self.__class__.__name__,
                "code": self.code,
                "message": self.message,
                "status_code": self.status_code,
                "details": self.details,
                "context": self.context,
                "timestamp": self.timestamp,
            }
        }

    def with_context(self, **ctx: Any) -> "AppError":
        """Return self after extending the context dict. Useful for chaining.

        Example:
        raise err.with_context(entity_kind="student", record_count=25)
        """
        self.context.update({k: v for k, v in ctx.items() if v is not None})
        return self


class ValidationEngineError(AppError):
    """Base class for failures of the data entry validation engine itself."""

    code = "validation_engine_error"
    status_code = 500


class ReferenceDataLoadError(ValidationEngineError):
    """Raised when the reference snapshot cannot be read from the store.

    The whole validation call fails; there is no internal retry.
    """

    code = "reference_data_unavailable"
    status_code = 503

    def __init__(
        self,
        message: str = "Failed to load reference data for validation",
        *,
        collection: Optional[str] = None,
        details: Optional[Any] = None,
        cause: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details, cause=cause, context=context)
        if collection:
            self.context.setdefault("collection", collection)


class UnknownEntityKindError(ValidationEngineError):
    """Raised when a caller asks for an entity kind with no rule catalog."""

    code = "unknown_entity_kind"
    status_code = 400

    def __init__(
        self,
        entity_kind: Any = None,
        message: Optional[str] = None,
        *,
        allowed: Optional[List[str]] = None,
        details: Optional[Any] = None,
        cause: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        msg = message or (
            f"Type must be one of {', '.join(allowed)}, got '{entity_kind}'"
            if allowed
            else f"Unknown entity kind '{entity_kind}'"
        )
        super().__init__(msg, details=details, cause=cause, context=context)
        if entity_kind is not None:
            self.context.setdefault("entity_kind", str(entity_kind))
        if allowed:
            self.context.setdefault("allowed", allowed)


__all__ = [
    "AppError",
    "ValidationEngineError",
    "ReferenceDataLoadError",
    "UnknownEntityKindError",
]
