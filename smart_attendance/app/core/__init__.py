# smart_attendance/app/core/__init__.py

from ..config import get_settings
from .exceptions import (
    AppError,
    ValidationEngineError,
    ReferenceDataLoadError,
    UnknownEntityKindError,
)


__all__ = [
    "get_settings",  # Export the function, not a settings instance
    "AppError",
    "ValidationEngineError",
    "ReferenceDataLoadError",
    "UnknownEntityKindError",
]
