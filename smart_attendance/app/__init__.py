# smart_attendance/app/__init__.py

"""Main application package for the Smart Attendance data entry service."""

# Core
from .core import (
    AppError,
    ValidationEngineError,
    ReferenceDataLoadError,
    UnknownEntityKindError,
)

# Services
from .services import data_validation, ValidationEngine, ReferenceDataLoader

__all__ = [
    # Core
    "AppError",
    "ValidationEngineError",
    "ReferenceDataLoadError",
    "UnknownEntityKindError",
    # Services
    "data_validation",
    "ValidationEngine",
    "ReferenceDataLoader",
]
