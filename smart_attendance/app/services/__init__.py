# smart_attendance/app/services/__init__.py
"""
Services package for the application.

This package contains the business logic services that read from the
database layer and provide functionalities to the API endpoints.
"""

from . import data_validation
from .data_validation import ValidationEngine, ReferenceDataLoader

__all__ = [
    "data_validation",
    "ValidationEngine",
    "ReferenceDataLoader",
]
