# smart_attendance/__init__.py

"""
Backend package for the Smart Attendance system.
Exposes the data entry validation engine and its supporting components.
"""

from .app import (
    AppError,
    ValidationEngineError,
    ReferenceDataLoadError,
    UnknownEntityKindError,
    data_validation,
    ValidationEngine,
    ReferenceDataLoader,
)

from .app.database import (
    DatabaseManager,
    db_manager,
    get_db,
    init_db,
    check_db_health,
)

__version__ = "1.0.0"

__all__ = [
    # Errors
    "AppError",
    "ValidationEngineError",
    "ReferenceDataLoadError",
    "UnknownEntityKindError",
    # Validation
    "data_validation",
    "ValidationEngine",
    "ReferenceDataLoader",
    # Database
    "DatabaseManager",
    "db_manager",
    "get_db",
    "init_db",
    "check_db_health",
]
