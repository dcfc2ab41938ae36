# smart_attendance/app/services/data_validation/__init__.py
"""
Data Validation Package for the Smart Attendance system.
Validates, auto-corrects and de-duplicates student and teacher records
submitted through bulk data entry before they are persisted.
"""

from .validation_types import (
    EntityKind,
    Severity,
    ErrorCode,
    StudentRecord,
    TeacherRecord,
    ValidationError,
    ValidationResult,
    ValidationOptions,
)
from .reference_data import (
    ReferenceSnapshot,
    ReferenceDataLoader,
    StaticReferenceSource,
)
from .similarity import calculate_similarity, find_fuzzy_matches
from .format_helpers import generate_format_suggestion, auto_correct_format
from .rule_catalogs import (
    RuleKind,
    ValidationRule,
    CustomRuleOutcome,
    STUDENT_RULES,
    TEACHER_RULES,
    get_rules,
    describe_rules,
)
from .field_rules import evaluate_field
from .cross_field import perform_cross_field_validation, register_cross_field_check
from .batch_validator import (
    BatchValidationSummary,
    apply_batch_duplicate_checks,
    summarize_batch,
)
from .validation_engine import ValidationEngine

__all__ = [
    # Engine
    "ValidationEngine",
    # Types
    "EntityKind",
    "Severity",
    "ErrorCode",
    "StudentRecord",
    "TeacherRecord",
    "ValidationError",
    "ValidationResult",
    "ValidationOptions",
    # Reference data
    "ReferenceSnapshot",
    "ReferenceDataLoader",
    "StaticReferenceSource",
    # Rules
    "RuleKind",
    "ValidationRule",
    "CustomRuleOutcome",
    "STUDENT_RULES",
    "TEACHER_RULES",
    "get_rules",
    "describe_rules",
    "evaluate_field",
    # Re-usable helpers
    "calculate_similarity",
    "find_fuzzy_matches",
    "generate_format_suggestion",
    "auto_correct_format",
    "perform_cross_field_validation",
    "register_cross_field_check",
    # Batch
    "BatchValidationSummary",
    "apply_batch_duplicate_checks",
    "summarize_batch",
]
