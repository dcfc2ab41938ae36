# smart_attendance/app/services/data_validation/validation_types.py
"""
Shared types for the data entry validation engine: entity kinds, severities,
finding codes, record shapes and the per-record result container.
"""

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, TypedDict, Union

from ...core.exceptions import UnknownEntityKindError


class EntityKind(str, enum.Enum):
    student = "student"
    teacher = "teacher"


class Severity(str, enum.Enum):
    """Ordered by blocking power; only ``error`` invalidates a record."""

    error = "error"
    warning = "warning"
    info = "info"


class ErrorCode:
    REQUIRED_FIELD_MISSING = "REQUIRED_FIELD_MISSING"
    INVALID_FORMAT = "INVALID_FORMAT"
    DUPLICATE_VALUE = "DUPLICATE_VALUE"
    INVALID_REFERENCE = "INVALID_REFERENCE"
    CUSTOM_VALIDATION_FAILED = "CUSTOM_VALIDATION_FAILED"
    AUTO_CORRECTION = "AUTO_CORRECTION"
    SUSPICIOUS_EMAIL_DOMAIN = "SUSPICIOUS_EMAIL_DOMAIN"
    SUSPICIOUS_SEMESTER = "SUSPICIOUS_SEMESTER"
    IDENTICAL_CONTACTS = "IDENTICAL_CONTACTS"
    BATCH_DUPLICATE_EMAIL = "BATCH_DUPLICATE_EMAIL"
    BATCH_DUPLICATE_ROLL_NUMBER = "BATCH_DUPLICATE_ROLL_NUMBER"


FieldValue = Union[str, int, float, None]


class StudentRecord(TypedDict, total=False):
    name: FieldValue
    roll_number: FieldValue
    email: FieldValue
    department: FieldValue
    section: FieldValue
    semester: FieldValue
    contact_number: FieldValue
    parent_contact: FieldValue


class TeacherRecord(TypedDict, total=False):
    name: FieldValue
    email: FieldValue
    department: FieldValue
    employee_id: FieldValue


Record = Union[StudentRecord, TeacherRecord, Dict[str, Any]]


@dataclass(frozen=True)
class ValidationError:
    """A single finding about one field of one record."""

    field: str
    value: Any
    message: str
    severity: Severity
    code: str
    suggestions: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field": self.field,
            "value": self.value,
            "message": self.message,
            "severity": self.severity.value,
            "code": self.code,
            "suggestions": list(self.suggestions),
        }


@dataclass
class ValidationResult:
    """Outcome of validating one record.

    ``is_valid`` is derived from ``errors`` rather than stored, so findings
    appended after the per-record pass (batch duplicates) are always
    reflected.
    """

    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[ValidationError] = field(default_factory=list)
    suggestions: List[ValidationError] = field(default_factory=list)
    corrected_data: Optional[Dict[str, Any]] = None

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add(self, finding: ValidationError) -> None:
        """Route a finding to the list matching its severity."""
        if finding.severity is Severity.error:
            self.errors.append(finding)
        elif finding.severity is Severity.warning:
            self.warnings.append(finding)
        else:
            self.suggestions.append(finding)

    def extend(self, findings: "FieldFindings") -> None:
        self.errors.extend(findings.errors)
        self.warnings.extend(findings.warnings)
        self.suggestions.extend(findings.suggestions)

    def codes(self) -> List[str]:
        return [f.code for f in self.errors + self.warnings + self.suggestions]

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "is_valid": self.is_valid,
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
            "suggestions": [s.to_dict() for s in self.suggestions],
        }
        if self.corrected_data is not None:
            data["corrected_data"] = dict(self.corrected_data)
        return data


@dataclass
class FieldFindings:
    """Findings produced by evaluating one rule against one field."""

    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[ValidationError] = field(default_factory=list)
    suggestions: List[ValidationError] = field(default_factory=list)

    def add(self, finding: ValidationError) -> None:
        if finding.severity is Severity.error:
            self.errors.append(finding)
        elif finding.severity is Severity.warning:
            self.warnings.append(finding)
        else:
            self.suggestions.append(finding)

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class ValidationOptions:
    """Tunables of the engine. Defaults mirror the shipped configuration."""

    fuzzy_match_threshold: float = 0.6
    fuzzy_match_limit: int = 3
    default_email_domain: str = "university.edu"
    institutional_email_markers: Tuple[str, ...] = ("university", "edu")
    semester_warning_ceiling: int = 8
    phone_min_digits: int = 10

    @classmethod
    def from_settings(cls, settings: Any) -> "ValidationOptions":
        return cls(
            fuzzy_match_threshold=settings.FUZZY_MATCH_THRESHOLD,
            fuzzy_match_limit=settings.FUZZY_MATCH_LIMIT,
            default_email_domain=settings.DEFAULT_EMAIL_DOMAIN,
            institutional_email_markers=settings.institutional_email_markers,
            semester_warning_ceiling=settings.SEMESTER_WARNING_CEILING,
            phone_min_digits=settings.PHONE_MIN_DIGITS,
        )


def coerce_entity_kind(entity_kind: Union[str, EntityKind]) -> EntityKind:
    """Turn a caller supplied kind into an EntityKind or raise."""
    if isinstance(entity_kind, EntityKind):
        return entity_kind
    try:
        return EntityKind(str(entity_kind).strip().lower())
    except ValueError as e:
        raise UnknownEntityKindError(
            entity_kind, allowed=[k.value for k in EntityKind], cause=e
        ) from e


def is_present(value: Any) -> bool:
    """True for any value other than None and the empty string."""
    return value is not None and value != ""
