# smart_attendance/app/services/data_validation/rule_catalogs.py
"""
Rule catalogs for bulk data entry.

Each entity kind owns one ordered tuple of rule descriptors. Evaluation walks
the tuple in order; corrections made by an earlier rule are visible to later
ones through the corrected copy of the record.
"""

import enum
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Pattern, Tuple

from .format_helpers import as_text
from .reference_data import ReferenceSnapshot
from .validation_types import EntityKind, Severity, coerce_entity_kind


class RuleKind(str, enum.Enum):
    required = "required"
    format = "format"
    unique = "unique"
    reference = "reference"
    custom = "custom"


@dataclass(frozen=True)
class CustomRuleOutcome:
    is_valid: bool
    message: str = ""
    severity: Optional[Severity] = None
    code: Optional[str] = None


CustomPredicate = Callable[[Any, Mapping[str, Any]], CustomRuleOutcome]
SuggestionFn = Callable[[Any, Mapping[str, Any]], List[str]]


@dataclass(frozen=True)
class ValidationRule:
    field: str
    kind: RuleKind
    message: str
    pattern: Optional[Pattern[str]] = None
    reference: Optional[str] = None
    predicate: Optional[CustomPredicate] = None
    suggestion_fn: Optional[SuggestionFn] = None
    # run auto-correction even when the pattern matches
    normalize: bool = False


def _compile(pattern: str) -> Pattern[str]:
    return re.compile(pattern, re.ASCII)


NAME_PATTERN = _compile(r"[a-zA-Z\s.]{2,50}")
ROLL_NUMBER_PATTERN = _compile(r"[0-9A-Z]{4,15}")
EMAIL_PATTERN = _compile(r"[\w.-]+@[\w.-]+\.[a-zA-Z]{2,}")
PHONE_PATTERN = _compile(r"\+?[0-9]{10,15}")
EMPLOYEE_ID_PATTERN = _compile(r"[A-Z0-9]{3,10}")

SEMESTER_CHOICES: Tuple[str, ...] = tuple(str(n) for n in range(1, 9))


def validate_semester(value: Any, record: Mapping[str, Any]) -> CustomRuleOutcome:
    is_valid = value is None or value == "" or as_text(value).strip() in SEMESTER_CHOICES
    return CustomRuleOutcome(
        is_valid=is_valid,
        message=f"Semester must be between {SEMESTER_CHOICES[0]}-{SEMESTER_CHOICES[-1]}",
    )


def suggest_semester(value: Any, record: Mapping[str, Any]) -> List[str]:
    digits = "".join(ch for ch in as_text(value) if ch.isdigit())
    if not digits:
        return []
    number = int(digits)
    closest = min(max(number, 1), len(SEMESTER_CHOICES))
    return [str(closest)]


def required(field: str, message: str) -> ValidationRule:
    return ValidationRule(field=field, kind=RuleKind.required, message=message)


def matches(
    field: str, pattern: Pattern[str], message: str, normalize: bool = False
) -> ValidationRule:
    return ValidationRule(
        field=field,
        kind=RuleKind.format,
        message=message,
        pattern=pattern,
        normalize=normalize,
    )


def unique(field: str, message: str) -> ValidationRule:
    return ValidationRule(field=field, kind=RuleKind.unique, message=message)


def references(field: str, reference: str, message: str) -> ValidationRule:
    return ValidationRule(
        field=field, kind=RuleKind.reference, message=message, reference=reference
    )


def custom(
    field: str,
    predicate: CustomPredicate,
    message: str,
    suggestion_fn: Optional[SuggestionFn] = None,
) -> ValidationRule:
    return ValidationRule(
        field=field,
        kind=RuleKind.custom,
        message=message,
        predicate=predicate,
        suggestion_fn=suggestion_fn,
    )


NAME_MESSAGE = "Name must be 2-50 characters, letters, spaces, and dots only"

STUDENT_RULES: Tuple[ValidationRule, ...] = (
    required("name", "Student name is required"),
    matches("name", NAME_PATTERN, NAME_MESSAGE, normalize=True),
    required("roll_number", "Roll number is required"),
    matches(
        "roll_number",
        ROLL_NUMBER_PATTERN,
        "Roll number must be 4-15 characters, alphanumeric",
    ),
    unique("roll_number", "Roll number already exists"),
    required("email", "Email is required"),
    matches("email", EMAIL_PATTERN, "Invalid email format"),
    unique("email", "Email already exists"),
    required("department", "Department is required"),
    references("department", "departments", "Invalid department name"),
    references("section", "sections", "Invalid section name"),
    custom("semester", validate_semester, "Invalid semester", suggest_semester),
    matches("contact_number", PHONE_PATTERN, "Invalid contact number format"),
    matches("parent_contact", PHONE_PATTERN, "Invalid parent contact format"),
)

TEACHER_RULES: Tuple[ValidationRule, ...] = (
    required("name", "Teacher name is required"),
    matches("name", NAME_PATTERN, NAME_MESSAGE, normalize=True),
    required("email", "Email is required"),
    matches("email", EMAIL_PATTERN, "Invalid email format"),
    unique("email", "Email already exists"),
    required("department", "Department is required"),
    references("department", "departments", "Invalid department name"),
    matches(
        "employee_id",
        EMPLOYEE_ID_PATTERN,
        "Employee ID must be 3-10 characters, uppercase letters and numbers",
    ),
)

RULE_CATALOGS: Dict[EntityKind, Tuple[ValidationRule, ...]] = {
    EntityKind.student: STUDENT_RULES,
    EntityKind.teacher: TEACHER_RULES,
}


def get_rules(entity_kind) -> Tuple[ValidationRule, ...]:
    return RULE_CATALOGS[coerce_entity_kind(entity_kind)]


def describe_rules(
    entity_kind, snapshot: Optional[ReferenceSnapshot] = None
) -> Dict[str, Dict[str, Any]]:
    """Summarise a catalog per field for display next to an entry form.

    Reference rules list the allowed names when a snapshot is given, and the
    semester rule lists its allowed values.
    """
    description: Dict[str, Dict[str, Any]] = {}
    for rule in get_rules(entity_kind):
        entry = description.setdefault(
            rule.field, {"required": False, "unique": False}
        )
        if rule.kind is RuleKind.required:
            entry["required"] = True
        elif rule.kind is RuleKind.unique:
            entry["unique"] = True
        elif rule.kind is RuleKind.format and rule.pattern is not None:
            entry["pattern"] = f"^{rule.pattern.pattern}$"
            entry["message"] = rule.message
        elif rule.kind is RuleKind.reference:
            entry["reference"] = rule.reference
            if snapshot is not None and rule.reference:
                entry["enum"] = list(snapshot.candidates_for(rule.reference))
        elif rule.kind is RuleKind.custom:
            entry["message"] = rule.message
            if rule.predicate is validate_semester:
                entry["enum"] = list(SEMESTER_CHOICES)
    return description
