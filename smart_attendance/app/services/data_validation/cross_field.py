# smart_attendance/app/services/data_validation/cross_field.py
"""
Plausibility checks that need more than one field of the same record.

Checks are registered per entity kind and only ever produce warnings; they
look at the values the caller submitted, not at auto-corrected ones.
"""

import logging
import math
import re
from typing import Any, Callable, Dict, List, Mapping

from .format_helpers import as_text, digits_only
from .validation_types import (
    EntityKind,
    ErrorCode,
    Severity,
    ValidationError,
    ValidationOptions,
    coerce_entity_kind,
    is_present,
)

logger = logging.getLogger(__name__)

CrossFieldCheck = Callable[[Mapping[str, Any], ValidationOptions], List[ValidationError]]

LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def leading_int(value: Any):
    """Integer prefix of value ('9th' -> 9), or None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    match = LEADING_INT.match(as_text(value))
    return int(match.group(1)) if match else None


def check_email_domain(
    record: Mapping[str, Any], options: ValidationOptions
) -> List[ValidationError]:
    email, department = record.get("email"), record.get("department")
    if not (is_present(email) and is_present(department)):
        return []

    text = as_text(email)
    local_part, _, domain = text.partition("@")
    domain = domain.lower()
    if not domain or any(marker in domain for marker in options.institutional_email_markers):
        return []

    return [
        ValidationError(
            field="email",
            value=email,
            message="Email domain might not be institutional",
            severity=Severity.warning,
            code=ErrorCode.SUSPICIOUS_EMAIL_DOMAIN,
            suggestions=[f"{local_part}@{options.default_email_domain}"],
        )
    ]


def check_semester(
    record: Mapping[str, Any], options: ValidationOptions
) -> List[ValidationError]:
    semester, department = record.get("semester"), record.get("department")
    if not (is_present(semester) and is_present(department)):
        return []

    number = leading_int(semester)
    if number is None or number <= options.semester_warning_ceiling:
        return []

    return [
        ValidationError(
            field="semester",
            value=semester,
            message="Semester value seems unusually high",
            severity=Severity.warning,
            code=ErrorCode.SUSPICIOUS_SEMESTER,
        )
    ]


def check_identical_contacts(
    record: Mapping[str, Any], options: ValidationOptions
) -> List[ValidationError]:
    contact, parent = record.get("contact_number"), record.get("parent_contact")
    if not (is_present(contact) and is_present(parent)):
        return []

    if digits_only(contact) != digits_only(parent):
        return []

    return [
        ValidationError(
            field="parent_contact",
            value=parent,
            message="Student and parent contact numbers are identical",
            severity=Severity.warning,
            code=ErrorCode.IDENTICAL_CONTACTS,
        )
    ]


CROSS_FIELD_CHECKS: Dict[EntityKind, List[CrossFieldCheck]] = {
    EntityKind.student: [
        check_email_domain,
        check_semester,
        check_identical_contacts,
    ],
    EntityKind.teacher: [],
}


def register_cross_field_check(entity_kind, check: CrossFieldCheck) -> None:
    """Add a check to the set run for an entity kind."""
    kind = coerce_entity_kind(entity_kind)
    CROSS_FIELD_CHECKS.setdefault(kind, []).append(check)
    logger.info(f"Registered cross-field check '{check.__name__}' for {kind.value}")


def perform_cross_field_validation(
    record: Mapping[str, Any], entity_kind, options: ValidationOptions
) -> List[ValidationError]:
    kind = coerce_entity_kind(entity_kind)
    findings: List[ValidationError] = []
    for check in CROSS_FIELD_CHECKS.get(kind, []):
        findings.extend(check(record, options))
    return findings
