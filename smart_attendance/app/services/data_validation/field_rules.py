# smart_attendance/app/services/data_validation/field_rules.py
"""
Evaluation of one rule against one field of one record.

``evaluate_field`` is a plain function of its arguments: the only thing it
writes to is the ``corrected`` accumulator it is handed, which the caller
threads through the rules of a catalog in order.
"""

import logging
from typing import Any, Dict, Iterable, Mapping, MutableMapping, Tuple

from .format_helpers import as_text, auto_correct_format, generate_format_suggestion
from .reference_data import ReferenceSnapshot
from .rule_catalogs import RuleKind, ValidationRule
from .similarity import find_fuzzy_matches
from .validation_types import (
    ErrorCode,
    FieldFindings,
    Severity,
    ValidationError,
    ValidationOptions,
    is_present,
)

logger = logging.getLogger(__name__)


def is_missing(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and value.strip() == ""


def _check_required(rule: ValidationRule, value: Any, findings: FieldFindings) -> None:
    if is_missing(value):
        findings.add(
            ValidationError(
                field=rule.field,
                value=value,
                message=rule.message,
                severity=Severity.error,
                code=ErrorCode.REQUIRED_FIELD_MISSING,
            )
        )


def _check_format(
    rule: ValidationRule,
    value: Any,
    corrected: MutableMapping[str, Any],
    options: ValidationOptions,
    findings: FieldFindings,
) -> None:
    if not is_present(value) or rule.pattern is None:
        return

    text = as_text(value)
    matched = rule.pattern.fullmatch(text) is not None

    if not matched:
        suggestion = generate_format_suggestion(
            rule.field,
            value,
            default_email_domain=options.default_email_domain,
            phone_min_digits=options.phone_min_digits,
        )
        findings.add(
            ValidationError(
                field=rule.field,
                value=value,
                message=rule.message,
                severity=Severity.error,
                code=ErrorCode.INVALID_FORMAT,
                suggestions=[suggestion] if suggestion else [],
            )
        )

    if matched and not rule.normalize:
        return

    fixed = auto_correct_format(
        rule.field, value, phone_min_digits=options.phone_min_digits
    )
    if fixed and fixed != text:
        corrected[rule.field] = fixed
        findings.add(
            ValidationError(
                field=rule.field,
                value=fixed,
                message=f"Auto-corrected to: {fixed}",
                severity=Severity.info,
                code=ErrorCode.AUTO_CORRECTION,
            )
        )


def _check_unique(
    rule: ValidationRule,
    value: Any,
    snapshot: ReferenceSnapshot,
    findings: FieldFindings,
) -> None:
    if not is_present(value):
        return

    text = as_text(value)
    if rule.field == "email":
        duplicate = snapshot.email_exists(text)
    elif rule.field == "roll_number":
        duplicate = snapshot.roll_number_exists(text)
    else:
        duplicate = False

    if duplicate:
        findings.add(
            ValidationError(
                field=rule.field,
                value=value,
                message=rule.message,
                severity=Severity.error,
                code=ErrorCode.DUPLICATE_VALUE,
            )
        )


def _check_reference(
    rule: ValidationRule,
    value: Any,
    snapshot: ReferenceSnapshot,
    options: ValidationOptions,
    findings: FieldFindings,
) -> None:
    if not is_present(value):
        return

    text = as_text(value)
    if rule.reference == "departments":
        known = snapshot.has_department(text)
    elif rule.reference == "sections":
        known = snapshot.has_section(text)
    else:
        known = True

    if not known:
        matches = find_fuzzy_matches(
            text,
            snapshot.candidates_for(rule.reference or ""),
            threshold=options.fuzzy_match_threshold,
            limit=options.fuzzy_match_limit,
        )
        findings.add(
            ValidationError(
                field=rule.field,
                value=value,
                message=rule.message,
                severity=Severity.error,
                code=ErrorCode.INVALID_REFERENCE,
                suggestions=matches,
            )
        )


def _check_custom(
    rule: ValidationRule,
    value: Any,
    record: Mapping[str, Any],
    findings: FieldFindings,
) -> None:
    if rule.predicate is None:
        return

    outcome = rule.predicate(value, record)
    if outcome.is_valid:
        return

    findings.add(
        ValidationError(
            field=rule.field,
            value=value,
            message=outcome.message or rule.message,
            severity=outcome.severity or Severity.error,
            code=outcome.code or ErrorCode.CUSTOM_VALIDATION_FAILED,
            suggestions=rule.suggestion_fn(value, record) if rule.suggestion_fn else [],
        )
    )


def evaluate_field(
    rule: ValidationRule,
    value: Any,
    record: Mapping[str, Any],
    corrected: MutableMapping[str, Any],
    snapshot: ReferenceSnapshot,
    options: ValidationOptions,
) -> FieldFindings:
    """Evaluate a single rule and return its findings."""
    findings = FieldFindings()

    if rule.kind is RuleKind.required:
        _check_required(rule, value, findings)
    elif rule.kind is RuleKind.format:
        _check_format(rule, value, corrected, options, findings)
    elif rule.kind is RuleKind.unique:
        _check_unique(rule, value, snapshot, findings)
    elif rule.kind is RuleKind.reference:
        _check_reference(rule, value, snapshot, options, findings)
    elif rule.kind is RuleKind.custom:
        _check_custom(rule, value, record, findings)
    else:
        logger.warning(f"Unknown rule kind '{rule.kind}' for field '{rule.field}'")

    return findings


def evaluate_rules(
    rules: Iterable[ValidationRule],
    record: Mapping[str, Any],
    snapshot: ReferenceSnapshot,
    options: ValidationOptions,
) -> Tuple[FieldFindings, Dict[str, Any]]:
    """Run a whole catalog over one record.

    Returns the merged findings and the corrected copy of the record.
    """
    corrected: Dict[str, Any] = dict(record)
    merged = FieldFindings()
    for rule in rules:
        findings = evaluate_field(
            rule, record.get(rule.field), record, corrected, snapshot, options
        )
        merged.errors.extend(findings.errors)
        merged.warnings.extend(findings.warnings)
        merged.suggestions.extend(findings.suggestions)
    return merged, corrected
