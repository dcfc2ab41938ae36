# smart_attendance/app/services/data_validation/batch_validator.py
"""
Checks that only make sense across a whole batch: values that must be unique
but appear more than once among the records submitted together.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Sequence

from .format_helpers import as_text
from .validation_types import (
    EntityKind,
    ErrorCode,
    Severity,
    ValidationError,
    ValidationResult,
    coerce_entity_kind,
    is_present,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchDuplicateField:
    field: str
    code: str
    label: str
    upper: bool


BATCH_UNIQUE_FIELDS: Dict[EntityKind, List[BatchDuplicateField]] = {
    EntityKind.student: [
        BatchDuplicateField("email", ErrorCode.BATCH_DUPLICATE_EMAIL, "email", upper=False),
        BatchDuplicateField(
            "roll_number",
            ErrorCode.BATCH_DUPLICATE_ROLL_NUMBER,
            "roll number",
            upper=True,
        ),
    ],
    EntityKind.teacher: [
        BatchDuplicateField("email", ErrorCode.BATCH_DUPLICATE_EMAIL, "email", upper=False),
    ],
}


def group_indices(
    records: Sequence[Mapping[str, Any]], field: str, upper: bool
) -> Dict[str, List[int]]:
    """Map each case-folded value of field to the indices holding it."""
    groups: Dict[str, List[int]] = defaultdict(list)
    for index, record in enumerate(records):
        value = record.get(field)
        if not is_present(value):
            continue
        text = as_text(value)
        key = text.upper() if upper else text.lower()
        groups[key].append(index)
    return groups


def apply_batch_duplicate_checks(
    records: Sequence[Mapping[str, Any]],
    results: Sequence[ValidationResult],
    entity_kind,
) -> int:
    """Append batch duplicate errors to the results in place.

    Returns the number of errors appended.
    """
    if len(records) != len(results):
        raise ValueError(
            f"Got {len(results)} results for {len(records)} records"
        )

    kind = coerce_entity_kind(entity_kind)
    appended = 0
    for unique_field in BATCH_UNIQUE_FIELDS.get(kind, []):
        for value, indices in group_indices(records, unique_field.field, unique_field.upper).items():
            if len(indices) < 2:
                continue
            rows = ", ".join(str(i + 1) for i in indices)
            for index in indices:
                results[index].errors.append(
                    ValidationError(
                        field=unique_field.field,
                        value=value,
                        message=f"Duplicate {unique_field.label} in batch (rows: {rows})",
                        severity=Severity.error,
                        code=unique_field.code,
                    )
                )
                appended += 1
            logger.debug(f"Batch duplicate {unique_field.field} '{value}' in rows {rows}")
    return appended


@dataclass(frozen=True)
class BatchValidationSummary:
    total_records: int
    valid_records: int
    records_with_errors: int
    records_with_warnings: int
    records_with_suggestions: int
    records_with_corrections: int

    @property
    def overall_valid(self) -> bool:
        return self.records_with_errors == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_records": self.total_records,
            "valid_records": self.valid_records,
            "records_with_errors": self.records_with_errors,
            "records_with_warnings": self.records_with_warnings,
            "records_with_suggestions": self.records_with_suggestions,
            "records_with_corrections": self.records_with_corrections,
            "overall_valid": self.overall_valid,
        }


def summarize_batch(results: Sequence[ValidationResult]) -> BatchValidationSummary:
    return BatchValidationSummary(
        total_records=len(results),
        valid_records=sum(1 for r in results if r.is_valid),
        records_with_errors=sum(1 for r in results if r.errors),
        records_with_warnings=sum(1 for r in results if r.warnings),
        records_with_suggestions=sum(1 for r in results if r.suggestions),
        records_with_corrections=sum(1 for r in results if r.corrected_data is not None),
    )
