# smart_attendance/app/services/data_validation/validation_engine.py
"""
Smart data entry validation engine.

Validates, auto-corrects and de-duplicates student and teacher records
before they are persisted. Each public call loads a fresh reference snapshot
exactly once and then works purely in memory:

1. every rule of the entity kind's catalog, in order
2. the cross-field plausibility checks for the kind
3. for batches, the duplicate pass across all records of the call

Problems inside records are returned as findings. Only a failure to load
reference data raises, as ``ReferenceDataLoadError``.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ...core.exceptions import ReferenceDataLoadError
from .batch_validator import apply_batch_duplicate_checks, summarize_batch
from .cross_field import perform_cross_field_validation
from .field_rules import evaluate_rules
from .reference_data import ReferenceSnapshot, ReferenceSource
from .rule_catalogs import describe_rules, get_rules
from .validation_types import (
    EntityKind,
    ValidationOptions,
    ValidationResult,
    coerce_entity_kind,
)

logger = logging.getLogger(__name__)


class ValidationEngine:
    """Entry point used by the record ingestion layer."""

    def __init__(
        self,
        reference_source: ReferenceSource,
        options: Optional[ValidationOptions] = None,
    ):
        self.reference_source = reference_source
        self.options = options or ValidationOptions()

    async def _load_snapshot(
        self, kind: EntityKind, record_count: Optional[int] = None
    ) -> ReferenceSnapshot:
        try:
            return await self.reference_source.load()
        except ReferenceDataLoadError as e:
            raise e.with_context(entity_kind=kind.value, record_count=record_count)

    async def validate(self, record: Mapping[str, Any], entity_kind) -> ValidationResult:
        """Validate one record against freshly loaded reference data."""
        kind = coerce_entity_kind(entity_kind)
        snapshot = await self._load_snapshot(kind, record_count=1)
        return self.validate_with_snapshot(record, kind, snapshot)

    async def validate_batch(
        self, records: Sequence[Mapping[str, Any]], entity_kind
    ) -> List[ValidationResult]:
        """Validate records in order, then flag duplicates within the batch."""
        kind = coerce_entity_kind(entity_kind)
        snapshot = await self._load_snapshot(kind, record_count=len(records))

        results = [self.validate_with_snapshot(record, kind, snapshot) for record in records]
        duplicates = apply_batch_duplicate_checks(records, results, kind)

        summary = summarize_batch(results)
        logger.info(
            f"Validated {summary.total_records} {kind.value} records: "
            f"{summary.valid_records} valid, {summary.records_with_warnings} with warnings, "
            f"{summary.records_with_corrections} auto-corrected, {duplicates} batch duplicate findings"
        )
        return results

    async def validation_rules(self, entity_kind) -> Dict[str, Any]:
        """Describe the catalog of a kind together with the allowed reference values."""
        kind = coerce_entity_kind(entity_kind)
        snapshot = await self._load_snapshot(kind)
        return {
            "validation_rules": describe_rules(kind, snapshot),
            "reference_data": {
                "departments": list(snapshot.departments),
                "sections": list(snapshot.sections) if kind is EntityKind.student else [],
            },
        }

    def validate_with_snapshot(
        self,
        record: Mapping[str, Any],
        entity_kind: EntityKind,
        snapshot: ReferenceSnapshot,
    ) -> ValidationResult:
        """Validate one record against an already loaded snapshot.

        Reads only the snapshot and options, so it is safe to call for many
        records in parallel; the batch duplicate pass is not included.
        """
        kind = coerce_entity_kind(entity_kind)
        findings, corrected = evaluate_rules(get_rules(kind), record, snapshot, self.options)

        result = ValidationResult()
        result.extend(findings)
        for finding in perform_cross_field_validation(record, kind, self.options):
            result.add(finding)

        if corrected != dict(record):
            result.corrected_data = corrected

        return result
