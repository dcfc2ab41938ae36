# smart_attendance/app/schemas/data_entry.py
"""Pydantic v2 schemas for the data entry validation endpoints."""

from __future__ import annotations
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional, Dict, Any

from ..services.data_validation import ValidationResult, BatchValidationSummary


# --- Requests ---
class ValidateRecordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    data: Dict[str, Any]
    entity_kind: str = Field(alias="type")


class ValidateBatchRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    data_array: List[Dict[str, Any]] = Field(alias="dataArray")
    entity_kind: str = Field(alias="type")


# --- Responses ---
class ValidationFindingRead(BaseModel):
    field: str
    value: Any = None
    message: str
    severity: str
    code: str
    suggestions: List[str] = Field(default_factory=list)


class ValidationResultRead(BaseModel):
    is_valid: bool
    errors: List[ValidationFindingRead] = Field(default_factory=list)
    warnings: List[ValidationFindingRead] = Field(default_factory=list)
    suggestions: List[ValidationFindingRead] = Field(default_factory=list)
    corrected_data: Optional[Dict[str, Any]] = None

    @classmethod
    def from_result(cls, result: ValidationResult) -> "ValidationResultRead":
        return cls.model_validate(result.to_dict())


class ValidateRecordResponse(BaseModel):
    success: bool = True
    validation: ValidationResultRead
    has_errors: bool
    has_warnings: bool
    has_suggestions: bool
    has_corrections: bool

    @classmethod
    def from_result(cls, result: ValidationResult) -> "ValidateRecordResponse":
        return cls(
            validation=ValidationResultRead.from_result(result),
            has_errors=not result.is_valid,
            has_warnings=len(result.warnings) > 0,
            has_suggestions=len(result.suggestions) > 0,
            has_corrections=result.corrected_data is not None,
        )


class BatchSummaryRead(BaseModel):
    total_records: int
    valid_records: int
    records_with_errors: int
    records_with_warnings: int
    records_with_suggestions: int
    records_with_corrections: int
    overall_valid: bool

    @classmethod
    def from_summary(cls, summary: BatchValidationSummary) -> "BatchSummaryRead":
        return cls.model_validate(summary.to_dict())


class ValidateBatchResponse(BaseModel):
    success: bool = True
    validation_results: List[ValidationResultRead]
    summary: BatchSummaryRead
    overall_valid: bool


class ValidationRulesResponse(BaseModel):
    success: bool = True
    validation_rules: Dict[str, Dict[str, Any]]
    reference_data: Dict[str, List[str]]
