# smart_attendance/app/api/v1/routes/data_entry.py
"""API endpoints for validating bulk data entry before import."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from ....api.deps import validation_engine
from ....core.exceptions import ValidationEngineError
from ....schemas.data_entry import (
    BatchSummaryRead,
    ValidateBatchRequest,
    ValidateBatchResponse,
    ValidateRecordRequest,
    ValidateRecordResponse,
    ValidationResultRead,
    ValidationRulesResponse,
)
from ....services.data_validation import ValidationEngine, summarize_batch

logger = logging.getLogger(__name__)

router = APIRouter()


def _http_error(exc: ValidationEngineError) -> HTTPException:
    logger.error(f"Data entry validation failed: {exc}")
    return HTTPException(status_code=exc.status_code, detail=exc.message)


@router.post("/validate", response_model=ValidateRecordResponse)
async def validate_record(
    payload: ValidateRecordRequest,
    engine: ValidationEngine = Depends(validation_engine),
):
    """Validate one record and return errors, warnings and suggested corrections."""
    try:
        result = await engine.validate(payload.data, payload.entity_kind)
    except ValidationEngineError as e:
        raise _http_error(e)
    return ValidateRecordResponse.from_result(result)


@router.post("/validate-batch", response_model=ValidateBatchResponse)
async def validate_batch(
    payload: ValidateBatchRequest,
    engine: ValidationEngine = Depends(validation_engine),
):
    """Validate a batch of records, including duplicates within the batch."""
    try:
        results = await engine.validate_batch(payload.data_array, payload.entity_kind)
    except ValidationEngineError as e:
        raise _http_error(e)

    summary = summarize_batch(results)
    return ValidateBatchResponse(
        validation_results=[ValidationResultRead.from_result(r) for r in results],
        summary=BatchSummaryRead.from_summary(summary),
        overall_valid=summary.overall_valid,
    )


@router.get("/validation-rules/{entity_kind}", response_model=ValidationRulesResponse)
async def get_validation_rules(
    entity_kind: str,
    engine: ValidationEngine = Depends(validation_engine),
):
    """Describe the rules applied to an entity kind and the allowed reference values."""
    try:
        description = await engine.validation_rules(entity_kind)
    except ValidationEngineError as e:
        raise _http_error(e)
    return ValidationRulesResponse(**description)
