# smart_attendance/app/schemas/__init__.py

from .data_entry import (
    ValidateRecordRequest,
    ValidateBatchRequest,
    ValidationFindingRead,
    ValidationResultRead,
    ValidateRecordResponse,
    BatchSummaryRead,
    ValidateBatchResponse,
    ValidationRulesResponse,
)

__all__ = [
    "ValidateRecordRequest",
    "ValidateBatchRequest",
    "ValidationFindingRead",
    "ValidationResultRead",
    "ValidateRecordResponse",
    "BatchSummaryRead",
    "ValidateBatchResponse",
    "ValidationRulesResponse",
]
