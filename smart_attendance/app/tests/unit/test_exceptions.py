# smart_attendance/app/tests/unit/test_exceptions.py

import pytest

from smart_attendance.app.core.exceptions import (
    AppError,
    ReferenceDataLoadError,
    UnknownEntityKindError,
    ValidationEngineError,
)
from smart_attendance.app.services.data_validation.validation_types import (
    coerce_entity_kind,
)


def test_hierarchy():
    assert issubclass(ReferenceDataLoadError, ValidationEngineError)
    assert issubclass(UnknownEntityKindError, ValidationEngineError)
    assert issubclass(ValidationEngineError, AppError)


def test_unknown_entity_kind_message():
    with pytest.raises(UnknownEntityKindError) as exc_info:
        coerce_entity_kind("parent")

    error = exc_info.value
    assert error.message == "Type must be one of student, teacher, got 'parent'"
    assert error.context == {"entity_kind": "parent", "allowed": ["student", "teacher"]}
    assert isinstance(error.__cause__, ValueError)


def test_to_dict():
    payload = ReferenceDataLoadError(collection="sections").to_dict()["error"]
    assert payload["type"] == "ReferenceDataLoadError"
    assert payload["code"] == "reference_data_unavailable"
    assert payload["status_code"] == 503
    assert payload["context"] == {"collection": "sections"}


def test_with_context_and_str():
    error = ValidationEngineError("Batch failed").with_context(entity_kind="student", rows=None)
    assert error.context == {"entity_kind": "student"}
    assert "validation_engine_error" in str(error)

