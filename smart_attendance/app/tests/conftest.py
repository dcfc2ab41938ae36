# smart_attendance/app/tests/conftest.py

import logging
import pytest

from smart_attendance.app.services.data_validation import (
    ReferenceSnapshot,
    StaticReferenceSource,
    ValidationEngine,
    ValidationOptions,
)


def pytest_configure(config):
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


@pytest.fixture
def reference_snapshot() -> ReferenceSnapshot:
    """Reference data as it would be read from the store."""
    return ReferenceSnapshot.build(
        departments=["Computer Science", "Mathematics", "Physics", None],
        sections=["A", "B", "Section C"],
        emails=["Existing@University.edu", "taken@university.edu"],
        roll_numbers=["cs2023001", "ME2023002"],
    )


@pytest.fixture
def options() -> ValidationOptions:
    return ValidationOptions()


@pytest.fixture
def reference_source(reference_snapshot) -> StaticReferenceSource:
    return StaticReferenceSource(reference_snapshot)


@pytest.fixture
def engine(reference_source, options) -> ValidationEngine:
    return ValidationEngine(reference_source, options)


@pytest.fixture
def valid_student():
    return {
        "name": "Alice Johnson",
        "roll_number": "CS2024001",
        "email": "alice@university.edu",
        "department": "Computer Science",
        "section": "A",
        "semester": "3",
        "contact_number": "+919876543210",
        "parent_contact": "+919812345678",
    }


@pytest.fixture
def messy_student():
    """Lower-case name, punctuated roll number, bad email, misspelt department."""
    return {
        "name": "john smith",
        "roll_number": "cs-101!",
        "email": "JOHN@X",
        "department": "Computer Scince",
        "semester": "9",
    }


@pytest.fixture
def teacher_batch():
    return [
        {
            "name": "Grace Hopper",
            "email": "t@x.com",
            "department": "Computer Science",
            "employee_id": "EMP001",
        },
        {
            "name": "Ada Lovelace",
            "email": "t@x.com",
            "department": "Mathematics",
            "employee_id": "EMP002",
        },
        {
            "name": "Alan Turing",
            "email": "alan@university.edu",
            "department": "Mathematics",
            "employee_id": "EMP003",
        },
    ]
