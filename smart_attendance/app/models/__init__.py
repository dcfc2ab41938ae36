# smart_attendance/app/models/__init__.py

from .base import Base, SCHEMA_NAME
from .academic import Department, Section, Student, Teacher
from .users import User

__all__ = [
    "Base",
    "SCHEMA_NAME",
    "Department",
    "Section",
    "Student",
    "Teacher",
    "User",
]
