# smart_attendance/app/models/academic.py

import uuid

from typing import List, Optional, TYPE_CHECKING

from sqlalchemy import (
    String,
    Integer,
    Text,
    ForeignKey,
    Index,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship
from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .users import User


class Department(Base, TimestampMixin):
    __tablename__ = "departments"
    id: Mapped[uuid.UUID] = mapped_column(
        PG_UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    code: Mapped[str | None] = mapped_column(String, unique=True)

    sections: Mapped[List["Section"]] = relationship(back_populates="department")
    students: Mapped[List["Student"]] = relationship(back_populates="department")
    teachers: Mapped[List["Teacher"]] = relationship(back_populates="department")


class Section(Base, TimestampMixin):
    __tablename__ = "sections"
    id: Mapped[uuid.UUID] = mapped_column(
        PG_UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    section_name: Mapped[str] = mapped_column(String(50), nullable=False)
    department_id: Mapped[uuid.UUID] = mapped_column(
        PG_UUID(as_uuid=True), ForeignKey("departments.id"), nullable=False
    )
    semester: Mapped[int] = mapped_column(Integer, nullable=False)
    max_capacity: Mapped[int | None] = mapped_column(Integer)
    description: Mapped[str | None] = mapped_column(Text)

    department: Mapped["Department"] = relationship(back_populates="sections")
    students: Mapped[List["Student"]] = relationship(back_populates="section")

    __table_args__ = (
        UniqueConstraint(
            "section_name",
            "department_id",
            "semester",
            name="uq_sections_name_department_semester",
        ),
    )


class Student(Base, TimestampMixin):
    __tablename__ = "students"
    id: Mapped[uuid.UUID] = mapped_column(
        PG_UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    roll_number: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    user_id: Mapped[uuid.UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    department_id: Mapped[uuid.UUID] = mapped_column(
        PG_UUID(as_uuid=True), ForeignKey("departments.id"), nullable=False
    )
    section_id: Mapped[uuid.UUID | None] = mapped_column(
        PG_UUID(as_uuid=True), ForeignKey("sections.id", ondelete="SET NULL")
    )
    semester: Mapped[int] = mapped_column(Integer, nullable=False)
    contact_number: Mapped[str | None] = mapped_column(String)
    parent_contact: Mapped[str | None] = mapped_column(String)
    address: Mapped[str | None] = mapped_column(Text)

    user: Mapped["User"] = relationship(back_populates="student_profile")
    department: Mapped["Department"] = relationship(back_populates="students")
    section: Mapped[Optional["Section"]] = relationship(back_populates="students")

    __table_args__ = (Index("idx_students_department_semester", "department_id", "semester"),)


class Teacher(Base, TimestampMixin):
    __tablename__ = "teachers"
    id: Mapped[uuid.UUID] = mapped_column(
        PG_UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    employee_id: Mapped[str | None] = mapped_column(String, unique=True)
    user_id: Mapped[uuid.UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    department_id: Mapped[uuid.UUID] = mapped_column(
        PG_UUID(as_uuid=True), ForeignKey("departments.id"), nullable=False
    )

    user: Mapped["User"] = relationship(back_populates="teacher_profile")
    department: Mapped["Department"] = relationship(back_populates="teachers")
