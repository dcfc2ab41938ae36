# smart_attendance/app/models/users.py

import uuid
from typing import TYPE_CHECKING, Optional
from sqlalchemy import String, Boolean, func
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .academic import Student, Teacher


class User(Base, TimestampMixin):
    """Login account. Every student and teacher owns exactly one."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        PG_UUID(as_uuid=True), primary_key=True, server_default=func.gen_random_uuid()
    )
    email: Mapped[str] = mapped_column(String, unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[str] = mapped_column(String(32), nullable=False)
    password_hash: Mapped[str | None] = mapped_column(String)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    student_profile: Mapped[Optional["Student"]] = relationship(back_populates="user")
    teacher_profile: Mapped[Optional["Teacher"]] = relationship(back_populates="user")
