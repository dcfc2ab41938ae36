# smart_attendance/app/services/data_validation/reference_data.py
"""
Reference data used for uniqueness and reference checks.

A ``ReferenceSnapshot`` is read once at the start of every top-level
validation call and is immutable afterwards, so writes happening elsewhere
cannot change answers half way through a batch.
"""

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional, Protocol, Tuple

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import ReferenceDataLoadError
from ...models.academic import Department, Section, Student
from ...models.users import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReferenceSnapshot:
    """Point-in-time view of departments, sections, emails and roll numbers."""

    departments: Tuple[str, ...] = ()
    sections: Tuple[str, ...] = ()
    existing_emails: FrozenSet[str] = field(default_factory=frozenset)
    existing_roll_numbers: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def build(
        cls,
        departments: Iterable[Optional[str]] = (),
        sections: Iterable[Optional[str]] = (),
        emails: Iterable[Optional[str]] = (),
        roll_numbers: Iterable[Optional[str]] = (),
    ) -> "ReferenceSnapshot":
        """Normalise raw column values; None entries are dropped."""
        return cls(
            departments=tuple(d for d in departments if d),
            sections=tuple(s for s in sections if s),
            existing_emails=frozenset(e.lower() for e in emails if e),
            existing_roll_numbers=frozenset(r.upper() for r in roll_numbers if r),
        )

    def has_department(self, name: str) -> bool:
        wanted = name.lower()
        return any(d.lower() == wanted for d in self.departments)

    def has_section(self, name: str) -> bool:
        wanted = name.lower()
        return any(s.lower() == wanted for s in self.sections)

    def email_exists(self, email: str) -> bool:
        return email.lower() in self.existing_emails

    def roll_number_exists(self, roll_number: str) -> bool:
        return roll_number.upper() in self.existing_roll_numbers

    def candidates_for(self, reference: str) -> Tuple[str, ...]:
        if reference == "departments":
            return self.departments
        if reference == "sections":
            return self.sections
        return ()


class ReferenceSource(Protocol):
    """Anything able to produce a fresh snapshot."""

    async def load(self) -> ReferenceSnapshot: ...


class ReferenceDataLoader:
    """Reads the four reference collections from the database."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _fetch_column(self, collection: str, column) -> list:
        try:
            result = await self.session.execute(select(column))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(
                f"Failed to load reference collection '{collection}': {e}",
                exc_info=True,
            )
            raise ReferenceDataLoadError(
                f"Failed to load {collection} for validation",
                collection=collection,
                cause=e,
            ) from e

    async def load(self) -> ReferenceSnapshot:
        departments = await self._fetch_column("departments", Department.name)
        sections = await self._fetch_column("sections", Section.section_name)
        emails = await self._fetch_column("users", User.email)
        roll_numbers = await self._fetch_column("students", Student.roll_number)

        snapshot = ReferenceSnapshot.build(
            departments=departments,
            sections=sections,
            emails=emails,
            roll_numbers=roll_numbers,
        )
        logger.debug(
            f"Loaded reference snapshot: {len(snapshot.departments)} departments, "
            f"{len(snapshot.sections)} sections, {len(snapshot.existing_emails)} emails, "
            f"{len(snapshot.existing_roll_numbers)} roll numbers"
        )
        return snapshot


class StaticReferenceSource:
    """Serves a fixed snapshot. Useful for previews and tests."""

    def __init__(self, snapshot: ReferenceSnapshot):
        self.snapshot = snapshot
        self.load_count = 0

    async def load(self) -> ReferenceSnapshot:
        self.load_count += 1
        return self.snapshot
