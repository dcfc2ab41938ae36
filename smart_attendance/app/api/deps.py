# smart_attendance/app/api/deps.py
import logging
from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import get_settings
from ..database import get_db
from ..services.data_validation import (
    ReferenceDataLoader,
    ValidationEngine,
    ValidationOptions,
)

logger = logging.getLogger(__name__)


async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency to get a database session."""
    async for session in get_db():
        yield session


def validation_options() -> ValidationOptions:
    """Engine tunables taken from the application settings."""
    return ValidationOptions.from_settings(get_settings())


async def validation_engine(
    db: AsyncSession = Depends(db_session),
    options: ValidationOptions = Depends(validation_options),
) -> ValidationEngine:
    """A request scoped engine reading reference data through the request session."""
    return ValidationEngine(ReferenceDataLoader(db), options)
