"""FastAPI dependencies for database sessions and repositories."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database.repository import TaxRecordRepository
from src.infrastructure.database.session import get_async_session


async def get_db() -> AsyncGenerator[AsyncSession]:
    """Provide a request-scoped session, committed after the handler returns."""
    async with get_async_session() as session:
        yield session


DatabaseSession = Annotated[AsyncSession, Depends(get_db)]


def get_tax_record_repository(session: DatabaseSession) -> TaxRecordRepository:
    """Build the tax record repository on the request's session."""
    return TaxRecordRepository(session)


TaxRecords = Annotated[TaxRecordRepository, Depends(get_tax_record_repository)]
