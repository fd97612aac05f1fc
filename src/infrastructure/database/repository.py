"""Repositories for database access.

``BaseRepository`` provides the generic async insert shared by every
model; ``TaxRecordRepository`` is the persistence collaborator of the
distribution service (``save`` / ``list_by_identity``).
"""

from collections.abc import Mapping
from decimal import Decimal
from typing import TypeVar

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.exceptions import PersistenceError
from src.core.types import Identity
from src.infrastructure.database.base import BaseModel
from src.infrastructure.database.models import TaxRecord

T = TypeVar("T", bound=BaseModel)


class BaseRepository[T: BaseModel]:
    """Async insert for a model inheriting from ``BaseModel``.

    Args:
        session: The async SQLAlchemy session to use for operations.
        model_class: The SQLAlchemy model class this repository manages.

    Example:
        class TaxRecordRepository(BaseRepository[TaxRecord]):
            def __init__(self, session: AsyncSession) -> None:
                super().__init__(session, TaxRecord)
    """

    def __init__(self, session: AsyncSession, model_class: type[T]) -> None:
        self.session = session
        self.model_class = model_class

    async def create(self, obj: T) -> T:
        """Insert ``obj`` and return it with server-generated values loaded.

        Args:
            obj: The model instance to create.

        Returns:
            T: The created instance with ID and ``created_at`` populated.
        """
        self.session.add(obj)
        await self.session.flush()
        await self.session.refresh(obj)

        logger.debug("Created {} with ID: {}", self.model_class.__name__, obj.id)
        return obj


class TaxRecordRepository(BaseRepository[TaxRecord]):
    """Stores and lists tax distribution records per identity."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, TaxRecord)

    async def save(
        self,
        identity: Identity,
        total_amount: Decimal,
        amounts: Mapping[str, Decimal],
    ) -> TaxRecord:
        """Persist one distribution for ``identity``.

        Args:
            identity: Owner of the record.
            total_amount: Amount that was distributed.
            amounts: Category -> allocated amount.

        Returns:
            TaxRecord: The stored record.

        Raises:
            PersistenceError: If the insert fails.
        """
        record = TaxRecord(
            user_id=identity,
            total_tax_paid=total_amount,
            distribution={category: str(amount) for category, amount in amounts.items()},
        )
        try:
            return await self.create(record)
        except SQLAlchemyError as e:
            raise PersistenceError(
                "Failed to save tax data",
                context={"category_count": len(amounts)},
                cause=e,
            ) from e

    async def list_by_identity(self, identity: Identity) -> list[TaxRecord]:
        """Return the records of ``identity``, newest first.

        Raises:
            PersistenceError: If the query fails.
        """
        stmt = (
            select(TaxRecord)
            .where(TaxRecord.user_id == identity)
            .order_by(TaxRecord.created_at.desc(), TaxRecord.id.desc())
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to fetch tax records", cause=e) from e

        records = list(result.scalars().all())
        logger.debug("Fetched {} tax records", len(records))
        return records
