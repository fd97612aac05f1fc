"""Tax distribution flows sitting between the HTTP layer and the allocator.

- **fixed**: allocate with the constant sector percentages and persist a
  tax record for the caller
- **dynamic**: allocate proportionally against the current budget weight
  table; nothing is persisted and no identity is needed
- **history**: list the caller's records, newest first

The caller identity arrives as an explicit argument from the authentication
dependency; this module never reads it from request state.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Protocol

from loguru import logger

from src.core.exceptions import PersistenceError, UnauthorizedError
from src.core.observability import trace_operation
from src.core.types import Identity
from src.domain.allocation import (
    FIXED_SECTOR_WEIGHTS,
    AllocationResult,
    allocate_fixed,
    allocate_proportional,
)
from src.domain.weights import WeightTable
from src.infrastructure.database.models import TaxRecord


class TaxRecordStore(Protocol):
    """Persistence collaborator used by the fixed and history flows."""

    async def save(
        self,
        identity: Identity,
        total_amount: Decimal,
        amounts: Mapping[str, Decimal],
    ) -> TaxRecord:
        """Persist one distribution."""
        ...

    async def list_by_identity(self, identity: Identity) -> Sequence[TaxRecord]:
        """Return the identity's records, newest first."""
        ...


@dataclass(frozen=True)
class FixedDistribution:
    """Result of the fixed flow: the reporting year and the breakdown."""

    year: int
    result: AllocationResult


@dataclass(frozen=True)
class TaxHistoryEntry:
    """A stored distribution decoded back into exact amounts."""

    total_tax_paid: Decimal
    distribution: dict[str, Decimal]
    created_at: datetime


def _decode_record(record: TaxRecord) -> TaxHistoryEntry:
    """Turn a stored row into a history entry.

    Raises:
        ValueError: If the stored distribution is not a mapping of decimals.
    """
    if not isinstance(record.distribution, Mapping):
        msg = "distribution is not an object"
        raise ValueError(msg)  # noqa: TRY004 - row content, not an argument type

    distribution: dict[str, Decimal] = {}
    for category in sorted(record.distribution):
        try:
            amount = Decimal(str(record.distribution[category]))
        except InvalidOperation as e:
            msg = f"amount for {category!r} is not a decimal"
            raise ValueError(msg) from e
        if not amount.is_finite():
            msg = f"amount for {category!r} is not finite"
            raise ValueError(msg)
        distribution[category] = amount

    if not isinstance(record.total_tax_paid, (Decimal, int)):
        msg = "total_tax_paid is not a decimal"
        raise ValueError(msg)  # noqa: TRY004 - row content, not an argument type

    return TaxHistoryEntry(
        total_tax_paid=Decimal(record.total_tax_paid),
        distribution=distribution,
        created_at=record.created_at,
    )


def distribute_dynamic(total: object, table: WeightTable) -> AllocationResult:
    """Split ``total`` across the budget categories in proportion to their weights.

    Raises:
        InvalidAmountError: If ``total`` is not strictly positive.
        DegenerateWeightsError: If the table's weights sum to zero.
    """
    snapshot = table.snapshot()
    with trace_operation("allocation.proportional", category_count=len(snapshot)):
        result = allocate_proportional(total, snapshot)

    logger.info(
        "Budget-based distribution computed",
        category_count=len(result.amounts),
        rounding_drift=str(result.rounding_drift),
    )
    return result


class DistributionService:
    """Fixed-percentage and history flows for an authenticated caller.

    Args:
        records: Persistence collaborator for tax records.
        fiscal_year: Year reported alongside fixed distributions.
        weights: Sector percentages, defaults to ``FIXED_SECTOR_WEIGHTS``.
    """

    def __init__(
        self,
        records: TaxRecordStore,
        fiscal_year: int,
        weights: Mapping[str, Decimal] = FIXED_SECTOR_WEIGHTS,
    ) -> None:
        self.records = records
        self.fiscal_year = fiscal_year
        self.weights = weights

    async def distribute_fixed(
        self, identity: Identity, total: object
    ) -> FixedDistribution:
        """Allocate ``total`` with the sector table and store it for ``identity``.

        The breakdown is only returned once it has been saved.

        Raises:
            UnauthorizedError: If no identity is supplied.
            InvalidAmountError: If ``total`` is not strictly positive; nothing
                is allocated or saved.
            PersistenceError: If the record cannot be saved.
        """
        if not identity:
            raise UnauthorizedError("Unauthorized access")

        with trace_operation("allocation.fixed", category_count=len(self.weights)):
            result = allocate_fixed(total, self.weights)

        try:
            record = await self.records.save(identity, result.total, result.amounts)
        except PersistenceError as e:
            logger.error(
                "Tax distribution could not be saved: {}",
                e.message,
                user_id=identity,
                error_code=e.error_code,
            )
            raise

        logger.info(
            "Tax distribution saved",
            user_id=identity,
            record_id=record.id,
            category_count=len(result.amounts),
        )
        return FixedDistribution(year=self.fiscal_year, result=result)

    async def history(self, identity: Identity) -> list[TaxHistoryEntry]:
        """List the stored distributions of ``identity``, newest first.

        Rows whose stored breakdown cannot be decoded are logged and skipped;
        an identity without records gets an empty list.

        Raises:
            UnauthorizedError: If no identity is supplied.
            PersistenceError: If the records cannot be read.
        """
        if not identity:
            raise UnauthorizedError("Unauthorized access")

        entries: list[TaxHistoryEntry] = []
        for record in await self.records.list_by_identity(identity):
            try:
                entries.append(_decode_record(record))
            except ValueError as e:
                logger.warning(
                    "Skipping malformed tax record: {}",
                    e,
                    record_id=record.id,
                    user_id=identity,
                )

        return entries
