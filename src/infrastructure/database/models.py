"""Database models for persisted tax distributions."""

from decimal import Decimal

from sqlalchemy import JSON, CheckConstraint, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from src.core.constants import MONEY_PRECISION, MONEY_SCALE
from src.infrastructure.database.base import BaseModel


class TaxRecord(BaseModel):
    """One fixed-percentage distribution made for a user.

    ``distribution`` stores category -> amount as decimal strings so the
    exact cents survive the JSON round trip.
    """

    __tablename__ = "tax_records"
    __table_args__ = (
        CheckConstraint("total_tax_paid > 0", name="total_tax_paid_positive"),
        Index("ix_tax_records_user_id_created_at", "user_id", "created_at"),
    )

    user_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="Identity of the caller the record belongs to",
    )
    total_tax_paid: Mapped[Decimal] = mapped_column(
        Numeric(MONEY_PRECISION, MONEY_SCALE),
        nullable=False,
        doc="Amount that was distributed",
    )
    distribution: Mapped[dict[str, str]] = mapped_column(
        JSON,
        nullable=False,
        doc="Category -> allocated amount (decimal string)",
    )
