"""Request and response models for the tax distribution endpoints.

Amounts are exact ``Decimal`` values inside the service; these models are
where they become JSON numbers (fixed flow, history) or formatted currency
strings (budget flow).
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class TaxPaymentRequest(BaseModel):
    """Amount of tax paid that should be distributed."""

    total_tax_paid: Decimal = Field(
        ...,
        description="Total tax paid; must be greater than zero",
        examples=[1000, 54321.75],
    )


class TaxDistributionResponse(BaseModel):
    """Fixed-percentage distribution of a tax payment."""

    year: int = Field(..., description="Fiscal year of the sector table", examples=[2024])
    distribution: dict[str, float] = Field(
        ...,
        description="Sector -> allocated amount",
        examples=[
            {
                "Defense": 300.0,
                "Education": 150.0,
                "Healthcare": 200.0,
                "Infrastructure": 250.0,
                "Other": 100.0,
            }
        ],
    )


class BudgetDistributionResponse(BaseModel):
    """Budget-proportional distribution of a tax payment, formatted for display."""

    total_tax_paid: float = Field(..., description="Amount that was distributed")
    distributed_tax: dict[str, str] = Field(
        ...,
        description="Budget category -> formatted amount",
        examples=[{"Defence": "₹132.45", "Education": "₹54.10"}],
    )


class TaxHistoryItem(BaseModel):
    """One stored fixed-percentage distribution."""

    total_tax_paid: float
    distribution: dict[str, float]
    created_at: datetime


class TaxHistoryResponse(BaseModel):
    """Stored distributions of the caller, newest first."""

    tax_history: list[TaxHistoryItem] = Field(default_factory=list)


class BudgetWeightsResponse(BaseModel):
    """Current budget weight table."""

    source: str = Field(..., description="Where the table was loaded from")
    total_weight: float = Field(..., description="Sum of all category weights")
    weights: dict[str, float] = Field(
        ...,
        description="Budget category -> allocation in the published budget",
        examples=[{"Defence": 621940.85, "Education": 112898.97}],
    )
