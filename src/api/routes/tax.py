"""Fixed-percentage distribution and tax history for authenticated callers."""

from fastapi import APIRouter

from src.api.constants import API_PREFIX
from src.api.dependencies import CurrentIdentity, Distributions
from src.api.schemas.tax import (
    TaxDistributionResponse,
    TaxHistoryItem,
    TaxHistoryResponse,
    TaxPaymentRequest,
)

router = APIRouter(prefix=API_PREFIX, tags=["tax"])


@router.post("/tax-distribution")
async def tax_distribution(
    payload: TaxPaymentRequest,
    identity: CurrentIdentity,
    service: Distributions,
) -> TaxDistributionResponse:
    """Split the amount with the fixed sector percentages and store it."""
    distribution = await service.distribute_fixed(identity, payload.total_tax_paid)
    return TaxDistributionResponse(
        year=distribution.year,
        distribution={
            category: float(amount)
            for category, amount in distribution.result.amounts.items()
        },
    )


@router.get("/tax-history")
async def tax_history(
    identity: CurrentIdentity, service: Distributions
) -> TaxHistoryResponse:
    """List the caller's stored distributions, newest first."""
    entries = await service.history(identity)
    return TaxHistoryResponse(
        tax_history=[
            TaxHistoryItem(
                total_tax_paid=float(entry.total_tax_paid),
                distribution={
                    category: float(amount)
                    for category, amount in entry.distribution.items()
                },
                created_at=entry.created_at,
            )
            for entry in entries
        ]
    )
