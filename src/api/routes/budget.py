"""Budget weight table and budget-proportional distribution."""

from fastapi import APIRouter

from src.api.constants import API_PREFIX
from src.api.dependencies import AppSettings, BudgetWeights
from src.api.schemas.tax import (
    BudgetDistributionResponse,
    BudgetWeightsResponse,
    TaxPaymentRequest,
)
from src.domain.allocation import format_breakdown
from src.services.distribution import distribute_dynamic

router = APIRouter(prefix=API_PREFIX, tags=["budget"])


@router.get("/budget")
async def get_budget(table: BudgetWeights) -> BudgetWeightsResponse:
    """Return the weight table currently used by the proportional flow."""
    return BudgetWeightsResponse(
        source=table.source,
        total_weight=table.total_weight,
        weights=dict(table.snapshot()),
    )


@router.post("/budget-tax-distribution")
async def budget_tax_distribution(
    payload: TaxPaymentRequest,
    table: BudgetWeights,
    settings: AppSettings,
) -> BudgetDistributionResponse:
    """Split the amount across budget categories in proportion to their weights.

    Amounts are rounded half away from zero to two decimals and rendered as
    currency strings. Nothing is stored.
    """
    result = distribute_dynamic(payload.total_tax_paid, table)
    return BudgetDistributionResponse(
        total_tax_paid=float(result.total),
        distributed_tax=format_breakdown(
            result, settings.budget_config.currency_symbol
        ),
    )
