"""FastAPI dependencies shared by the API routes."""

from typing import Annotated

from fastapi import Depends, Header, Request

from src.core.config import Settings, get_settings
from src.core.exceptions import ErrorCode, Severity, TaxmapError
from src.core.security import decode_access_token, extract_bearer_token
from src.core.types import Identity
from src.domain.weights import WeightTable
from src.infrastructure.database.dependencies import TaxRecords
from src.services.distribution import DistributionService

AppSettings = Annotated[Settings, Depends(get_settings)]


def get_weight_table(request: Request) -> WeightTable:
    """Return the weight table loaded at startup.

    Raises:
        TaxmapError: If the application started without a weight table.
    """
    table = getattr(request.app.state, "weight_table", None)
    if table is None:
        raise TaxmapError(
            ErrorCode.INTERNAL_ERROR,
            "Budget weight table is not loaded",
            severity=Severity.CRITICAL,
        )
    return table


BudgetWeights = Annotated[WeightTable, Depends(get_weight_table)]


def get_current_identity(
    settings: AppSettings,
    authorization: Annotated[str | None, Header()] = None,
) -> Identity:
    """Resolve the caller identity from the ``Authorization`` header.

    Raises:
        UnauthorizedError: If the header is missing or the token does not verify.
    """
    token = extract_bearer_token(authorization)
    return decode_access_token(token, settings.auth_config)


CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]


def get_distribution_service(
    records: TaxRecords, settings: AppSettings
) -> DistributionService:
    """Build the distribution service on the request's repository."""
    return DistributionService(records, settings.budget_config.fiscal_year)


Distributions = Annotated[DistributionService, Depends(get_distribution_service)]
