"""HTTP routes mounted under ``/api``.

- **auth**: signup and login stubs issuing access tokens
- **budget**: the weight table and the budget-proportional distribution
- **tax**: fixed-percentage distribution and the caller's history
"""

from src.api.routes.auth import router as auth_router
from src.api.routes.budget import router as budget_router
from src.api.routes.tax import router as tax_router

__all__ = ["auth_router", "budget_router", "tax_router"]
