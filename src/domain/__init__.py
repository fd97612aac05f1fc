"""Tax distribution domain: the allocation engine and its weight table.

- **allocation**: pure fixed-percentage and proportional allocators, plus
  currency formatting kept apart from the numeric result
- **weights**: the shared budget weight table with lock-free reads and
  atomic replacement

Nothing in this package touches HTTP, the database or request context.
"""

from src.domain.allocation import (
    FIXED_SECTOR_WEIGHTS,
    AllocationResult,
    allocate_fixed,
    allocate_proportional,
    format_breakdown,
    format_currency,
    validate_amount,
)
from src.domain.weights import WeightTable

__all__ = [
    "FIXED_SECTOR_WEIGHTS",
    "AllocationResult",
    "WeightTable",
    "allocate_fixed",
    "allocate_proportional",
    "format_breakdown",
    "format_currency",
    "validate_amount",
]
