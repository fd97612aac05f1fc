"""Type aliases shared by the allocation core and the layers around it.

The allocation engine works with three shapes of data: weight tables read
from the budget document, exact decimal breakdowns produced by the
allocator, and display-ready breakdowns rendered for API clients. Naming
them here keeps signatures readable across the domain, service and API
layers.
"""

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

# Opaque, already-verified caller identifier (the token subject)
type Identity = str

# Category name -> relative weight, as loaded from the budget document
type WeightMapping = Mapping[str, float]

# Category name -> exact allocated amount (cents precision)
type Breakdown = Mapping[str, Decimal]

# Category name -> formatted currency string, e.g. "₹1234.56"
type FormattedBreakdown = dict[str, str]

# Context dictionary for error details and debugging information
# Values must be JSON-serializable for API responses
type ErrorContext = dict[str, Any]
