"""Core application constants."""

from decimal import Decimal

# Time constants
MILLISECONDS_PER_SECOND = 1000

# Money
CENT = Decimal("0.01")
# Stored amounts are Numeric(MONEY_PRECISION, MONEY_SCALE)
MONEY_PRECISION = 14
MONEY_SCALE = 2
MAX_AMOUNT = Decimal(10) ** (MONEY_PRECISION - MONEY_SCALE) - CENT
DEFAULT_CURRENCY_SYMBOL = "₹"
DEFAULT_FISCAL_YEAR = 2024

# Security and redaction
REDACTED = "[REDACTED]"
BEARER_SCHEME = "bearer"
DEFAULT_JWT_SECRET = "change-me-in-production"  # noqa: S105 - placeholder
