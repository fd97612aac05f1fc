"""Tax distribution allocator.

Splits a tax amount across spending categories using one of two weight
tables:

- **fixed**: constant sector percentages that already sum to 1, applied
  directly (``allocate_fixed``)
- **proportional**: budget weights of arbitrary scale, normalized by their
  sum before use (``allocate_proportional``)

Both strategies are pure functions over ``Decimal``. Amounts are rounded to
cents with half-away-from-zero rounding, categories are processed in
lexicographic order, and float weights enter the computation through their
shortest ``repr`` so identical input always yields identical output.
Formatting for display (currency symbol, two decimals) is kept apart from
the numeric result.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from types import MappingProxyType

from src.core.constants import CENT, DEFAULT_CURRENCY_SYMBOL, MAX_AMOUNT
from src.core.exceptions import DegenerateWeightsError, InvalidAmountError
from src.core.types import Breakdown, FormattedBreakdown

ZERO = Decimal(0)

FIXED_SECTOR_WEIGHTS: Mapping[str, Decimal] = MappingProxyType(
    {
        "Education": Decimal("0.15"),
        "Healthcare": Decimal("0.20"),
        "Defense": Decimal("0.30"),
        "Infrastructure": Decimal("0.25"),
        "Other": Decimal("0.10"),
    }
)


@dataclass(frozen=True)
class AllocationResult:
    """Per-category breakdown of a distributed amount.

    Attributes:
        total: The amount that was distributed.
        amounts: Category -> allocated amount in cents precision, ordered by
            category name.
    """

    total: Decimal
    amounts: Breakdown = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "amounts", MappingProxyType(dict(self.amounts)))

    @property
    def allocated_total(self) -> Decimal:
        """Sum of the rounded category amounts."""
        return sum(self.amounts.values(), ZERO)

    @property
    def rounding_drift(self) -> Decimal:
        """Difference between the allocated sum and the requested total."""
        return self.allocated_total - self.total

    def as_dict(self) -> dict[str, Decimal]:
        return dict(self.amounts)


def round_half_away_from_zero(value: Decimal, quantum: Decimal = CENT) -> Decimal:
    """Round ``value`` to ``quantum`` with ties going away from zero."""
    # Decimal's ROUND_HALF_UP rounds ties away from zero for both signs
    return value.quantize(quantum, rounding=ROUND_HALF_UP)


def validate_amount(total: object) -> Decimal:
    """Coerce ``total`` to ``Decimal`` and check it is strictly positive.

    Args:
        total: Amount supplied by the caller (Decimal, int, float or str).

    Returns:
        Decimal: The validated amount.

    Raises:
        InvalidAmountError: If the value is not a finite number greater than 0
            and at most ``MAX_AMOUNT``.
    """
    if isinstance(total, bool):
        raise InvalidAmountError(total)
    try:
        amount = total if isinstance(total, Decimal) else Decimal(str(total))
    except (InvalidOperation, ValueError, TypeError) as e:
        raise InvalidAmountError(total, "Tax amount must be a number") from e

    if not amount.is_finite() or amount <= ZERO:
        raise InvalidAmountError(total)
    if amount > MAX_AMOUNT:
        raise InvalidAmountError(total, f"Tax amount must not exceed {MAX_AMOUNT}")
    return amount


def _as_decimal(weight: float | Decimal) -> Decimal:
    if isinstance(weight, Decimal):
        return weight
    return Decimal(repr(float(weight)))


def normalize_weights(weights: Mapping[str, float | Decimal]) -> dict[str, Decimal]:
    """Turn relative weights into shares that sum to 1.

    Args:
        weights: Category -> non-negative weight.

    Returns:
        dict[str, Decimal]: Category -> ``weight / total_weight``, ordered by
            category name.

    Raises:
        DegenerateWeightsError: If there are no categories or the weights sum
            to zero or less.
    """
    ordered = {category: _as_decimal(weights[category]) for category in sorted(weights)}
    total_weight = sum(ordered.values(), ZERO)

    if not ordered or total_weight <= ZERO:
        raise DegenerateWeightsError(total_weight, len(ordered))

    return {category: weight / total_weight for category, weight in ordered.items()}


def allocate_fixed(
    total: object,
    weights: Mapping[str, Decimal] = FIXED_SECTOR_WEIGHTS,
) -> AllocationResult:
    """Distribute ``total`` with a pre-normalized percentage table.

    Each category receives ``total * weight`` rounded to cents; the table is
    trusted to sum to 1 and is not re-normalized.

    Raises:
        InvalidAmountError: If ``total`` is not strictly positive.
        ValueError: If the table contains a negative percentage.
    """
    amount = validate_amount(total)

    amounts: dict[str, Decimal] = {}
    for category in sorted(weights):
        weight = _as_decimal(weights[category])
        if weight < ZERO:
            msg = f"Fixed weight for {category!r} is negative"
            raise ValueError(msg)
        amounts[category] = round_half_away_from_zero(amount * weight)

    return AllocationResult(total=amount, amounts=amounts)


def allocate_proportional(
    total: object,
    weights: Mapping[str, float | Decimal],
) -> AllocationResult:
    """Distribute ``total`` in proportion to budget weights of any scale.

    For each category: ``share = weight / sum(weights)``,
    ``amount = round_half_away_from_zero(share * total, 2)``. The rounded
    amounts sum to ``total`` within one cent per category.

    Raises:
        InvalidAmountError: If ``total`` is not strictly positive. Checked
            before the weights are looked at.
        DegenerateWeightsError: If the weights sum to zero.
    """
    amount = validate_amount(total)
    shares = normalize_weights(weights)

    return AllocationResult(
        total=amount,
        amounts={
            category: round_half_away_from_zero(share * amount)
            for category, share in shares.items()
        },
    )


def format_currency(amount: Decimal, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """Render an amount as ``<symbol><amount with two decimals>``.

    Examples:
        >>> format_currency(Decimal("1234.5"))
        '₹1234.50'
    """
    return f"{symbol}{round_half_away_from_zero(amount):f}"


def format_breakdown(
    result: AllocationResult, symbol: str = DEFAULT_CURRENCY_SYMBOL
) -> FormattedBreakdown:
    """Render every category amount of ``result`` with ``format_currency``."""
    return {
        category: format_currency(amount, symbol)
        for category, amount in result.amounts.items()
    }
