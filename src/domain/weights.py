"""Process-wide budget weight table used by proportional allocation.

The table maps budget categories (ministries, departments...) to their
allocation in the published budget. Weights are relative: they are not
expected to sum to 1, the allocator normalizes them.

Concurrency model: the published snapshot is a read-only mapping that is
never mutated after publication. Readers take no lock; they grab the
current snapshot reference and work from it. Writers validate the new
table first, then swap the reference under an exclusive lock, so a reader
sees either the old table or the new one, never a mixture.
"""

import math
import threading
from collections.abc import Mapping
from numbers import Real
from pathlib import Path
from types import MappingProxyType

import orjson
from loguru import logger

from src.core.exceptions import MalformedWeightDataError, WeightSourceUnreadableError
from src.core.types import WeightMapping

IN_MEMORY_SOURCE = "<memory>"


def _validate_weights(raw: object, source: str) -> dict[str, float]:
    """Check a decoded document and return its weights ordered by category.

    Raises:
        MalformedWeightDataError: If the document is not a non-empty object of
            category names to finite, non-negative numbers with a positive sum.
    """
    if not isinstance(raw, Mapping):
        raise MalformedWeightDataError(
            source, f"expected an object of category weights, got {type(raw).__name__}"
        )
    if not raw:
        raise MalformedWeightDataError(source, "no categories defined")

    weights: dict[str, float] = {}
    for category in sorted(raw, key=str):
        value = raw[category]
        if not isinstance(category, str) or not category.strip():
            raise MalformedWeightDataError(source, "category names must be non-empty")
        if isinstance(value, bool) or not isinstance(value, Real):
            raise MalformedWeightDataError(
                source, f"weight for {category!r} is not a number"
            )
        weight = float(value)
        if not math.isfinite(weight) or weight < 0:
            raise MalformedWeightDataError(
                source, f"weight for {category!r} must be a finite non-negative number"
            )
        weights[category] = weight

    if math.fsum(weights.values()) <= 0:
        raise MalformedWeightDataError(source, "weights must sum to more than zero")

    return weights


def read_weight_source(source: Path | str) -> dict[str, float]:
    """Read and validate a JSON weight document.

    Args:
        source: Path to a JSON object of ``{category: weight}``.

    Returns:
        dict[str, float]: Validated weights ordered by category name.

    Raises:
        WeightSourceUnreadableError: If the file is missing or unreadable.
        MalformedWeightDataError: If the content is not a valid weight table.
    """
    path = Path(source)
    try:
        payload = path.read_bytes()
    except OSError as e:
        raise WeightSourceUnreadableError(str(path), cause=e) from e

    try:
        document = orjson.loads(payload)
    except orjson.JSONDecodeError as e:
        raise MalformedWeightDataError(str(path), "invalid JSON", cause=e) from e

    return _validate_weights(document, str(path))


class WeightTable:
    """Shared, atomically replaceable category -> weight table.

    Args:
        weights: Initial category weights.
        source: Where the weights came from, for logs and errors.

    Raises:
        MalformedWeightDataError: If ``weights`` is not a valid table.
    """

    def __init__(self, weights: WeightMapping, source: str = IN_MEMORY_SOURCE) -> None:
        self._write_lock = threading.Lock()
        self._source = source
        self._snapshot: Mapping[str, float] = MappingProxyType(
            _validate_weights(weights, source)
        )

    @classmethod
    def load(cls, source: Path | str) -> "WeightTable":
        """Build a table from a JSON document on disk."""
        weights = read_weight_source(source)
        table = cls(weights, source=str(source))
        logger.info(
            "Budget weight table loaded",
            source=str(source),
            category_count=len(weights),
        )
        return table

    @classmethod
    def from_mapping(cls, weights: WeightMapping) -> "WeightTable":
        """Build a table from in-memory weights."""
        return cls(weights)

    def snapshot(self) -> Mapping[str, float]:
        """Return the current table as a read-only, consistent mapping."""
        return self._snapshot

    def replace(self, weights: WeightMapping, source: str = IN_MEMORY_SOURCE) -> None:
        """Atomically publish a new table.

        The new weights are validated before the swap; on failure the current
        table stays in place.
        """
        validated = MappingProxyType(_validate_weights(weights, source))
        with self._write_lock:
            self._snapshot = validated
            self._source = source
        logger.info(
            "Budget weight table replaced",
            source=source,
            category_count=len(validated),
        )

    def refresh(self, source: Path | str | None = None) -> None:
        """Reload the table from ``source`` (defaults to the original file)."""
        target = str(source) if source is not None else self._source
        if target == IN_MEMORY_SOURCE:
            msg = "An in-memory weight table has no source to refresh from"
            raise ValueError(msg)
        self.replace(read_weight_source(target), source=target)

    @property
    def source(self) -> str:
        return self._source

    @property
    def categories(self) -> tuple[str, ...]:
        return tuple(self._snapshot)

    @property
    def total_weight(self) -> float:
        return math.fsum(self._snapshot.values())

    def __len__(self) -> int:
        return len(self._snapshot)

    def __contains__(self, category: object) -> bool:
        return category in self._snapshot

    def __repr__(self) -> str:
        return f"<WeightTable(source={self._source!r}, categories={len(self)})>"
