"""Structured exception hierarchy for the tax distribution service.

Every error the service can report derives from ``TaxmapError``, which
carries a machine-readable error code, a severity, structured context and
an optional cause. The API layer maps each subclass to an HTTP status code
in one place (``src.api.middleware.error_handler``).

Taxonomy:
- **InvalidAmountError**: the submitted tax amount is zero or negative (400)
- **UnauthorizedError**: the caller identity is missing or invalid (401)
- **DegenerateWeightsError**: the weight table sums to zero (500)
- **WeightSourceUnreadableError / MalformedWeightDataError**: the budget
  document cannot be loaded; fatal at startup
- **PersistenceError**: a tax record could not be written or read (500)
"""

import hashlib
import traceback
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for the service."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    """An unexpected internal error occurred in the system."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    """Input validation failed due to invalid or malformed data."""

    INVALID_AMOUNT = "INVALID_AMOUNT"
    """The tax amount to distribute is not strictly positive."""

    UNAUTHORIZED = "UNAUTHORIZED"
    """Authentication failed or no identity was supplied."""

    DEGENERATE_WEIGHTS = "DEGENERATE_WEIGHTS"
    """The weight table has no usable weights (sum is zero)."""

    WEIGHT_SOURCE_UNREADABLE = "WEIGHT_SOURCE_UNREADABLE"
    """The budget weight document is missing or cannot be read."""

    MALFORMED_WEIGHT_DATA = "MALFORMED_WEIGHT_DATA"
    """The budget weight document does not describe a valid weight table."""

    PERSISTENCE_FAILURE = "PERSISTENCE_FAILURE"
    """Reading or writing tax records failed."""


class Severity(Enum):
    """Severity levels used for log levels and alerting."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class TaxmapError(Exception):
    """Base exception class for all service exceptions.

    Args:
        error_code: Unique identifier for the error type (string or ErrorCode enum)
        message: Human-readable error message
        severity: Severity level of the error (defaults to MEDIUM)
        context: Additional context information about the error
        cause: The original exception that caused this error
    """

    def __init__(
        self,
        error_code: str | ErrorCode,
        message: str,
        severity: Severity = Severity.MEDIUM,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.error_code = (
            error_code.value if isinstance(error_code, ErrorCode) else error_code
        )
        self.message = message
        self.severity = severity
        self.context = context or {}
        self.cause = cause

        self.stack_trace = traceback.format_stack()[:-1]
        self.fingerprint = self._generate_fingerprint()

        super().__init__(message)
        if cause:
            self.__cause__ = cause

    def _generate_fingerprint(self) -> str:
        """Hash the error type and raising location for grouping in log search.

        Returns:
            str: A 16 character hex digest.
        """
        max_frames = 5
        relevant_frames = self.stack_trace[-max_frames:]

        fingerprint_data = f"{self.__class__.__name__}:{self.error_code}"
        for frame in relevant_frames:
            if "site-packages" not in frame and "src/" in frame:
                lines = frame.strip().split("\n")
                if lines:
                    fingerprint_data += f":{lines[0]}"

        return hashlib.sha256(fingerprint_data.encode()).hexdigest()[:16]

    @property
    def is_expected(self) -> bool:
        """Whether the error comes from normal operation (LOW or MEDIUM severity)."""
        return self.severity in (Severity.LOW, Severity.MEDIUM)

    @property
    def should_alert(self) -> bool:
        """Whether the error should page someone (HIGH or CRITICAL severity)."""
        return self.severity in (Severity.HIGH, Severity.CRITICAL)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        class_name = self.__class__.__name__
        context_str = f", context={self.context}" if self.context else ""
        return (
            f"{class_name}(error_code='{self.error_code}', "
            f"message='{self.message}', severity={self.severity.value}{context_str})"
        )


class ValidationError(TaxmapError):
    """Raised when caller-supplied input breaks a business validation rule.

    Args:
        message: Description of the validation failure
        error_code: Error code (defaults to VALIDATION_ERROR)
        context: Additional context information about the error
        cause: The original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode = ErrorCode.VALIDATION_ERROR,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(error_code, message, Severity.LOW, context, cause)


class InvalidAmountError(ValidationError):
    """Raised when the amount to distribute is not strictly positive.

    Detected before any allocation or persistence work begins.
    """

    def __init__(
        self,
        amount: object,
        message: str = "Tax amount must be greater than zero",
    ) -> None:
        super().__init__(
            message,
            error_code=ErrorCode.INVALID_AMOUNT,
            context={"total_tax_paid": str(amount)},
        )


class UnauthorizedError(TaxmapError):
    """Raised when the caller cannot be identified.

    Args:
        message: Description of the authentication failure
        error_code: Error code (defaults to UNAUTHORIZED)
        context: Additional context information about the error
        cause: The original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode = ErrorCode.UNAUTHORIZED,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(error_code, message, Severity.HIGH, context, cause)


class DegenerateWeightsError(TaxmapError):
    """Raised when a weight table cannot be normalized (sum of weights <= 0).

    This is a server misconfiguration, never a caller error.
    """

    def __init__(self, total_weight: object, category_count: int) -> None:
        super().__init__(
            ErrorCode.DEGENERATE_WEIGHTS,
            "Weight table has no positive weights to distribute against",
            Severity.HIGH,
            {"total_weight": str(total_weight), "category_count": category_count},
        )


class WeightSourceError(TaxmapError):
    """Base class for failures while loading the budget weight document."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        source: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            error_code, message, Severity.CRITICAL, {"source": source}, cause
        )


class WeightSourceUnreadableError(WeightSourceError):
    """Raised when the budget document is missing or cannot be read."""

    def __init__(self, source: str, cause: Exception | None = None) -> None:
        super().__init__(
            ErrorCode.WEIGHT_SOURCE_UNREADABLE,
            f"Budget weight source could not be read: {source}",
            source,
            cause,
        )


class MalformedWeightDataError(WeightSourceError):
    """Raised when the budget document does not describe a usable weight table."""

    def __init__(
        self, source: str, reason: str, cause: Exception | None = None
    ) -> None:
        super().__init__(
            ErrorCode.MALFORMED_WEIGHT_DATA,
            f"Budget weight source is malformed: {reason}",
            source,
            cause,
        )
        self.reason = reason


class PersistenceError(TaxmapError):
    """Raised when tax records cannot be saved or listed.

    Args:
        message: What the persistence layer was trying to do
        context: Additional context information about the error
        cause: The original database exception
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            ErrorCode.PERSISTENCE_FAILURE, message, Severity.HIGH, context, cause
        )
