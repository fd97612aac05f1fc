"""Correlation and request identifiers for log and trace correlation.

Only transport-level identifiers live here. The caller identity is never
stored in ambient context; it is passed explicitly from the authentication
dependency into the distribution service.
"""

import uuid
from contextvars import ContextVar

_correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)


class RequestContext:
    """Async-safe storage for the current request's correlation ID."""

    @staticmethod
    def set_correlation_id(correlation_id: str) -> None:
        """Set the correlation ID for the current context."""
        _correlation_id_var.set(correlation_id)

    @staticmethod
    def get_correlation_id() -> str | None:
        """Get the correlation ID from the current context, if any."""
        return _correlation_id_var.get()

    @staticmethod
    def clear() -> None:
        """Reset the context at the end of a request."""
        _correlation_id_var.set(None)


def generate_correlation_id() -> str:
    """Return a new UUID4 string for cross-service correlation.

    Examples:
        >>> len(generate_correlation_id())
        36
    """
    return str(uuid.uuid4())


def generate_request_id() -> str:
    """Return a new per-request identifier in the form ``req-<uuid4>``.

    Examples:
        >>> generate_request_id().startswith("req-")
        True
    """
    return f"req-{uuid.uuid4()}"
