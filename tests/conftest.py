"""Root conftest.py for the Taxmap test suite.

Project-wide fixtures and pytest configuration.
"""

import os
from collections.abc import Generator
from pathlib import Path

import orjson
import pytest
from loguru import logger

# Keep the module-level app created on import from installing a tracer provider
os.environ.setdefault("OBSERVABILITY_CONFIG__ENABLE_TRACING", "false")

from src.core.config import get_settings  # noqa: E402
from src.core.context import RequestContext  # noqa: E402
from src.core.error_context import _get_sensitive_fields  # noqa: E402
from src.core.logging import _state  # noqa: E402

APP_ENV_PREFIXES = (
    "APP_",
    "API_",
    "ENVIRONMENT",
    "DEBUG",
    "LOG_CONFIG__",
    "DATABASE_CONFIG__",
    "AUTH_CONFIG__",
    "BUDGET_CONFIG__",
)


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that test individual components in isolation"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that test multiple components"
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove application env vars so every test starts from the defaults."""
    for key in list(os.environ):
        if key.startswith(APP_ENV_PREFIXES):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture(autouse=True)
def clean_caches() -> Generator[None]:
    """Clear cached settings and sensitive field lists around each test."""
    get_settings.cache_clear()
    _get_sensitive_fields.cache_clear()
    yield
    get_settings.cache_clear()
    _get_sensitive_fields.cache_clear()


@pytest.fixture(autouse=True)
def clean_request_context() -> Generator[None]:
    """Make sure no correlation ID leaks between tests."""
    RequestContext.clear()
    yield
    RequestContext.clear()


@pytest.fixture(autouse=True)
def quiet_logging() -> None:
    """Skip sink setup in create_app; tests attach their own sinks."""
    _state.configured = True


@pytest.fixture
def budget_file(tmp_path: Path) -> Path:
    """Write a small budget document and return its path."""
    path = tmp_path / "budget.json"
    path.write_bytes(
        orjson.dumps({"Defence": 600.0, "Education": 300.0, "Health": 100.0})
    )
    return path


@pytest.fixture
def log_messages() -> Generator[list[str]]:
    """Collect Loguru messages emitted during the test."""
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level=0)
    yield messages
    logger.remove(handler_id)
