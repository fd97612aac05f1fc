"""Unit tests for src/core/config.py."""

from pathlib import Path

import pytest
import pytest_check
from pydantic import ValidationError

from src.core.config import (
    AuthConfig,
    BudgetConfig,
    DatabaseConfig,
    Settings,
    get_settings,
)


@pytest.mark.unit
class TestSettingsDefaults:
    """Defaults without any environment overrides."""

    def test_application_defaults(self) -> None:
        settings = Settings()

        pytest_check.equal(settings.app_name, "Taxmap")
        pytest_check.equal(settings.environment, "development")
        pytest_check.equal(settings.api_port, 8080)
        pytest_check.equal(settings.log_config.log_formatter_type, "console")
        pytest_check.equal(settings.budget_config.budget_file, Path("budget.json"))
        pytest_check.equal(settings.budget_config.currency_symbol, "₹")
        pytest_check.equal(settings.budget_config.fiscal_year, 2024)
        pytest_check.equal(settings.auth_config.demo_identity, "11")
        pytest_check.equal(settings.auth_config.token_ttl_hours, 24)
        pytest_check.is_true(settings.database_config.create_tables)

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()


@pytest.mark.unit
class TestEnvironmentOverrides:
    """Nested sections are overridable with the ``__`` delimiter."""

    def test_nested_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BUDGET_CONFIG__BUDGET_FILE", "/data/budget-2025.json")
        monkeypatch.setenv("BUDGET_CONFIG__FISCAL_YEAR", "2025")
        monkeypatch.setenv("AUTH_CONFIG__JWT_SECRET", "from-env")
        monkeypatch.setenv("AUTH_CONFIG__TOKEN_TTL_HOURS", "2")

        settings = Settings()

        assert settings.budget_config.budget_file == Path("/data/budget-2025.json")
        assert settings.budget_config.fiscal_year == 2025
        assert settings.auth_config.jwt_secret.get_secret_value() == "from-env"
        assert settings.auth_config.token_ttl_hours == 2

    def test_production_switches_to_json_and_otlp(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("AUTH_CONFIG__JWT_SECRET", "a-real-production-secret")
        monkeypatch.setenv("OBSERVABILITY_CONFIG__EXPORTER_TYPE", "console")
        monkeypatch.setenv("OBSERVABILITY_CONFIG__TRACE_SAMPLE_RATE", "1.0")

        settings = Settings()

        assert settings.log_config.log_formatter_type == "json"
        assert settings.observability_config.exporter_type == "otlp"
        assert settings.observability_config.trace_sample_rate == 0.1

    def test_production_requires_own_jwt_secret(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")

        with pytest.raises(ValueError, match="AUTH_CONFIG__JWT_SECRET"):
            Settings()

    def test_default_jwt_secret_allowed_outside_production(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("ENVIRONMENT", "staging")

        settings = Settings()

        assert settings.auth_config.jwt_secret.get_secret_value() == (
            "change-me-in-production"
        )

    def test_explicit_formatter_is_kept(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "staging")
        monkeypatch.setenv("LOG_CONFIG__LOG_FORMATTER_TYPE", "console")

        assert Settings().log_config.log_formatter_type == "console"

    def test_empty_docs_url_disables_docs(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DOCS_URL", "")

        assert Settings().docs_url is None


@pytest.mark.unit
class TestSectionValidation:
    """Validation rules of individual sections."""

    def test_database_url_requires_asyncpg(self) -> None:
        with pytest.raises(ValidationError, match="postgresql\\+asyncpg"):
            DatabaseConfig(database_url="postgresql://u:p@localhost/db")

    def test_secret_is_hidden_in_repr(self) -> None:
        config = AuthConfig()

        assert "change-me" not in repr(config)

    @pytest.mark.parametrize("ttl", [0, -1, 24 * 31])
    def test_token_ttl_bounds(self, ttl: int) -> None:
        with pytest.raises(ValidationError):
            AuthConfig(token_ttl_hours=ttl)

    def test_fiscal_year_bounds(self) -> None:
        with pytest.raises(ValidationError):
            BudgetConfig(fiscal_year=1800)
