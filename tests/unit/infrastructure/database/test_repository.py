"""Unit tests for the tax record repository with a mocked session."""

from datetime import UTC, datetime
from decimal import Decimal
from typing import cast

import pytest
from pytest_mock import MockerFixture, MockType
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.exceptions import PersistenceError
from src.infrastructure.database.models import TaxRecord
from src.infrastructure.database.repository import TaxRecordRepository


@pytest.fixture
def mock_session(mocker: MockerFixture) -> MockType:
    """AsyncSession double whose ``refresh`` fills server defaults."""
    session = mocker.AsyncMock(spec=AsyncSession)
    session.add = mocker.Mock()

    async def refresh(obj: TaxRecord) -> None:
        obj.id = 1
        obj.created_at = datetime(2024, 6, 14, tzinfo=UTC)

    session.refresh.side_effect = refresh
    return cast("MockType", session)


@pytest.mark.unit
class TestTaxRecordRepositorySave:
    """Persisting one distribution."""

    async def test_stores_amounts_as_decimal_strings(
        self, mock_session: MockType
    ) -> None:
        repository = TaxRecordRepository(mock_session)

        record = await repository.save(
            "11",
            Decimal(1000),
            {"Defense": Decimal("300.00"), "Other": Decimal("100.00")},
        )

        mock_session.add.assert_called_once_with(record)
        mock_session.flush.assert_awaited_once()
        assert record.id == 1
        assert record.user_id == "11"
        assert record.total_tax_paid == Decimal(1000)
        assert record.distribution == {"Defense": "300.00", "Other": "100.00"}

    async def test_database_error_becomes_persistence_error(
        self, mock_session: MockType
    ) -> None:
        mock_session.flush.side_effect = OperationalError(
            "INSERT", {}, Exception("connection lost")
        )
        repository = TaxRecordRepository(mock_session)

        with pytest.raises(PersistenceError) as exc_info:
            await repository.save("11", Decimal(10), {"A": Decimal(10)})

        assert exc_info.value.message == "Failed to save tax data"
        assert isinstance(exc_info.value.cause, OperationalError)


@pytest.mark.unit
class TestTaxRecordRepositoryList:
    """Listing records for an identity."""

    async def test_returns_rows_from_query(
        self, mocker: MockerFixture, mock_session: MockType
    ) -> None:
        rows = [TaxRecord(user_id="11"), TaxRecord(user_id="11")]
        result = mocker.Mock()
        result.scalars.return_value.all.return_value = rows
        mock_session.execute.return_value = result
        repository = TaxRecordRepository(mock_session)

        records = await repository.list_by_identity("11")

        assert records == rows
        statement = str(mock_session.execute.await_args.args[0])
        assert "WHERE tax_records.user_id = " in statement
        assert "ORDER BY tax_records.created_at DESC, tax_records.id DESC" in statement

    async def test_empty_result(
        self, mocker: MockerFixture, mock_session: MockType
    ) -> None:
        result = mocker.Mock()
        result.scalars.return_value.all.return_value = []
        mock_session.execute.return_value = result

        assert await TaxRecordRepository(mock_session).list_by_identity("42") == []

    async def test_database_error_becomes_persistence_error(
        self, mock_session: MockType
    ) -> None:
        mock_session.execute.side_effect = OperationalError(
            "SELECT", {}, Exception("timeout")
        )

        with pytest.raises(PersistenceError, match="Failed to fetch tax records"):
            await TaxRecordRepository(mock_session).list_by_identity("11")


