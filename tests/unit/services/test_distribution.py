"""Unit tests for the distribution service flows."""

from datetime import UTC, datetime
from decimal import Decimal
from typing import cast

import pytest
from pytest_mock import MockerFixture, MockType

from src.core.exceptions import (
    DegenerateWeightsError,
    InvalidAmountError,
    PersistenceError,
    UnauthorizedError,
)
from src.domain.weights import WeightTable
from src.infrastructure.database.models import TaxRecord
from src.services.distribution import DistributionService, distribute_dynamic


def make_record(
    record_id: int, distribution: object, total: Decimal = Decimal(1000)
) -> TaxRecord:
    return TaxRecord(
        id=record_id,
        user_id="11",
        total_tax_paid=total,
        distribution=distribution,
        created_at=datetime(2024, 6, record_id, tzinfo=UTC),
    )


@pytest.fixture
def records(mocker: MockerFixture) -> MockType:
    """Repository double implementing save / list_by_identity."""
    store = mocker.AsyncMock()
    store.save.return_value = TaxRecord(id=1, user_id="11")
    store.list_by_identity.return_value = []
    return cast("MockType", store)


@pytest.fixture
def service(records: MockType) -> DistributionService:
    return DistributionService(records, fiscal_year=2024)


@pytest.mark.unit
class TestDistributeFixed:
    """Fixed-percentage flow."""

    async def test_allocates_and_saves(
        self, service: DistributionService, records: MockType
    ) -> None:
        distribution = await service.distribute_fixed("11", Decimal(1000))

        assert distribution.year == 2024
        assert distribution.result.as_dict() == {
            "Defense": Decimal("300.00"),
            "Education": Decimal("150.00"),
            "Healthcare": Decimal("200.00"),
            "Infrastructure": Decimal("250.00"),
            "Other": Decimal("100.00"),
        }
        records.save.assert_awaited_once_with(
            "11", Decimal(1000), distribution.result.amounts
        )

    @pytest.mark.parametrize("amount", [Decimal(0), Decimal(-10)])
    async def test_invalid_amount_saves_nothing(
        self, service: DistributionService, records: MockType, amount: Decimal
    ) -> None:
        with pytest.raises(InvalidAmountError):
            await service.distribute_fixed("11", amount)

        records.save.assert_not_awaited()

    async def test_missing_identity(
        self, service: DistributionService, records: MockType
    ) -> None:
        with pytest.raises(UnauthorizedError):
            await service.distribute_fixed("", Decimal(100))

        records.save.assert_not_awaited()

    async def test_persistence_failure_is_reported_and_logged(
        self,
        service: DistributionService,
        records: MockType,
        log_messages: list[str],
    ) -> None:
        records.save.side_effect = PersistenceError("Failed to save tax data")

        with pytest.raises(PersistenceError):
            await service.distribute_fixed("11", Decimal(100))

        assert any("could not be saved" in message for message in log_messages)


@pytest.mark.unit
class TestHistory:
    """Listing stored distributions."""

    async def test_empty_history(self, service: DistributionService) -> None:
        assert await service.history("nobody") == []

    async def test_decodes_records_in_given_order(
        self, service: DistributionService, records: MockType
    ) -> None:
        records.list_by_identity.return_value = [
            make_record(2, {"Other": "10.00", "Defense": "30.00"}, Decimal(100)),
            make_record(1, {"Defense": "3.00"}, Decimal(10)),
        ]

        entries = await service.history("11")

        assert [entry.total_tax_paid for entry in entries] == [
            Decimal(100),
            Decimal(10),
        ]
        assert entries[0].distribution == {
            "Defense": Decimal("30.00"),
            "Other": Decimal("10.00"),
        }
        assert list(entries[0].distribution) == ["Defense", "Other"]
        assert entries[0].created_at == datetime(2024, 6, 2, tzinfo=UTC)

    @pytest.mark.parametrize(
        "distribution",
        [["not", "an", "object"], {"A": "abc"}, {"A": "NaN"}, None],
    )
    async def test_malformed_rows_are_skipped(
        self,
        service: DistributionService,
        records: MockType,
        log_messages: list[str],
        distribution: object,
    ) -> None:
        records.list_by_identity.return_value = [
            make_record(3, distribution),
            make_record(2, {"A": "1.00"}),
        ]

        entries = await service.history("11")

        assert len(entries) == 1
        assert entries[0].distribution == {"A": Decimal("1.00")}
        assert any("Skipping malformed" in message for message in log_messages)

    async def test_read_failure_propagates(
        self, service: DistributionService, records: MockType
    ) -> None:
        records.list_by_identity.side_effect = PersistenceError(
            "Failed to fetch tax records"
        )

        with pytest.raises(PersistenceError):
            await service.history("11")

    async def test_missing_identity(self, service: DistributionService) -> None:
        with pytest.raises(UnauthorizedError):
            await service.history("")


@pytest.mark.unit
class TestDistributeDynamic:
    """Budget-proportional flow."""

    def test_uses_current_table(self) -> None:
        table = WeightTable.from_mapping({"A": 1.0, "B": 3.0})

        result = distribute_dynamic(Decimal(100), table)

        assert result.as_dict() == {"A": Decimal("25.00"), "B": Decimal("75.00")}

    def test_sees_replaced_table(self) -> None:
        table = WeightTable.from_mapping({"A": 1.0})
        table.replace({"B": 1.0, "C": 1.0})

        result = distribute_dynamic(Decimal(10), table)

        assert result.as_dict() == {"B": Decimal("5.00"), "C": Decimal("5.00")}

    def test_invalid_amount(self) -> None:
        table = WeightTable.from_mapping({"A": 1.0})

        with pytest.raises(InvalidAmountError):
            distribute_dynamic(Decimal(0), table)

    def test_degenerate_table(self, mocker: MockerFixture) -> None:
        table = WeightTable.from_mapping({"A": 1.0})
        mocker.patch.object(table, "snapshot", return_value={"A": 0.0})

        with pytest.raises(DegenerateWeightsError):
            distribute_dynamic(Decimal(10), table)
