"""Tests for daily return calculation and the returns service."""

import math
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.models import DailyReturn, PriceRecord
from app.services.stock_return_service import StockReturnService, add_returns, round2


def _price(**fields) -> PriceRecord:
    return PriceRecord(**fields)


class TestRound2:
    def test_rounds_up_representation_above_half(self):
        assert round2(12.345 - 10) == 2.35

    def test_exact_tie_rounds_away_from_zero(self):
        # 0.125 is exact in binary; banker's rounding would give 0.12
        assert round2(0.125) == 0.13
        assert round2(-0.125) == -0.13

    def test_uses_stored_value_not_literal(self):
        # 1.005 is stored as 1.00499999...
        assert round2(1.005) == 1.0

    def test_negative_zero_normalised(self):
        result = round2(-0.001)
        assert result == 0.0
        assert math.copysign(1.0, result) == 1.0

    def test_nan_and_none(self):
        assert math.isnan(round2(math.nan))
        assert math.isnan(round2(None))

    def test_infinity_passes_through(self):
        assert round2(math.inf) == math.inf


class TestAddReturns:
    def test_basic_returns(self):
        records = [_price(open=10, close=12.345, fopen=10, fclose=12, uopen=10, uclose=12)]

        result = add_returns(records)

        assert len(result) == 1
        assert isinstance(result[0], DailyReturn)
        assert result[0].daily_return == 2.35
        assert result[0].f_daily_return == 2.0
        assert result[0].u_daily_return == 2.0

    def test_keeps_price_fields(self):
        record = _price(price_date="2023-01-03", symbol="AAPL", open=130.28, close=125.07, volume=112117471)

        result = add_returns([record])[0]

        assert result.price_date == "2023-01-03"
        assert result.symbol == "AAPL"
        assert result.volume == 112117471
        assert result.daily_return == -5.21

    def test_preserves_order(self):
        records = [
            _price(price_date="2023-01-05", open=1, close=2),
            _price(price_date="2023-01-03", open=1, close=3),
            _price(price_date="2023-01-04", open=1, close=4),
        ]

        result = add_returns(records)

        assert [r.price_date for r in result] == ["2023-01-05", "2023-01-03", "2023-01-04"]
        assert [r.daily_return for r in result] == [1.0, 2.0, 3.0]

    def test_missing_prices_give_nan(self):
        result = add_returns([_price(open=10, close=11)])[0]

        assert result.daily_return == 1.0
        assert math.isnan(result.f_daily_return)
        assert math.isnan(result.u_daily_return)

    def test_empty_list(self):
        assert add_returns([]) == []

    def test_non_list_returned_unchanged(self):
        sentinel = {"message": "not a series"}
        assert add_returns(sentinel) is sentinel
        assert add_returns(None) is None

    def test_applying_twice_does_not_compound(self):
        records = [
            _price(price_date="2023-01-03", open=10, close=12.345, fopen=9, fclose=11.5, uopen=20, uclose=19),
        ]

        once = add_returns(records)
        twice = add_returns(once)

        assert [r.model_dump() for r in twice] == [r.model_dump() for r in once]
        assert twice[0].daily_return == 2.35

    def test_input_not_mutated(self):
        record = _price(open=10, close=11)
        add_returns([record])
        assert record.model_dump() == {"open": 10.0, "close": 11.0}


class TestStockReturnService:
    @pytest.fixture
    def client(self):
        client = MagicMock()
        client.get_daily_prices = AsyncMock(return_value=[_price(price_date="2023-01-03", open=10, close=11)])
        return client

    @pytest.mark.asyncio
    async def test_year_to_date_without_range(self, client):
        envelope = await StockReturnService.get_returns(client, "AAPL")

        client.get_daily_prices.assert_awaited_once_with("AAPL", from_date=None, to_date=None)
        assert envelope.status == 200
        assert envelope.error is None
        assert envelope.data[0].daily_return == 1.0

    @pytest.mark.asyncio
    async def test_valid_range_forwarded(self, client):
        await StockReturnService.get_returns(client, "AAPL", "2023-01-01", "2023-01-31")

        client.get_daily_prices.assert_awaited_once_with("AAPL", from_date="2023-01-01", to_date="2023-01-31")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "from_date,to_date,message",
        [
            ("2023-01-01", None, "Kindly provide both FROM and TO to obtain values in a range"),
            ("2023-01-01", "2023-02-01", "From and To Dates cannot have difference more than 30 days"),
            ("2023-02-01", "2023-01-01", "From Date cannot be greater than To Date"),
        ],
    )
    async def test_rejected_ranges_skip_provider(self, client, from_date, to_date, message):
        envelope = await StockReturnService.get_returns(client, "AAPL", from_date, to_date)

        client.get_daily_prices.assert_not_called()
        assert envelope.status == 406
        assert envelope.error == message
        assert envelope.data == []

    @pytest.mark.asyncio
    async def test_empty_series_is_ok(self, client):
        client.get_daily_prices.return_value = []

        envelope = await StockReturnService.get_returns(client, "AAPL")

        assert envelope.status == 200
        assert envelope.data == []
