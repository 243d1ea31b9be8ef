"""Tests for quote series providers."""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from goldsim.models.quote import QuoteDaily
from goldsim.services.simulation import InMemoryQuoteProvider, SqlQuoteProvider


def _session_factory(rows: list[QuoteDaily]) -> tuple[MagicMock, AsyncMock]:
    """Fake async_session() returning rows from execute()."""
    result = MagicMock()
    result.scalars.return_value.all.return_value = rows

    session = AsyncMock()
    session.execute = AsyncMock(return_value=result)

    factory = MagicMock()
    factory.return_value.__aenter__.return_value = session
    factory.return_value.__aexit__.return_value = False
    return factory, session


class TestInMemoryQuoteProvider:
    @pytest.mark.asyncio
    async def test_closed_interval(self, provider):
        quotes = await provider.fetch_quotes(date(2024, 1, 3), date(2024, 1, 4))
        assert [q.date for q in quotes] == [date(2024, 1, 3), date(2024, 1, 4)]

    @pytest.mark.asyncio
    async def test_outside_range_is_empty(self, provider):
        assert await provider.fetch_quotes(date(2023, 1, 1), date(2023, 12, 31)) == []

    @pytest.mark.asyncio
    async def test_keeps_stored_order(self, three_day_quotes):
        reversed_provider = InMemoryQuoteProvider(reversed(three_day_quotes))
        quotes = await reversed_provider.fetch_quotes(date(2024, 1, 1), date(2024, 1, 31))
        assert [q.date for q in quotes] == [
            date(2024, 1, 4), date(2024, 1, 3), date(2024, 1, 2),
        ]


class TestSqlQuoteProvider:
    @pytest.mark.asyncio
    async def test_maps_rows(self):
        rows = [
            QuoteDaily(
                date=date(2024, 1, 2), gold_close=70000.0, fx_rate=1300.5,
                vix=13.2, etf_volume=6_500_000.0, usd_oz_close=2073.4,
            ),
        ]
        factory, session = _session_factory(rows)

        quotes = await SqlQuoteProvider(factory).fetch_quotes(date(2024, 1, 1), date(2024, 1, 5))

        session.execute.assert_awaited_once()
        assert len(quotes) == 1
        q = quotes[0]
        assert q.date == date(2024, 1, 2)
        assert q.close_price == 70000.0
        assert q.fx_rate == 1300.5
        assert q.etf_volume == 6_500_000.0
        assert q.usd_oz_close == 2073.4

    @pytest.mark.asyncio
    async def test_skips_rows_without_gold_close(self):
        rows = [
            QuoteDaily(date=date(2024, 1, 2), gold_close=70000.0),
            QuoteDaily(date=date(2024, 1, 3), gold_close=None, vix=14.0),
        ]
        factory, _ = _session_factory(rows)

        quotes = await SqlQuoteProvider(factory).fetch_quotes(date(2024, 1, 1), date(2024, 1, 5))

        assert [q.date for q in quotes] == [date(2024, 1, 2)]

    @pytest.mark.asyncio
    async def test_no_rows(self):
        factory, _ = _session_factory([])
        assert await SqlQuoteProvider(factory).fetch_quotes(date(2024, 1, 1), date(2024, 1, 5)) == []
