"""Tests for quote ingestion: series alignment and row building.

Network access is never used; frames are built by hand in the shape
yfinance returns them.
"""

import math
from datetime import date
from unittest.mock import AsyncMock, patch

import pandas as pd
import pytest

from goldsim.services.data.ingestion import (
    GRAMS_PER_TROY_OUNCE,
    align_quotes,
    backfill_quotes,
    build_quote_rows,
    upsert_quotes,
)


def _bars(days: list[str], close: list[float], volume: list[float] | None = None) -> pd.DataFrame:
    """Daily bars shaped like Ticker.history() after index normalization."""
    index = pd.DatetimeIndex(pd.to_datetime(days))
    return pd.DataFrame(
        {
            "Open": close,
            "High": close,
            "Low": close,
            "Close": close,
            "Volume": volume if volume is not None else [0.0] * len(close),
        },
        index=index,
    )


EMPTY = pd.DataFrame()


class TestAlignQuotes:
    def test_converts_to_krw_per_gram(self):
        gold = _bars(["2024-01-02"], [2000.0])
        fx = _bars(["2024-01-02"], [1300.0])

        frame = align_quotes(gold, fx, EMPTY, EMPTY)

        assert len(frame) == 1
        expected = 2000.0 * 1300.0 / GRAMS_PER_TROY_OUNCE
        assert frame["gold_close"].iloc[0] == pytest.approx(expected)
        assert frame["fx_rate"].iloc[0] == 1300.0
        assert math.isnan(frame["vix"].iloc[0])

    def test_requires_both_gold_and_fx(self):
        gold = _bars(["2024-01-02", "2024-01-03"], [2000.0, 2010.0])
        fx = _bars(["2024-01-03", "2024-01-04"], [1300.0, 1310.0])

        frame = align_quotes(gold, fx, EMPTY, EMPTY)

        assert [ts.date() for ts in frame.index] == [date(2024, 1, 3)]

    def test_optional_series_left_joined(self):
        gold = _bars(["2024-01-02", "2024-01-03"], [2000.0, 2010.0])
        fx = _bars(["2024-01-02", "2024-01-03"], [1300.0, 1301.0])
        vix = _bars(["2024-01-03"], [14.0])
        etf = _bars(["2024-01-02"], [190.0], volume=[6_500_000.0])

        frame = align_quotes(gold, fx, vix, etf)

        assert len(frame) == 2
        assert math.isnan(frame["vix"].iloc[0])
        assert frame["vix"].iloc[1] == 14.0
        assert frame["etf_volume"].iloc[0] == 6_500_000.0

    def test_non_positive_prices_dropped(self):
        gold = _bars(["2024-01-02", "2024-01-03"], [0.0, 2010.0])
        fx = _bars(["2024-01-02", "2024-01-03"], [1300.0, 1301.0])
        frame = align_quotes(gold, fx, EMPTY, EMPTY)
        assert len(frame) == 1

    def test_missing_gold_series(self):
        fx = _bars(["2024-01-02"], [1300.0])
        assert align_quotes(EMPTY, fx, EMPTY, EMPTY).empty


class TestBuildQuoteRows:
    def test_nan_becomes_none(self):
        gold = _bars(["2024-01-02"], [2000.0])
        fx = _bars(["2024-01-02"], [1300.0])

        rows = build_quote_rows(align_quotes(gold, fx, EMPTY, EMPTY))

        assert len(rows) == 1
        row = rows[0]
        assert row["date"] == date(2024, 1, 2)
        assert row["vix"] is None
        assert row["etf_volume"] is None
        assert row["usd_oz_close"] == 2000.0
        assert isinstance(row["gold_close"], float)

    def test_empty_frame(self):
        assert build_quote_rows(align_quotes(EMPTY, EMPTY, EMPTY, EMPTY)) == []


class TestUpsert:
    @pytest.mark.asyncio
    async def test_empty_rows_skip_database(self):
        session = AsyncMock()
        assert await upsert_quotes(session, []) == 0
        session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rows_committed(self):
        session = AsyncMock()
        rows = [{"date": date(2024, 1, 2), "gold_close": 83600.0}]
        assert await upsert_quotes(session, rows) == 1
        session.execute.assert_awaited_once()
        session.commit.assert_awaited_once()


class TestBackfill:
    @pytest.mark.asyncio
    async def test_rejects_reversed_range(self):
        with pytest.raises(ValueError):
            await backfill_quotes(date(2024, 2, 1), date(2024, 1, 1))

    @pytest.mark.asyncio
    async def test_nothing_downloaded(self):
        with patch(
            "goldsim.services.data.ingestion.download_daily_quotes",
            return_value=align_quotes(EMPTY, EMPTY, EMPTY, EMPTY),
        ):
            assert await backfill_quotes(date(2024, 1, 1), date(2024, 1, 31)) == 0
