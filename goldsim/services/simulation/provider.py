"""Quote series providers.

The engine only depends on QuoteSeriesProvider. Any object with a matching
fetch_quotes coroutine satisfies it, including test doubles.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import date
from typing import Protocol

from sqlalchemy import select

from goldsim.database import async_session
from goldsim.models.quote import QuoteDaily
from goldsim.services.simulation.result import DailyQuote

logger = logging.getLogger(__name__)


class QuoteSeriesProvider(Protocol):
    """Source of daily quotes for a closed date interval."""

    async def fetch_quotes(self, start_date: date, end_date: date) -> Sequence[DailyQuote]:
        """Return every quote with start_date <= date <= end_date.

        Order is not guaranteed. An empty sequence means no data.
        """
        ...


class InMemoryQuoteProvider:
    """Provider over a fixed list of quotes. Returns them in stored order."""

    def __init__(self, quotes: Iterable[DailyQuote]) -> None:
        self._quotes = list(quotes)

    async def fetch_quotes(self, start_date: date, end_date: date) -> list[DailyQuote]:
        return [q for q in self._quotes if start_date <= q.date <= end_date]


class SqlQuoteProvider:
    """Reads the quotes_daily table. Opens a fresh session per call."""

    def __init__(self, session_factory=async_session) -> None:
        self._session_factory = session_factory

    async def fetch_quotes(self, start_date: date, end_date: date) -> list[DailyQuote]:
        async with self._session_factory() as session:
            stmt = (
                select(QuoteDaily)
                .where(
                    QuoteDaily.date >= start_date,
                    QuoteDaily.date <= end_date,
                )
                .order_by(QuoteDaily.date.asc())
            )
            result = await session.execute(stmt)
            rows = result.scalars().all()

        quotes = [to_daily_quote(r) for r in rows if r.gold_close is not None]
        if len(quotes) < len(rows):
            logger.warning(
                "Skipped %d quote rows without a gold close between %s and %s",
                len(rows) - len(quotes), start_date, end_date,
            )
        return quotes


def to_daily_quote(row: QuoteDaily) -> DailyQuote:
    """Map a quotes_daily row to the engine's quote type."""
    return DailyQuote(
        date=row.date,
        close_price=row.gold_close,
        fx_rate=row.fx_rate,
        vix=row.vix,
        etf_volume=row.etf_volume,
        usd_oz_close=row.usd_oz_close,
    )
