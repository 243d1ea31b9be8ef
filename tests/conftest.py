"""Shared test fixtures."""

from datetime import date

import pytest

from goldsim.services.simulation import DailyQuote, InMemoryQuoteProvider


@pytest.fixture
def three_day_quotes() -> list[DailyQuote]:
    """Three consecutive trading days, KRW per gram."""
    return [
        DailyQuote(date=date(2024, 1, 2), close_price=70000.0, fx_rate=1300.5, vix=13.2),
        DailyQuote(date=date(2024, 1, 3), close_price=71000.0, fx_rate=1305.0, vix=14.0),
        DailyQuote(date=date(2024, 1, 4), close_price=69500.0, fx_rate=1310.2, vix=14.1),
    ]


@pytest.fixture
def provider(three_day_quotes) -> InMemoryQuoteProvider:
    return InMemoryQuoteProvider(three_day_quotes)
