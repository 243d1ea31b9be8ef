"""Buy-and-hold trade simulation. One lump-sum buy, one full sell."""

import logging
import math
from collections.abc import Sequence

from goldsim.services.simulation.exceptions import (
    DataIntegrityError,
    MissingQuoteError,
    NoDataError,
    ValidationError,
)
from goldsim.services.simulation.provider import QuoteSeriesProvider
from goldsim.services.simulation.result import (
    DailyQuote,
    SimulationRequest,
    SimulationResult,
    ValuationPoint,
)

logger = logging.getLogger(__name__)


def validate_request(request: SimulationRequest) -> None:
    """Reject structurally invalid requests. Never touches data."""
    if request.buy_date is None:
        raise ValidationError("buy_date is required", field="buy_date")
    if request.sell_date is None:
        raise ValidationError("sell_date is required", field="sell_date")
    if request.principal is None:
        raise ValidationError("principal is required", field="principal")
    if not math.isfinite(request.principal) or request.principal <= 0:
        raise ValidationError(
            f"principal must be a positive amount, got {request.principal!r}",
            field="principal",
        )
    if request.buy_date > request.sell_date:
        raise ValidationError(
            f"buy_date {request.buy_date.isoformat()} is after "
            f"sell_date {request.sell_date.isoformat()}",
            field="buy_date",
        )


def simulate_trade(
    request: SimulationRequest, quotes: Sequence[DailyQuote]
) -> SimulationResult:
    """Compute the outcome of buying on buy_date and selling on sell_date.

    Pure function of (request, quotes). Entry and exit prices must come
    from quotes dated exactly on the boundary dates; a holiday or gap on
    either date is an error, never approximated. Quantity is fixed at
    entry and every trajectory point is quantity * that day's close.

    Raises:
        ValidationError: request is malformed
        NoDataError: quotes is empty
        MissingQuoteError: no quote on buy_date or sell_date
        DataIntegrityError: a close price in the series is not positive
    """
    validate_request(request)

    if not quotes:
        raise NoDataError(request.buy_date, request.sell_date)

    series = sorted(quotes, key=lambda q: q.date)
    by_date = {q.date: q for q in series}

    buy_quote = by_date.get(request.buy_date)
    if buy_quote is None:
        raise MissingQuoteError(request.buy_date, "buy")
    sell_quote = by_date.get(request.sell_date)
    if sell_quote is None:
        raise MissingQuoteError(request.sell_date, "sell")

    entry_price = _checked_price(buy_quote)
    exit_price = _checked_price(sell_quote)

    principal = request.principal
    quantity = principal / entry_price
    final_value = quantity * exit_price
    profit_loss = final_value - principal
    yield_pct = (profit_loss / principal) * 100

    trajectory = [
        ValuationPoint(date=q.date, value=quantity * _checked_price(q))
        for q in series
    ]

    return SimulationResult(
        entry_price=entry_price,
        exit_price=exit_price,
        principal=principal,
        quantity_purchased=quantity,
        final_value=final_value,
        profit_loss=profit_loss,
        yield_pct=yield_pct,
        valuation_trajectory=trajectory,
    )


def _checked_price(quote: DailyQuote) -> float:
    price = quote.close_price
    if price is None or not math.isfinite(price) or price <= 0:
        raise DataIntegrityError(quote.date, price)
    return price


class TradeSimulationEngine:
    """Runs simulations against a quote series provider.

    Stateless: holds only the provider. Each simulate() call does exactly
    one provider read, with no retry or caching, so concurrent calls need
    no coordination here.
    """

    def __init__(self, provider: QuoteSeriesProvider) -> None:
        self._provider = provider

    async def simulate(self, request: SimulationRequest) -> SimulationResult:
        """Validate, load quotes for [buy_date, sell_date] and simulate."""
        validate_request(request)

        quotes = await self._provider.fetch_quotes(request.buy_date, request.sell_date)
        logger.debug(
            "Loaded %d quotes for %s to %s",
            len(quotes), request.buy_date, request.sell_date,
        )

        result = simulate_trade(request, quotes)

        logger.info(
            "Simulation %s -> %s: principal=%.2f entry=%.2f exit=%.2f "
            "yield=%.3f%%, %d points",
            request.buy_date, request.sell_date, result.principal,
            result.entry_price, result.exit_price, result.yield_pct,
            len(result.valuation_trajectory),
        )
        return result
