"""Simulation API routes — trade simulation and dashboard quote series."""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from goldsim.config import settings
from goldsim.services.simulation import (
    QuoteSeriesProvider,
    SimulationRequest,
    SqlQuoteProvider,
    TradeSimulationEngine,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/simulation", tags=["simulation"])

# Opens a session per call, safe to share across requests
_sql_provider = SqlQuoteProvider()


def get_quote_provider() -> QuoteSeriesProvider:
    """Dependency returning the quote source. Overridden in tests."""
    return _sql_provider


class TradeSimulationRequest(BaseModel):
    """Request body for a buy-and-hold simulation."""

    buy_date: date
    sell_date: date
    principal: float = Field(..., gt=0, description="Amount invested on buy_date, in KRW")


class ValuationPointOut(BaseModel):
    date: date
    value: float


class TradeSimulationResponse(BaseModel):
    entry_price: float
    exit_price: float
    principal: float
    quantity_purchased: float
    final_value: float
    profit_loss: float
    yield_pct: float
    valuation_trajectory: list[ValuationPointOut]


class QuoteRow(BaseModel):
    """One chart row. pred_close is reserved for a forecast series."""

    date: date
    fx_rate: float | None = None
    vix: float | None = None
    etf_volume: float | None = None
    gold_close: float | None = None
    pred_close: float | None = None


class ErrorDetail(BaseModel):
    """Error body returned for simulation failures."""

    error: str
    message: str
    details: dict | None = None


@router.post("/trade", response_model=TradeSimulationResponse)
async def run_trade_simulation(
    req: TradeSimulationRequest,
    provider: QuoteSeriesProvider = Depends(get_quote_provider),
):
    """Simulate buying gold with principal on buy_date and selling on sell_date.

    Simulation errors propagate to the handlers registered in goldsim.main.
    """
    engine = TradeSimulationEngine(provider)
    result = await engine.simulate(
        SimulationRequest(
            buy_date=req.buy_date,
            sell_date=req.sell_date,
            principal=req.principal,
        )
    )
    return result.to_dict()


@router.get("/quotes", response_model=list[QuoteRow])
async def get_quotes(
    from_date: date = Query(..., alias="from"),
    to_date: date = Query(..., alias="to"),
    provider: QuoteSeriesProvider = Depends(get_quote_provider),
):
    """Daily quote rows for the dashboard chart, ascending by date."""
    if from_date > to_date:
        raise HTTPException(status_code=422, detail="'from' must not be after 'to'")
    if (to_date - from_date).days > settings.max_quote_window_days:
        raise HTTPException(
            status_code=422,
            detail=f"Window exceeds {settings.max_quote_window_days} days",
        )

    quotes = await provider.fetch_quotes(from_date, to_date)
    return [
        QuoteRow(
            date=q.date,
            fx_rate=q.fx_rate,
            vix=q.vix,
            etf_volume=q.etf_volume,
            gold_close=q.close_price,
        )
        for q in sorted(quotes, key=lambda q: q.date)
    ]
