"""Simulation data structures: input quotes, request and result."""

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class DailyQuote:
    """One calendar date of market data.

    Only close_price takes part in the simulation. The auxiliary fields
    ride along for callers that chart them.
    """

    date: date
    close_price: float
    fx_rate: float | None = None
    vix: float | None = None
    etf_volume: float | None = None
    usd_oz_close: float | None = None


@dataclass(frozen=True)
class SimulationRequest:
    """Buy on buy_date with principal, sell everything on sell_date."""

    buy_date: date | None
    sell_date: date | None
    principal: float | None


@dataclass(frozen=True)
class ValuationPoint:
    """Value of the position at the close of one trading day."""

    date: date
    value: float


@dataclass(frozen=True)
class SimulationResult:
    """Complete simulation output. Values are unrounded floats."""

    entry_price: float
    exit_price: float
    principal: float
    quantity_purchased: float
    final_value: float
    profit_loss: float
    yield_pct: float
    valuation_trajectory: list[ValuationPoint] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Serialize to JSON-safe dict for API response."""
        return {
            "entry_price": self.entry_price,
            "exit_price": self.exit_price,
            "principal": self.principal,
            "quantity_purchased": self.quantity_purchased,
            "final_value": self.final_value,
            "profit_loss": self.profit_loss,
            "yield_pct": self.yield_pct,
            "valuation_trajectory": [
                {"date": p.date.isoformat(), "value": p.value}
                for p in self.valuation_trajectory
            ],
        }
