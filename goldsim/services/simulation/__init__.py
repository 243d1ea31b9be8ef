"""Trade simulation: what a lump-sum gold purchase would have returned.

Usage:
    engine = TradeSimulationEngine(SqlQuoteProvider())
    result = await engine.simulate(
        SimulationRequest(date(2024, 1, 2), date(2024, 6, 28), 1_000_000)
    )
"""

from goldsim.services.simulation.engine import (
    TradeSimulationEngine,
    simulate_trade,
    validate_request,
)
from goldsim.services.simulation.exceptions import (
    DataIntegrityError,
    MissingQuoteError,
    NoDataError,
    SimulationError,
    ValidationError,
)
from goldsim.services.simulation.provider import (
    InMemoryQuoteProvider,
    QuoteSeriesProvider,
    SqlQuoteProvider,
)
from goldsim.services.simulation.result import (
    DailyQuote,
    SimulationRequest,
    SimulationResult,
    ValuationPoint,
)

__all__ = [
    "TradeSimulationEngine",
    "simulate_trade",
    "validate_request",
    "SimulationError",
    "ValidationError",
    "NoDataError",
    "MissingQuoteError",
    "DataIntegrityError",
    "QuoteSeriesProvider",
    "InMemoryQuoteProvider",
    "SqlQuoteProvider",
    "DailyQuote",
    "SimulationRequest",
    "SimulationResult",
    "ValuationPoint",
]
