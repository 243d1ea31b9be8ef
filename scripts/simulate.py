"""CLI for running a gold trade simulation against the quotes database.

Usage:
    python scripts/simulate.py --buy-date 2024-01-02 --sell-date 2024-06-28 --principal 1000000
    python scripts/simulate.py --buy-date 2020-03-02 --sell-date 2024-12-30 --principal 5000000 --json
"""

import argparse
import asyncio
import json
import logging
import sys
from datetime import date

from goldsim.config import settings
from goldsim.services.simulation import (
    SimulationError,
    SimulationRequest,
    SimulationResult,
    SqlQuoteProvider,
    TradeSimulationEngine,
)


def format_report(request: SimulationRequest, result: SimulationResult) -> str:
    """Format a simulation result as a readable console report."""
    lines = []
    sep = "=" * 60

    lines.append(sep)
    lines.append("  GoldSim Trade Simulation")
    lines.append(sep)
    lines.append(
        f"  Period:        {request.buy_date.isoformat()} to {request.sell_date.isoformat()} "
        f"({len(result.valuation_trajectory)} trading days)"
    )
    lines.append("-" * 60)
    lines.append(f"  Principal:         {result.principal:>16,.0f} KRW")
    lines.append(f"  Entry Price:       {result.entry_price:>16,.2f} KRW/g")
    lines.append(f"  Exit Price:        {result.exit_price:>16,.2f} KRW/g")
    lines.append(f"  Quantity:          {result.quantity_purchased:>16,.4f} g")
    lines.append(f"  Final Value:       {result.final_value:>16,.0f} KRW")

    sign = "+" if result.profit_loss >= 0 else ""
    lines.append(f"  Profit/Loss:       {sign}{result.profit_loss:,.0f} KRW")
    lines.append(f"  Yield:             {sign}{result.yield_pct:.2f}%")

    if result.valuation_trajectory:
        peak = max(result.valuation_trajectory, key=lambda p: p.value)
        trough = min(result.valuation_trajectory, key=lambda p: p.value)
        lines.append("")
        lines.append(f"  Peak Value:        {peak.value:>16,.0f} KRW on {peak.date.isoformat()}")
        lines.append(f"  Trough Value:      {trough.value:>16,.0f} KRW on {trough.date.isoformat()}")

    lines.append(sep)
    return "\n".join(lines)


async def run_simulation(args: argparse.Namespace) -> None:
    request = SimulationRequest(
        buy_date=args.buy_date,
        sell_date=args.sell_date,
        principal=args.principal,
    )
    engine = TradeSimulationEngine(SqlQuoteProvider())

    try:
        result = await engine.simulate(request)
    except SimulationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(format_report(request, result))


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    parser = argparse.ArgumentParser(
        description="GoldSim — what a gold purchase would have returned"
    )
    parser.add_argument(
        "--buy-date", required=True, type=date.fromisoformat,
        help="Purchase date, YYYY-MM-DD",
    )
    parser.add_argument(
        "--sell-date", type=date.fromisoformat, default=settings.data_max_date,
        help=f"Sale date, YYYY-MM-DD (default: {settings.data_max_date})",
    )
    parser.add_argument(
        "--principal", required=True, type=float,
        help="Amount invested on the purchase date, in KRW",
    )
    parser.add_argument(
        "--json", action="store_true",
        help="Output result as JSON instead of formatted report",
    )
    args = parser.parse_args()

    asyncio.run(run_simulation(args))


if __name__ == "__main__":
    main()
