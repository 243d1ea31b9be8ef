"""CLI for quote ingestion.

Usage:
    python scripts/ingest.py                                   # Full configured range
    python scripts/ingest.py --start 2024-01-01 --end 2024-12-31
"""

import argparse
import asyncio
import logging
from datetime import date

from goldsim.config import settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-5s [%(name)s] %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


async def do_backfill(start: date, end: date) -> None:
    """Download and upsert daily quotes for [start, end]."""
    from goldsim.services.data.ingestion import backfill_quotes

    logger.info("Starting backfill: %s to %s", start, end)
    count = await backfill_quotes(start, end)

    print("\n=== Backfill Results ===")
    print(f"  quotes_daily: {count:,} rows")
    print("========================\n")


def main() -> None:
    parser = argparse.ArgumentParser(description="GoldSim quote ingestion")
    parser.add_argument(
        "--start", type=date.fromisoformat, default=settings.data_min_date,
        help=f"First date to ingest (default: {settings.data_min_date})",
    )
    parser.add_argument(
        "--end", type=date.fromisoformat, default=settings.data_max_date,
        help=f"Last date to ingest (default: {settings.data_max_date})",
    )
    args = parser.parse_args()

    if args.start > args.end:
        parser.error("--start must not be after --end")

    asyncio.run(do_backfill(args.start, args.end))


if __name__ == "__main__":
    main()
