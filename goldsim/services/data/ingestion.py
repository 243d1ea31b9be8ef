"""Daily quote ingestion — pulls gold, FX, VIX and ETF series from yfinance.

Gold is quoted in USD per troy ounce and converted to KRW per gram with
the same day's USD/KRW rate. Upserts into quotes_daily so re-runs don't
create duplicates.
"""

import asyncio
import logging
import math
from datetime import date, timedelta

import pandas as pd
import yfinance as yf
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from goldsim.config import settings
from goldsim.database import async_session

logger = logging.getLogger(__name__)

GRAMS_PER_TROY_OUNCE = 31.1034768

QUOTE_COLUMNS = [
    "fx_rate",
    "vix",
    "etf_volume",
    "gold_open",
    "gold_close",
    "usd_oz_open",
    "usd_oz_close",
]


def fetch_history(symbol: str, start: date, end: date) -> pd.DataFrame:
    """Daily bars for one ticker over [start, end], indexed by naive date."""
    ticker = yf.Ticker(symbol)
    # yfinance treats end as exclusive
    df = ticker.history(
        start=start.isoformat(),
        end=(end + timedelta(days=1)).isoformat(),
        interval="1d",
        auto_adjust=False,
    )
    if df.empty:
        logger.warning("No data returned for %s (%s to %s)", symbol, start, end)
        return df

    # yfinance returns timezone-aware DatetimeIndex in the exchange's zone
    index = df.index
    if index.tz is not None:
        index = index.tz_localize(None)
    df.index = index.normalize()
    df = df[~df.index.duplicated(keep="last")]
    return df


def align_quotes(
    gold: pd.DataFrame,
    fx: pd.DataFrame,
    vix: pd.DataFrame,
    etf: pd.DataFrame,
) -> pd.DataFrame:
    """Join the four series on date and derive KRW-per-gram gold prices.

    A date needs both a gold close and an FX rate to be kept. VIX and ETF
    volume are optional and left empty where the market was closed.
    """
    if gold.empty or fx.empty:
        return pd.DataFrame(columns=QUOTE_COLUMNS)

    frame = pd.DataFrame(
        {
            "usd_oz_open": gold["Open"],
            "usd_oz_close": gold["Close"],
        }
    )
    frame = frame.join(fx["Close"].rename("fx_rate"), how="inner")
    if not vix.empty:
        frame = frame.join(vix["Close"].rename("vix"), how="left")
    else:
        frame["vix"] = float("nan")
    if not etf.empty:
        frame = frame.join(etf["Volume"].rename("etf_volume"), how="left")
    else:
        frame["etf_volume"] = float("nan")

    frame = frame.dropna(subset=["usd_oz_close", "fx_rate"])
    frame = frame[(frame["usd_oz_close"] > 0) & (frame["fx_rate"] > 0)].copy()

    frame["gold_open"] = frame["usd_oz_open"] * frame["fx_rate"] / GRAMS_PER_TROY_OUNCE
    frame["gold_close"] = frame["usd_oz_close"] * frame["fx_rate"] / GRAMS_PER_TROY_OUNCE
    return frame.sort_index()[QUOTE_COLUMNS]


def build_quote_rows(frame: pd.DataFrame) -> list[dict]:
    """Convert an aligned frame into quotes_daily rows. NaN becomes NULL."""
    rows = []
    for ts, row in frame.iterrows():
        record = {"date": ts.date() if hasattr(ts, "date") else ts}
        for col in QUOTE_COLUMNS:
            value = row[col]
            record[col] = None if value is None or math.isnan(value) else float(value)
        rows.append(record)
    return rows


async def upsert_quotes(session: AsyncSession, rows: list[dict]) -> int:
    """Bulk upsert quote rows. Returns count of rows affected.

    Uses PostgreSQL ON CONFLICT (date) DO UPDATE to handle re-runs.
    """
    if not rows:
        return 0

    stmt = text("""
        INSERT INTO quotes_daily (date, fx_rate, vix, etf_volume, gold_open,
                                  gold_close, usd_oz_open, usd_oz_close)
        VALUES (:date, :fx_rate, :vix, :etf_volume, :gold_open,
                :gold_close, :usd_oz_open, :usd_oz_close)
        ON CONFLICT (date)
        DO UPDATE SET
            fx_rate = EXCLUDED.fx_rate,
            vix = EXCLUDED.vix,
            etf_volume = EXCLUDED.etf_volume,
            gold_open = EXCLUDED.gold_open,
            gold_close = EXCLUDED.gold_close,
            usd_oz_open = EXCLUDED.usd_oz_open,
            usd_oz_close = EXCLUDED.usd_oz_close
    """)

    await session.execute(stmt, rows)
    await session.commit()
    return len(rows)


def download_daily_quotes(start: date, end: date) -> pd.DataFrame:
    """Synchronous download of every series, aligned into one frame."""
    gold = fetch_history(settings.gold_symbol, start, end)
    fx = fetch_history(settings.fx_symbol, start, end)
    vix = fetch_history(settings.vix_symbol, start, end)
    etf = fetch_history(settings.etf_symbol, start, end)
    return align_quotes(gold, fx, vix, etf)


async def backfill_quotes(start: date, end: date) -> int:
    """Download [start, end] and upsert into quotes_daily.

    Returns total rows upserted.
    """
    if start > end:
        raise ValueError(f"start {start} is after end {end}")

    logger.info("Downloading daily quotes %s to %s", start, end)
    frame = await asyncio.to_thread(download_daily_quotes, start, end)
    rows = build_quote_rows(frame)

    if not rows:
        logger.warning("Nothing to ingest for %s to %s", start, end)
        return 0

    async with async_session() as session:
        count = await upsert_quotes(session, rows)

    logger.info(
        "Ingested %d daily quotes (%s to %s)",
        count, rows[0]["date"], rows[-1]["date"],
    )
    return count
