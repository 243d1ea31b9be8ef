"""Daily market quote model. One row per calendar date."""

import datetime

from sqlalchemy import Date, Float
from sqlalchemy.orm import Mapped, mapped_column

from goldsim.database import Base


class QuoteDaily(Base):
    """Daily gold quote plus the auxiliary series shown on the dashboard.

    Gold prices are KRW per gram unless the column says otherwise.
    """

    __tablename__ = "quotes_daily"

    date: Mapped[datetime.date] = mapped_column(Date, primary_key=True)
    fx_rate: Mapped[float | None] = mapped_column(Float, nullable=True)  # KRW per USD
    vix: Mapped[float | None] = mapped_column(Float, nullable=True)
    etf_volume: Mapped[float | None] = mapped_column(Float, nullable=True)
    gold_open: Mapped[float | None] = mapped_column(Float, nullable=True)  # KRW/g
    gold_close: Mapped[float | None] = mapped_column(Float, nullable=True)  # KRW/g
    usd_oz_open: Mapped[float | None] = mapped_column(Float, nullable=True)
    usd_oz_close: Mapped[float | None] = mapped_column(Float, nullable=True)
