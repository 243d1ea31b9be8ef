"""SQLAlchemy models for GoldSim."""

from goldsim.models.quote import QuoteDaily

__all__ = ["QuoteDaily"]
