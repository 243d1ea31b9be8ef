"""GoldSim — historical gold investment simulator."""

__version__ = "0.3.0"
