"""Simulation errors.

These carry NO HTTP knowledge. The API layer maps them to status codes.

Hierarchy:
    SimulationError (base)
    ├── ValidationError       malformed or inconsistent request
    ├── NoDataError           provider has no quotes in the range
    ├── MissingQuoteError     no quote on the exact buy or sell date
    └── DataIntegrityError    resolved price is not a usable price
"""

from datetime import date


class SimulationError(Exception):
    """Base exception for every simulation failure.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ValidationError(SimulationError):
    """Raised before any data access when the request itself is invalid.

    Attributes:
        field: The offending request field, if a single one is to blame
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class NoDataError(SimulationError):
    """Raised when the provider returns zero quotes for the requested range."""

    def __init__(self, start_date: date, end_date: date) -> None:
        self.start_date = start_date
        self.end_date = end_date
        super().__init__(
            f"No quotes available between {start_date.isoformat()} "
            f"and {end_date.isoformat()}"
        )


class MissingQuoteError(SimulationError):
    """Raised when the range has data but not on a required boundary date.

    Attributes:
        missing_date: The buy or sell date with no quote
        boundary: "buy" or "sell"
    """

    def __init__(self, missing_date: date, boundary: str) -> None:
        self.missing_date = missing_date
        self.boundary = boundary
        super().__init__(
            f"No quote on {boundary} date {missing_date.isoformat()}"
        )


class DataIntegrityError(SimulationError):
    """Raised when a resolved price is zero, negative or not finite.

    This is a fault in the upstream data, not in the request.
    """

    def __init__(self, quote_date: date, price: float) -> None:
        self.quote_date = quote_date
        self.price = price
        super().__init__(
            f"Invalid close price {price!r} on {quote_date.isoformat()}"
        )
