"""
Application-level exceptions.

Raised by the history normalizer and the API layer only. The analyzer itself
never raises these: malformed events become completeness anomalies instead.
"""

from __future__ import annotations


class SupplyGuardError(Exception):
    """Base class; `code` is a stable identifier used in logs and API errors."""

    code = "supplyguard_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidRequestError(SupplyGuardError):
    """Request is missing productId or productHistory."""

    code = "invalid_request"


class InvalidHistoryError(InvalidRequestError):
    """History is not a list, or one of its entries is neither an object nor a tuple."""

    code = "invalid_history"

    def __init__(self, message: str, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index
