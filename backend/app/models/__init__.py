"""Pydantic models for the stock data API."""

from app.models.prices import (
    GENERIC_ERROR_MESSAGE,
    PriceRecord,
    DailyReturn,
    AlphaEntry,
    ResponseEnvelope,
)

__all__ = [
    "GENERIC_ERROR_MESSAGE",
    "PriceRecord",
    "DailyReturn",
    "AlphaEntry",
    "ResponseEnvelope",
]
