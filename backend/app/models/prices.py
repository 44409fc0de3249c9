"""Pydantic models for daily price series and the metrics derived from them."""

import math
from typing import Any, Generic, Optional, TypeVar, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    model_serializer,
)
from pydantic.alias_generators import to_camel


T = TypeVar("T")

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again!"


def _json_number(value: Any) -> Any:
    """NaN has no JSON literal, emit null instead."""
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


class PriceRecord(BaseModel):
    """One trading day of prices for one ticker, as returned by the provider.

    Field names are snake_case in Python and camelCase on the wire
    (``priceDate``, ``changePercent``). Fields the provider did not send stay
    unset and are left out of the serialized record, so an empty record
    serializes as ``{}``. Provider fields outside the declared
    ones are kept as extras and passed through unchanged.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
    )

    price_date: Optional[str] = None
    symbol: Optional[str] = None

    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    close: Optional[float] = None
    volume: Optional[Union[int, float]] = None

    # Split/dividend adjusted
    fopen: Optional[float] = None
    fhigh: Optional[float] = None
    flow: Optional[float] = None
    fclose: Optional[float] = None
    fvolume: Optional[Union[int, float]] = None

    # Unadjusted
    uopen: Optional[float] = None
    uhigh: Optional[float] = None
    ulow: Optional[float] = None
    uclose: Optional[float] = None
    uvolume: Optional[Union[int, float]] = None

    change: Optional[float] = None
    change_percent: Optional[float] = None

    @property
    def is_empty(self) -> bool:
        return not self.model_fields_set

    @model_serializer(mode="wrap")
    def serialize_sent_fields(
        self, handler: SerializerFunctionWrapHandler, info: SerializationInfo
    ) -> dict[str, Any]:
        data = handler(self)
        fields = type(self).model_fields
        sent = set()
        for name in self.model_fields_set:
            sent.add(name)
            if name in fields:
                sent.add(fields[name].alias)
        sent.update(self.model_extra or {})
        if info.mode_is_json():
            return {key: _json_number(value) for key, value in data.items() if key in sent}
        return {key: value for key, value in data.items() if key in sent}


class DailyReturn(PriceRecord):
    """A price record with close-minus-open for each price variant, rounded to cents."""

    daily_return: float = math.nan
    f_daily_return: float = math.nan
    u_daily_return: float = math.nan


class AlphaEntry(BaseModel):
    """Subject and benchmark prices for one date, with their volume differential.

    Serializes keyed by date and ticker::

        {"2023-01-03": {"AAPL": {...}, "SPY": {...}, "alpha-volume": 1200}}
    """

    model_config = ConfigDict(frozen=True)

    price_date: Optional[str] = None
    ticker: str
    benchmark: str
    ticker_prices: PriceRecord
    benchmark_prices: PriceRecord = Field(default_factory=PriceRecord)
    alpha_volume: Union[int, float] = math.nan

    @model_serializer(mode="plain")
    def serialize_by_date(self, info: SerializationInfo) -> dict[str, Any]:
        mode = "json" if info.mode_is_json() else "python"
        alpha_volume = _json_number(self.alpha_volume) if mode == "json" else self.alpha_volume
        value = {
            self.ticker: self.ticker_prices.model_dump(mode=mode, by_alias=bool(info.by_alias)),
            self.benchmark: self.benchmark_prices.model_dump(mode=mode, by_alias=bool(info.by_alias)),
            "alpha-volume": alpha_volume,
        }
        return {self.price_date or "": value}


class ResponseEnvelope(BaseModel, Generic[T]):
    """Uniform body returned by every data endpoint."""

    status: int = 200
    error: Optional[str] = None
    data: list[T] = []

    @classmethod
    def rejected(cls, status: int, message: str) -> "ResponseEnvelope[T]":
        return cls(status=status, error=message, data=[])

    @classmethod
    def failure(cls) -> "ResponseEnvelope[T]":
        return cls(status=400, error=GENERIC_ERROR_MESSAGE, data=[])
