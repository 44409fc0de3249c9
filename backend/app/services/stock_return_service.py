"""Daily return calculation over a ticker's price series."""

import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from app.models import DailyReturn, PriceRecord, ResponseEnvelope
from app.services.date_range import RANGE_ERROR_STATUS, classify
from ingestion.iex import IEXCloudClient

logger = logging.getLogger(__name__)

_CENTS = Decimal("0.01")


def round2(value: Optional[float]) -> float:
    """Round to two decimals, half away from zero, on the exact float value.

    Behaves like a fixed two-decimal formatter: 2.3450000000000006 -> 2.35,
    1.005 (stored as 1.00499...) -> 1.0. NaN stays NaN.
    """
    if value is None or math.isnan(value):
        return math.nan
    if math.isinf(value):
        return value
    # + 0.0 turns -0.0 into 0.0
    return float(Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP)) + 0.0


def _difference(close: Optional[float], open_: Optional[float]) -> float:
    if close is None or open_ is None:
        return math.nan
    return close - open_


def add_returns(records: Any) -> Any:
    """Attach close-minus-open returns for raw, adjusted and unadjusted prices.

    Pure and order preserving. Re-applying it to its own output recomputes
    the same values. Anything that is not a list is returned untouched.
    """
    if not isinstance(records, list):
        return records

    results = []
    for record in records:
        values = record.model_dump(exclude_unset=True)
        values.update(
            daily_return=round2(_difference(record.close, record.open)),
            f_daily_return=round2(_difference(record.fclose, record.fopen)),
            u_daily_return=round2(_difference(record.uclose, record.uopen)),
        )
        results.append(DailyReturn(**values))
    return results


class StockReturnService:
    """Builds the daily returns response for a ticker."""

    @staticmethod
    async def get_returns(
        client: IEXCloudClient,
        ticker: str,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
    ) -> ResponseEnvelope[DailyReturn]:
        """
        Get daily returns for a ticker within a range.

        Args:
            client: Provider client for this request
            ticker: Stock ticker symbol (e.g., "AAPL")
            from_date: Range start (YYYY-MM-DD), optional
            to_date: Range end (YYYY-MM-DD), optional

        Returns:
            Envelope with one DailyReturn per trading day, or a 406 envelope
            when the range is rejected. Year-to-date is used when both
            bounds are missing.
        """
        date_range = classify(from_date, to_date)
        if date_range.is_rejected:
            logger.info(f"Rejected range for {ticker}: {date_range.kind.value} ({from_date} - {to_date})")
            return ResponseEnvelope[DailyReturn].rejected(RANGE_ERROR_STATUS, date_range.error_message)

        prices: list[PriceRecord] = await client.get_daily_prices(
            ticker, from_date=date_range.from_date, to_date=date_range.to_date
        )
        return ResponseEnvelope[DailyReturn](status=200, error=None, data=add_returns(prices))
