"""Alpha comparison of a ticker against a benchmark ticker.

Alpha here is the per-day volume differential between the two series,
joined on the price date. Every date of the subject series produces one
entry; benchmark dates with no subject counterpart are dropped.
"""

import asyncio
import logging
import math
from typing import Optional, Union

from app.models import AlphaEntry, PriceRecord, ResponseEnvelope
from app.services.date_range import (
    RANGE_ERROR_MESSAGES,
    RANGE_ERROR_STATUS,
    RangeKind,
    classify,
)
from ingestion.iex import IEXCloudClient

logger = logging.getLogger(__name__)

MISSING_BENCHMARK_MESSAGE = "Kindly provide a BENCHMARK ticker"


def volume_difference(subject: PriceRecord, benchmark: PriceRecord) -> Union[int, float]:
    """Subject volume minus benchmark volume, NaN when either is missing."""
    if subject.volume is None or benchmark.volume is None:
        return math.nan
    return subject.volume - benchmark.volume


def merge_alpha(
    ticker: str,
    benchmark: str,
    ticker_prices: list[PriceRecord],
    benchmark_prices: list[PriceRecord],
) -> list[AlphaEntry]:
    """Left join the subject series onto the benchmark series by price date.

    Output order follows ``ticker_prices``. When the benchmark has several
    records for a date, the first one wins; when it has none, an empty
    record stands in and the alpha volume is NaN.
    """
    by_date: dict[Optional[str], PriceRecord] = {}
    for record in benchmark_prices:
        by_date.setdefault(record.price_date, record)

    entries = []
    for record in ticker_prices:
        matched = by_date.get(record.price_date, PriceRecord())
        entries.append(
            AlphaEntry(
                price_date=record.price_date,
                ticker=ticker,
                benchmark=benchmark,
                ticker_prices=record,
                benchmark_prices=matched,
                alpha_volume=volume_difference(record, matched),
            )
        )
    return entries


class AlphaService:
    """Builds the alpha response for a ticker and its benchmark."""

    @staticmethod
    async def get_alpha(
        client: IEXCloudClient,
        ticker: str,
        benchmark: Optional[str],
        from_date: Optional[str],
        to_date: Optional[str],
    ) -> ResponseEnvelope[AlphaEntry]:
        """
        Compare a ticker with a benchmark over an explicit date range.

        Both series are fetched concurrently. The range must be complete and
        ordered; unlike daily returns there is no 30 day ceiling.
        """
        if not benchmark:
            return ResponseEnvelope[AlphaEntry].rejected(RANGE_ERROR_STATUS, MISSING_BENCHMARK_MESSAGE)

        date_range = classify(from_date, to_date)
        if date_range.kind in (RangeKind.BOTH_MISSING, RangeKind.ONE_MISSING):
            return ResponseEnvelope[AlphaEntry].rejected(
                RANGE_ERROR_STATUS, RANGE_ERROR_MESSAGES[RangeKind.ONE_MISSING]
            )
        if date_range.kind == RangeKind.INVERTED:
            logger.info(f"Rejected range for {ticker}/{benchmark}: {from_date} - {to_date}")
            return ResponseEnvelope[AlphaEntry].rejected(RANGE_ERROR_STATUS, date_range.error_message)

        # Wait for both fetches before raising the first error
        results = await asyncio.gather(
            client.get_daily_prices(ticker, from_date=from_date, to_date=to_date),
            client.get_daily_prices(benchmark, from_date=from_date, to_date=to_date),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        ticker_prices, benchmark_prices = results
        logger.debug(f"Fetched {len(ticker_prices)} {ticker} and {len(benchmark_prices)} {benchmark} prices")

        return ResponseEnvelope[AlphaEntry](
            status=200,
            error=None,
            data=merge_alpha(ticker, benchmark, ticker_prices, benchmark_prices),
        )
