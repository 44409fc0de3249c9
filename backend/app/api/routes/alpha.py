"""Alpha API endpoint."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.api.deps import get_price_client
from app.api.envelope import envelope_response
from app.models import AlphaEntry, ResponseEnvelope
from app.services.alpha_service import AlphaService
from ingestion.iex import IEXCloudClient

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{ticker}", response_class=JSONResponse)
async def get_alpha(
    ticker: str,
    benchmark: Optional[str] = Query(None, description="Benchmark Ticker"),
    from_date: Optional[str] = Query(None, alias="from", description="Start Time of the timerange (YYYY-MM-DD)"),
    to_date: Optional[str] = Query(None, alias="to", description="End Time of the timerange (YYYY-MM-DD)"),
    client: IEXCloudClient = Depends(get_price_client),
) -> JSONResponse:
    """
    Get the ticker info along with the benchmark ticker.

    One entry per trading day of the ticker, keyed by date, holding both
    price records and ``alpha-volume`` (ticker volume minus benchmark volume).

    Example:
        GET /alpha/AAPL?benchmark=SPY&from=2023-01-01&to=2023-01-31
    """
    try:
        envelope = await AlphaService.get_alpha(client, ticker, benchmark, from_date, to_date)
        return envelope_response(envelope)
    except Exception:
        logger.exception(f"Failed to get alpha for {ticker} against {benchmark}")
        return envelope_response(ResponseEnvelope[AlphaEntry].failure())
