"""Daily returns API endpoint."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.api.deps import get_price_client
from app.api.envelope import envelope_response
from app.models import DailyReturn, ResponseEnvelope
from app.services.stock_return_service import StockReturnService
from ingestion.iex import IEXCloudClient

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{ticker}", response_class=JSONResponse)
async def get_daily_returns(
    ticker: str,
    from_date: Optional[str] = Query(None, alias="from", description="Start Time of the timerange (YYYY-MM-DD)"),
    to_date: Optional[str] = Query(None, alias="to", description="End Time of the timerange (YYYY-MM-DD)"),
    client: IEXCloudClient = Depends(get_price_client),
) -> JSONResponse:
    """
    Get the ticker info within the timerange provided.

    Each trading day carries ``dailyReturn``, ``fDailyReturn`` and
    ``uDailyReturn`` (close minus open, rounded to cents). Without
    ``from``/``to`` the year-to-date range is used.

    Example:
        GET /return/AAPL?from=2023-01-01&to=2023-01-31
    """
    try:
        envelope = await StockReturnService.get_returns(client, ticker, from_date, to_date)
        return envelope_response(envelope)
    except Exception:
        logger.exception(f"Failed to get daily returns for {ticker}")
        return envelope_response(ResponseEnvelope[DailyReturn].failure())
