"""IEX Cloud (Apperate) data API client for historical daily prices."""

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from app.config import Settings, settings as default_settings
from app.models import PriceRecord

logger = logging.getLogger(__name__)

YEAR_TO_DATE = "ytd"


class ProviderError(Exception):
    """Raised when the price provider cannot deliver a usable series."""

    def __init__(self, message: str, ticker: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.ticker = ticker
        self.status_code = status_code


class IEXCloudClient:
    """Async client for the IEX Cloud Apperate data API.

    One instance is meant to serve a single request: build it from the
    factory, query, then ``close()`` it.
    """

    def __init__(
        self,
        api_token: Optional[str] = None,
        version: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        workspace: Optional[str] = None,
        dataset_id: Optional[str] = None,
    ):
        self.api_token = api_token if api_token is not None else default_settings.API_KEY
        self.version = version or default_settings.IEX_API_VERSION
        self.base_url = (base_url or default_settings.IEX_BASE_URL).rstrip("/")
        self.timeout = timeout or default_settings.IEX_TIMEOUT
        self.workspace = workspace or default_settings.IEX_WORKSPACE
        self.dataset_id = dataset_id or default_settings.IEX_DATASET
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=f"{self.base_url}/{self.version}",
                headers={"Accept": "application/json"},
                timeout=self.timeout,
                follow_redirects=True,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "IEXCloudClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _request(self, path: str, params: dict[str, str]) -> httpx.Response:
        """Make an authenticated GET request."""
        client = await self._get_client()

        logger.debug(f"Requesting: {path} {params}")
        response = await client.get(path, params={**params, "token": self.api_token})
        response.raise_for_status()
        return response

    async def query_data(
        self,
        workspace: str,
        dataset_id: str,
        key: str,
        range_token: Optional[str] = None,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
    ) -> Any:
        """Query a dataset by key and return the decoded JSON body.

        Either ``range_token`` (a relative range such as ``"ytd"``) or the
        ``from_date``/``to_date`` pair selects the window.
        """
        params: dict[str, str] = {}
        if range_token:
            params["range"] = range_token
        if from_date:
            params["from"] = from_date
        if to_date:
            params["to"] = to_date

        path = f"/data/{workspace}/{dataset_id}/{key}"
        try:
            response = await self._request(path, params)
            return response.json()
        except httpx.HTTPStatusError as e:
            raise ProviderError(
                f"Provider returned {e.response.status_code} for {key}",
                ticker=key,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise ProviderError(f"Provider request failed for {key}: {e}", ticker=key) from e
        except ValueError as e:
            raise ProviderError(f"Provider sent an undecodable body for {key}", ticker=key) from e

    async def get_daily_prices(
        self,
        ticker: str,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
    ) -> list[PriceRecord]:
        """Fetch the daily price series for a ticker.

        Without a ``from_date``/``to_date`` pair the year-to-date range is
        requested. A body that is not a list is treated as an empty series.
        """
        ticker = ticker.strip().upper()
        if from_date and to_date:
            body = await self.query_data(
                self.workspace, self.dataset_id, ticker, from_date=from_date, to_date=to_date
            )
        else:
            body = await self.query_data(self.workspace, self.dataset_id, ticker, range_token=YEAR_TO_DATE)

        if not isinstance(body, list):
            logger.warning(f"Expected a list of prices for {ticker}, got {type(body).__name__}")
            return []

        try:
            return [PriceRecord.model_validate(item) for item in body]
        except ValidationError as e:
            raise ProviderError(f"Malformed price record for {ticker}", ticker=ticker) from e


def build_price_client_factory(config: Settings = default_settings):
    """Bind provider settings once and return a zero-argument client factory."""

    def factory() -> IEXCloudClient:
        return IEXCloudClient(
            api_token=config.API_KEY,
            version=config.IEX_API_VERSION,
            base_url=config.IEX_BASE_URL,
            timeout=config.IEX_TIMEOUT,
            workspace=config.IEX_WORKSPACE,
            dataset_id=config.IEX_DATASET,
        )

    return factory
