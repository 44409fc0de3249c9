"""IEX Cloud price data client."""

from ingestion.iex.iex_client import (
    YEAR_TO_DATE,
    IEXCloudClient,
    ProviderError,
    build_price_client_factory,
)

__all__ = [
    "YEAR_TO_DATE",
    "IEXCloudClient",
    "ProviderError",
    "build_price_client_factory",
]
