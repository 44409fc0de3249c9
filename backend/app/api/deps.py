"""FastAPI dependencies shared by the API routes."""

from typing import AsyncGenerator

from fastapi import Request

from ingestion.iex import IEXCloudClient


async def get_price_client(request: Request) -> AsyncGenerator[IEXCloudClient, None]:
    """Provide a fresh provider client for this request and close it afterwards."""
    async with request.app.state.price_client_factory() as client:
        yield client
