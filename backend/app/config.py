"""Application configuration using Pydantic settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    # Application
    APP_NAME: str = "API for stock data"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # IEX Cloud / Apperate
    API_KEY: str = ""
    IEX_BASE_URL: str = "https://cloud.iexapis.com"
    IEX_API_VERSION: str = "v1"
    IEX_WORKSPACE: str = "CORE"
    IEX_DATASET: str = "HISTORICAL_PRICES"
    IEX_TIMEOUT: float = 30.0

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # CORS
    CORS_ORIGINS: list[str] = ["*"]


settings = Settings()
