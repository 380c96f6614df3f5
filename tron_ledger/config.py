"""Application configuration and environment settings"""
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """Application settings loaded from environment variables"""
    # TronGrid settings
    TRONGRID_URL: str = Field("https://api.trongrid.io", description="TronGrid API base URL")
    TRONGRID_API_KEY: Optional[str] = Field(None, description="TronGrid API key sent as TRON-PRO-API-KEY")
    REQUEST_TIMEOUT: float = Field(30.0, description="HTTP request timeout in seconds")

    # Retrieval settings
    PAGE_SIZE: int = Field(200, description="Records requested per transaction page")
    ASSET_PAGE_SIZE: int = Field(20, description="Records requested per asset directory page")
    MAX_ATTEMPTS: int = Field(10, description="Attempts per request before giving up")
    CUTOFF_RETRIES: int = Field(4, description="Extra requests issued when a page comes back short")

    # Output
    OUTPUT_FILE: str = Field("output.csv", description="Default ledger CSV path")

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=True,
        extra='ignore'
    )

settings = Settings()
