# portfolio_ledger/core/config/settings.py

from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path

class Settings(BaseSettings):
    """
    Application settings loaded from environment variables or .env file.
    Includes general app settings and ledger behaviour configuration.
    """
    # General App Settings
    APP_NAME: str = "Portfolio Ledger API"
    APP_VERSION: str = "0.1.0"
    DEBUG_MODE: bool = False

    # API Specific Settings
    API_V1_STR: str = "/api/v1"

    # Logging Settings
    LOG_LEVEL: str = "INFO" # e.g., DEBUG, INFO, WARNING, ERROR, CRITICAL

    # Ledger Settings
    DECIMAL_PRECISION: int = 28
    SERIALIZE_TICKER_OPERATIONS: bool = True # Run each buy/sell under a per-ticker lock

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parent.parent.parent.parent / ".env"),
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )

settings = Settings()
