"""Application configuration via environment variables."""

from pathlib import Path
from pydantic_settings import BaseSettings

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    database_url: str = f"sqlite:///{PROJECT_ROOT / 'trade_journal.db'}"
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Auth
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440  # 24 hours

    # Crypto catalogue (CoinGecko coins list)
    crypto_list_path: Path = PROJECT_ROOT / "data" / "crypto-list.json"
    crypto_list_url: str = "https://api.coingecko.com/api/v3/coins/list"
    crypto_list_timeout: float = 30.0

    # Trade listing
    default_page_size: int = 100
    max_page_size: int = 500

    model_config = {"env_prefix": "CJ_", "env_file": ".env"}


settings = Settings()
