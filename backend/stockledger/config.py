from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DATABASE_URL: str = "sqlite:///./stock.db"
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 8000
    FRONTEND_ORIGINS: List[str] = ["http://localhost:3000"]
    LOG_LEVEL: str = "INFO"

    # per-product critical sections
    LOCK_DIR: Optional[str] = None
    LOCK_TIMEOUT_SECONDS: float = 10.0

    SEED_DEMO_DATA: bool = True
    # 0 disables the scheduled low-stock scan
    LOW_STOCK_SCAN_SECONDS: int = 0

    # tool-call client
    STOCK_API_URL: str = "http://localhost:8000"
    STOCK_API_TIMEOUT_SECONDS: float = 30.0


settings = Settings()
