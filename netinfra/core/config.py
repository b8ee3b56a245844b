# netinfra/core/config.py
import os
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

# Load .env before any setting is read
load_dotenv()

DATA_DIR = os.path.normpath(os.path.join(os.path.dirname(__file__), "..", "..", "data"))


class Settings(BaseSettings):
    """Runtime configuration, read from the environment (and .env)."""

    app_env: str = "development"
    log_level: str = "INFO"

    # None -> SQLite file under data/db/
    database_url: Optional[str] = None
    encryption_key: Optional[str] = None

    router_connect_timeout: float = 10.0
    router_use_ssl: bool = False

    wan_scheduler_enabled: bool = True
    wan_ping_interval_seconds: int = 120
    wan_ping_timeout: float = 5.0
    wan_history_limit: int = 1000

    sync_missing_secret_policy: Literal["placeholder", "skip"] = "placeholder"
    sync_fallback_secret: str = "changeme"

    model_config = {"extra": "ignore"}


settings = Settings()
