# config.py
"""
Runtime settings for the Bhairav Dynamics site backend.

Values come from the process environment; a local `.env` file is loaded
first so development setups don't need exported variables.
"""

import os
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

DEFAULT_DATABASE_URL = "mysql+pymysql://root@127.0.0.1:3306/bhairav_dynamics"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}")


class Settings(BaseModel):
    database_url: str = DEFAULT_DATABASE_URL
    host: str = "0.0.0.0"
    port: int = 3000
    data_dir: str = "data"
    uploads_dir: str = "uploads"
    db_connect_timeout: int = 5
    db_reconnect_interval: int = 30
    rate_limit_max: int = 200
    rate_limit_window: int = 600
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            database_url=os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL,
            host=os.getenv("HOST", "0.0.0.0"),
            port=_int_env("PORT", 3000),
            data_dir=os.getenv("DATA_DIR", "data"),
            uploads_dir=os.getenv("UPLOADS_DIR", "uploads"),
            db_connect_timeout=_int_env("DB_CONNECT_TIMEOUT", 5),
            db_reconnect_interval=_int_env("DB_RECONNECT_INTERVAL", 30),
            rate_limit_max=_int_env("RATE_LIMIT_MAX", 200),
            rate_limit_window=_int_env("RATE_LIMIT_WINDOW", 600),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
