from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .constants import (
    BACKEND_SQLITE,
    BACKENDS,
    DATA_DIR,
    DB_FILE_NAME,
    JSON_STORE_FILE_NAME,
    LOW_STOCK_THRESHOLD,
    REPURCHASE_THRESHOLD_DAYS,
)
from .errors import ValidationError

BASE_DIR = Path(__file__).resolve().parent
DATA_PATH = BASE_DIR / DATA_DIR
DB_PATH = DATA_PATH / DB_FILE_NAME
JSON_STORE_PATH = DATA_PATH / JSON_STORE_FILE_NAME

ENV_BACKEND = "SALES_TRACKER_BACKEND"
ENV_DATA_DIR = "SALES_TRACKER_DATA_DIR"
ENV_LOG_LEVEL = "SALES_TRACKER_LOG_LEVEL"
ENV_REPURCHASE_DAYS = "SALES_TRACKER_REPURCHASE_DAYS"
ENV_LOW_STOCK = "SALES_TRACKER_LOW_STOCK"


@dataclass(frozen=True)
class AppConfig:
    """
    Startup configuration, built once and passed down explicitly.

    backend selects the PersistenceGateway implementation ("sqlite" or "json");
    nothing below the composition root reads it.
    """
    backend: str = BACKEND_SQLITE
    data_dir: Path = DATA_PATH
    log_level: str = "INFO"
    repurchase_threshold_days: int = REPURCHASE_THRESHOLD_DAYS
    low_stock_threshold: int = LOW_STOCK_THRESHOLD

    @property
    def db_path(self) -> Path:
        return self.data_dir / DB_FILE_NAME

    @property
    def json_store_path(self) -> Path:
        return self.data_dir / JSON_STORE_FILE_NAME


def _int_setting(env: Mapping[str, str], key: str, default: int) -> int:
    raw = (env.get(key) or "").strip()
    if not raw:
        return default
    try:
        val = int(raw)
    except ValueError as e:
        raise ValidationError(f"{key} must be an integer, got {raw!r}.") from e
    if val < 0:
        raise ValidationError(f"{key} cannot be negative.")
    return val


def load_config(env: Optional[Mapping[str, str]] = None) -> AppConfig:
    """
    Build an AppConfig from environment variables, falling back to the
    documented defaults in constants.py.
    """
    env = os.environ if env is None else env

    backend = (env.get(ENV_BACKEND) or BACKEND_SQLITE).strip().lower()
    if backend not in BACKENDS:
        raise ValidationError(
            f"{ENV_BACKEND} must be one of: {', '.join(BACKENDS)} (got {backend!r})."
        )

    data_dir_raw = (env.get(ENV_DATA_DIR) or "").strip()
    data_dir = Path(data_dir_raw).expanduser() if data_dir_raw else DATA_PATH

    return AppConfig(
        backend=backend,
        data_dir=data_dir,
        log_level=(env.get(ENV_LOG_LEVEL) or "INFO").strip().upper(),
        repurchase_threshold_days=_int_setting(env, ENV_REPURCHASE_DAYS, REPURCHASE_THRESHOLD_DAYS),
        low_stock_threshold=_int_setting(env, ENV_LOW_STOCK, LOW_STOCK_THRESHOLD),
    )
