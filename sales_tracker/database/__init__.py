# database/__init__.py
from __future__ import annotations

from pathlib import Path
import logging
import sqlite3

from ..config import AppConfig
from ..constants import BACKEND_JSON, SCHEMA_VERSION
from . import schema as schema_module
from .gateway import EFFECT_LEAD_REMOVED, EFFECT_STOCK_DECREMENT, PersistenceGateway
from .json_store import JsonStoreGateway
from .sqlite_gateway import SqliteGateway
from .versioning import ensure_version

_log = logging.getLogger(__name__)


def get_connection(db_path: Path | str) -> sqlite3.Connection:
    """
    Returns a sqlite3.Connection with:
      - foreign_keys ON
      - row_factory = sqlite3.Row (so rows behave like dicts and tuples)
    Ensures the schema and version row are applied idempotently.
    Pass ":memory:" for a throwaway database.
    """
    if str(db_path) != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON;")

    # Always apply the schema (idempotent: uses CREATE IF NOT EXISTS)
    schema_module.init_schema(conn)
    ensure_version(conn, SCHEMA_VERSION)

    conn.commit()
    return conn


def open_gateway(config: AppConfig) -> PersistenceGateway:
    """Composition root for storage: pick the backend named in the config."""
    if config.backend == BACKEND_JSON:
        _log.info("Using JSON store at %s", config.json_store_path)
        return JsonStoreGateway(config.json_store_path)
    _log.info("Using SQLite database at %s", config.db_path)
    return SqliteGateway(get_connection(config.db_path))


__all__ = [
    "get_connection",
    "open_gateway",
    "PersistenceGateway",
    "SqliteGateway",
    "JsonStoreGateway",
    "EFFECT_STOCK_DECREMENT",
    "EFFECT_LEAD_REMOVED",
]
