from pathlib import Path

import pytest

from sales_tracker.config import (
    DATA_PATH,
    ENV_BACKEND,
    ENV_DATA_DIR,
    ENV_LOG_LEVEL,
    ENV_LOW_STOCK,
    ENV_REPURCHASE_DAYS,
    load_config,
)
from sales_tracker.database import JsonStoreGateway, SqliteGateway, open_gateway
from sales_tracker.errors import ValidationError


def test_defaults():
    cfg = load_config({})
    assert cfg.backend == "sqlite"
    assert cfg.data_dir == DATA_PATH
    assert cfg.log_level == "INFO"
    assert cfg.repurchase_threshold_days == 28
    assert cfg.low_stock_threshold == 5


def test_environment_overrides(tmp_path):
    cfg = load_config({
        ENV_BACKEND: " JSON ",
        ENV_DATA_DIR: str(tmp_path),
        ENV_LOG_LEVEL: "debug",
        ENV_REPURCHASE_DAYS: "14",
        ENV_LOW_STOCK: "2",
    })
    assert cfg.backend == "json"
    assert cfg.data_dir == Path(tmp_path)
    assert cfg.log_level == "DEBUG"
    assert cfg.repurchase_threshold_days == 14
    assert cfg.low_stock_threshold == 2
    assert cfg.json_store_path.parent == Path(tmp_path)


@pytest.mark.parametrize("env", [{ENV_BACKEND: "mongo"}, {ENV_REPURCHASE_DAYS: "soon"}, {ENV_LOW_STOCK: "-1"}])
def test_invalid_settings(env):
    with pytest.raises(ValidationError):
        load_config(env)


def test_open_gateway_picks_backend(tmp_path):
    gw = open_gateway(load_config({ENV_BACKEND: "json", ENV_DATA_DIR: str(tmp_path)}))
    assert isinstance(gw, JsonStoreGateway)

    gw = open_gateway(load_config({ENV_DATA_DIR: str(tmp_path)}))
    try:
        assert isinstance(gw, SqliteGateway)
        assert (tmp_path / "sales_tracker.db").exists()
    finally:
        gw.close()
