# tests/conftest.py
# ---------------------------------------------------------------------
# Ground rules:
# - pytest-qt owns QApplication (use qapp/qtbot fixtures)
# - Each test gets a fresh in-memory SQLite DB with the schema applied
# - `gateway` runs a test once per backend (sqlite, json)
# - A fixed TODAY keeps date-based assertions stable
# - Silence benign Qt signal warnings
# ---------------------------------------------------------------------

from __future__ import annotations

import re
from datetime import date

import pytest
from PySide6 import QtCore

from sales_tracker.database import JsonStoreGateway, SqliteGateway, get_connection
from tests.factories import TODAY


# ---------- Qt: let pytest-qt own the app ----------
@pytest.fixture(scope="session")
def app(qapp):
    return qapp


_BENIGN_QT_PATTERNS = [
    r"^QObject::connect: .* already connected",
    r"^QObject::disconnect: Unexpected null parameter",
    r"^QBasicTimer::stop: Failed\. Platform timer not running\.",
]


@pytest.fixture(autouse=True, scope="session")
def _silence_benign_qt():
    """Filter common harmless Qt messages during tests."""
    original = QtCore.qInstallMessageHandler(None)
    rx = [re.compile(p) for p in _BENIGN_QT_PATTERNS]

    def handler(msg_type, context, message):
        text = str(message)
        for r in rx:
            if r.search(text):
                return
        QtCore.qInstallMessageHandler(None)
        try:
            QtCore.qDebug(message)
        finally:
            QtCore.qInstallMessageHandler(handler)

    QtCore.qInstallMessageHandler(handler)
    try:
        yield
    finally:
        QtCore.qInstallMessageHandler(original)


# ---------- Storage ----------
@pytest.fixture
def conn():
    con = get_connection(":memory:")
    try:
        yield con
    finally:
        con.close()


@pytest.fixture
def sqlite_gateway(conn):
    return SqliteGateway(conn)


@pytest.fixture
def json_gateway(tmp_path):
    return JsonStoreGateway(tmp_path / "store.json")


@pytest.fixture(params=["sqlite", "json"])
def gateway(request, tmp_path):
    if request.param == "sqlite":
        con = get_connection(":memory:")
        gw = SqliteGateway(con)
    else:
        gw = JsonStoreGateway(tmp_path / "store.json")
    yield gw
    gw.close()


@pytest.fixture
def today() -> date:
    return TODAY
