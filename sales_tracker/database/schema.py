import sqlite3

SQL = r"""
PRAGMA foreign_keys = ON;

/* ======================== CORE TABLES ======================== */

/* -------- sales (immutable once written) -------- */
CREATE TABLE IF NOT EXISTS sales (
    sale_id          TEXT PRIMARY KEY,
    client_name      TEXT NOT NULL,
    product_name     TEXT NOT NULL,
    amount           NUMERIC NOT NULL CHECK (CAST(amount AS REAL) >= 0),
    cost             NUMERIC NOT NULL DEFAULT 0 CHECK (CAST(cost AS REAL) >= 0),
    freight          NUMERIC NOT NULL DEFAULT 0 CHECK (CAST(freight AS REAL) >= 0),
    discount         NUMERIC NOT NULL DEFAULT 0 CHECK (CAST(discount AS REAL) >= 0),
    ad_cost          NUMERIC NOT NULL DEFAULT 0 CHECK (CAST(ad_cost AS REAL) >= 0),
    commission_rate  NUMERIC NOT NULL DEFAULT 0
                     CHECK (CAST(commission_rate AS REAL) BETWEEN 0 AND 100),
    commission_value NUMERIC NOT NULL DEFAULT 0,
    date             DATE    NOT NULL,
    sale_type        TEXT    NOT NULL
                     CHECK (sale_type IN ('Instagram','Referral','Paid Traffic','Personal')),
    status           TEXT    NOT NULL DEFAULT 'Pending'
                     CHECK (status IN ('Pending','Paid','Cancelled')),
    created_at       TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
);
CREATE INDEX IF NOT EXISTS idx_sales_date   ON sales(date);
CREATE INDEX IF NOT EXISTS idx_sales_client ON sales(client_name);

/* -------- leads (prospective buyers) -------- */
CREATE TABLE IF NOT EXISTS leads (
    lead_id          TEXT PRIMARY KEY,
    client_name      TEXT NOT NULL,
    phone            TEXT,
    product_interest TEXT,
    expected_date    DATE,
    notes            TEXT,
    created_at       TIMESTAMP NOT NULL,
    status           TEXT NOT NULL DEFAULT 'Pending'
                     CHECK (status IN ('Pending','Contacted','Converted','Lost'))
);

/* -------- inventory (one row per product name) -------- */
CREATE TABLE IF NOT EXISTS inventory (
    item_id            TEXT PRIMARY KEY,
    product_name       TEXT NOT NULL UNIQUE,
    quantity           INTEGER NOT NULL DEFAULT 0,   /* may go negative */
    cost_price         NUMERIC NOT NULL DEFAULT 0 CHECK (CAST(cost_price AS REAL) >= 0),
    default_sell_price NUMERIC CHECK (default_sell_price IS NULL OR CAST(default_sell_price AS REAL) >= 0)
);

/* -------- saga markers: side effects already applied per sale -------- */
CREATE TABLE IF NOT EXISTS sale_effects (
    sale_id    TEXT NOT NULL,
    effect     TEXT NOT NULL,
    applied_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    PRIMARY KEY (sale_id, effect)
);
"""


def init_schema(conn: sqlite3.Connection) -> None:
    """Apply the schema on an open connection (idempotent)."""
    conn.executescript(SQL)

