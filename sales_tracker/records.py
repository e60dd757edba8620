"""
Record shapes used by the services and the UI.

Gateways translate these to and from their storage layout (snake_case columns
in SQLite, camelCase keys in the JSON store); nothing else sees storage names.
Money is kept as float, dates as datetime.date.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

# ---------- Closed sets ----------
SALE_TYPE_INSTAGRAM = "Instagram"
SALE_TYPE_REFERRAL = "Referral"
SALE_TYPE_PAID_TRAFFIC = "Paid Traffic"
SALE_TYPE_PERSONAL = "Personal"
SALE_TYPES: tuple[str, ...] = (
    SALE_TYPE_INSTAGRAM,
    SALE_TYPE_REFERRAL,
    SALE_TYPE_PAID_TRAFFIC,
    SALE_TYPE_PERSONAL,
)

SALE_STATUS_PENDING = "Pending"
SALE_STATUS_PAID = "Paid"
SALE_STATUS_CANCELLED = "Cancelled"
SALE_STATUSES: tuple[str, ...] = (SALE_STATUS_PENDING, SALE_STATUS_PAID, SALE_STATUS_CANCELLED)

LEAD_STATUS_PENDING = "Pending"
LEAD_STATUS_CONTACTED = "Contacted"
LEAD_STATUS_CONVERTED = "Converted"
LEAD_STATUS_LOST = "Lost"
LEAD_STATUSES: tuple[str, ...] = (
    LEAD_STATUS_PENDING,
    LEAD_STATUS_CONTACTED,
    LEAD_STATUS_CONVERTED,
    LEAD_STATUS_LOST,
)


# ---------- Persisted records ----------

@dataclass(frozen=True)
class Sale:
    id: str
    client_name: str
    product_name: str
    amount: float
    cost: float
    commission_rate: float
    commission_value: float
    date: date
    sale_type: str
    status: str = SALE_STATUS_PENDING
    freight: float = 0.0
    discount: float = 0.0
    ad_cost: float = 0.0


@dataclass(frozen=True)
class Lead:
    id: str
    client_name: str
    created_at: datetime
    status: str = LEAD_STATUS_PENDING
    phone: Optional[str] = None
    product_interest: Optional[str] = None
    expected_date: Optional[date] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class InventoryItem:
    id: str
    product_name: str
    quantity: int
    cost_price: float
    default_sell_price: Optional[float] = None


# ---------- Derived values (never persisted) ----------

@dataclass(frozen=True)
class SalesSummary:
    total_sales: float = 0.0
    total_commission: float = 0.0
    total_net_profit: float = 0.0
    total_freight: float = 0.0
    sales_count: int = 0
    average_ticket: float = 0.0


@dataclass(frozen=True)
class ProductTotal:
    name: str
    value: float


@dataclass(frozen=True)
class RepurchaseEntry:
    sale: Sale
    days_since: int

    @property
    def client_name(self) -> str:
        return self.sale.client_name
