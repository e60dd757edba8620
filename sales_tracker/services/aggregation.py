"""
services/aggregation.py

Pure helpers for the dashboard, the sales history and the repurchase list.

Do not import gateways or open DB connections here.
Only compute numbers; formatting belongs in the UI.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, List, Optional, Union

from ..constants import REPURCHASE_THRESHOLD_DAYS
from ..errors import ValidationError
from ..records import ProductTotal, RepurchaseEntry, Sale, SalesSummary

DateLike = Union[date, datetime, str]

__all__ = [
    "parse_date",
    "commission_value",
    "net_profit",
    "filter_by_date_range",
    "summarize",
    "revenue_by_product",
    "repurchase_candidates",
    "search_sales",
]


# -----------------------------
# Dates
# -----------------------------

def parse_date(value: DateLike) -> date:
    """
    Normalize a date-ish value to a calendar date (time of day is dropped).

    Accepts datetime.date, datetime.datetime and ISO text ('YYYY-MM-DD' or a
    full ISO timestamp). Anything else raises ValidationError; there is no
    fallback date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValidationError("Date is required.")
        # full timestamps: keep the calendar part only
        if len(text) > 10 and text[10] in "T ":
            text = text[:10]
        try:
            return date.fromisoformat(text)
        except ValueError as e:
            raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD).") from e
    raise ValidationError(f"Invalid date: {value!r}.")


# -----------------------------
# Per-sale figures
# -----------------------------

def commission_value(amount: float, commission_rate: float) -> float:
    """commission = amount * rate / 100"""
    return amount * commission_rate / 100.0


def net_profit(sale: Sale) -> float:
    """
    net = amount - discount - commission_value - cost - freight - ad_cost

    Never stored; always recomputed from the persisted fields.
    """
    return (
        sale.amount
        - (sale.discount or 0.0)
        - sale.commission_value
        - (sale.cost or 0.0)
        - (sale.freight or 0.0)
        - (sale.ad_cost or 0.0)
    )


# -----------------------------
# Collections
# -----------------------------

def filter_by_date_range(
    sales: Iterable[Sale],
    start: Optional[DateLike] = None,
    end: Optional[DateLike] = None,
) -> List[Sale]:
    """
    Keep sales with start <= sale.date <= end (both inclusive).

    A missing bound leaves that side open; a lone `start` still drops
    everything before it. Input order is preserved.
    """
    lo = parse_date(start) if start not in (None, "") else None
    hi = parse_date(end) if end not in (None, "") else None

    out: List[Sale] = []
    for s in sales:
        d = parse_date(s.date)
        if lo is not None and d < lo:
            continue
        if hi is not None and d > hi:
            continue
        out.append(s)
    return out


def summarize(sales: Iterable[Sale]) -> SalesSummary:
    """Fold the sales into totals; average_ticket is 0.0 for an empty list."""
    total_sales = 0.0
    total_commission = 0.0
    total_net = 0.0
    total_freight = 0.0
    count = 0

    for s in sales:
        total_sales += s.amount
        total_commission += s.commission_value
        total_net += net_profit(s)
        total_freight += s.freight or 0.0
        count += 1

    return SalesSummary(
        total_sales=total_sales,
        total_commission=total_commission,
        total_net_profit=total_net,
        total_freight=total_freight,
        sales_count=count,
        average_ticket=(total_sales / count) if count else 0.0,
    )


def revenue_by_product(sales: Iterable[Sale]) -> List[ProductTotal]:
    """
    Sum of gross amount per product name.

    Ordered by value descending; equal values by name ascending.
    """
    totals: dict[str, float] = {}
    for s in sales:
        totals[s.product_name] = totals.get(s.product_name, 0.0) + s.amount
    rows = [ProductTotal(name=k, value=v) for k, v in totals.items()]
    rows.sort(key=lambda r: (-r.value, r.name))
    return rows


def repurchase_candidates(
    sales: Iterable[Sale],
    today: Optional[DateLike] = None,
    threshold_days: int = REPURCHASE_THRESHOLD_DAYS,
) -> List[RepurchaseEntry]:
    """
    One entry per client whose latest sale is at least `threshold_days` old.

    Clients are grouped by exact (case-sensitive) name. When two sales share
    the latest date the first one encountered is kept. Output is sorted by
    sale date, most recent first.
    """
    ref = parse_date(today) if today is not None else date.today()

    latest: dict[str, Sale] = {}
    for s in sales:
        cur = latest.get(s.client_name)
        if cur is None or parse_date(s.date) > parse_date(cur.date):
            latest[s.client_name] = s

    out: List[RepurchaseEntry] = []
    for s in latest.values():
        days = abs((ref - parse_date(s.date)).days)
        if days >= threshold_days:
            out.append(RepurchaseEntry(sale=s, days_since=days))

    out.sort(key=lambda e: parse_date(e.sale.date), reverse=True)
    return out


def search_sales(sales: Iterable[Sale], term: Optional[str]) -> List[Sale]:
    """Case-insensitive substring match on client name; blank term keeps all."""
    needle = (term or "").strip().lower()
    if not needle:
        return list(sales)
    return [s for s in sales if needle in (s.client_name or "").lower()]
