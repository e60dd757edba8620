from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from ..errors import ValidationError
from ..records import InventoryItem, Lead, LEAD_STATUS_PENDING, LEAD_STATUSES
from ..utils.validators import require_text
from .aggregation import parse_date
from .inventory_valuation import find_item


@dataclass(frozen=True)
class SalePrefill:
    """Values the sale form starts with when a lead is converted."""
    client_name: str
    product_name: str = ""
    amount: Optional[float] = None


def _clean(text) -> Optional[str]:
    if text is None:
        return None
    s = str(text).strip()
    return s or None


def build_lead(
    client_name,
    phone=None,
    product_interest=None,
    expected_date=None,
    notes=None,
    now: Optional[datetime] = None,
) -> Lead:
    name = require_text(client_name, "Client name")
    exp = parse_date(expected_date) if expected_date not in (None, "") else None
    return Lead(
        id=uuid.uuid4().hex,
        client_name=name,
        created_at=(now or datetime.now()).replace(microsecond=0),
        status=LEAD_STATUS_PENDING,
        phone=_clean(phone),
        product_interest=_clean(product_interest),
        expected_date=exp,
        notes=_clean(notes),
    )


def ensure_lead_status(status: str) -> str:
    s = (status or "").strip()
    for known in LEAD_STATUSES:
        if known.lower() == s.lower():
            return known
    raise ValidationError(f"Lead status must be one of: {', '.join(LEAD_STATUSES)}.")


def conversion_prefill(lead: Lead, inventory: Sequence[InventoryItem]) -> SalePrefill:
    """Client, product and (when stocked with one) the default sell price."""
    product = lead.product_interest or ""
    item = find_item(inventory, product) if product else None
    return SalePrefill(
        client_name=lead.client_name,
        product_name=product,
        amount=item.default_sell_price if item else None,
    )
