from __future__ import annotations

"""
Inventory registration and stock bookkeeping.

Unit cost is fixed at registration time (total purchase value / quantity)
and only changes when the product is registered again. Stock has no floor:
sales keep decrementing past zero and the UI flags it as low.
"""

import logging
import uuid
from typing import List, Optional, Sequence

from ..constants import LOW_STOCK_THRESHOLD
from ..database.gateway import PersistenceGateway
from ..errors import ValidationError
from ..records import InventoryItem
from ..utils.validators import (
    optional_non_negative,
    require_non_negative,
    require_positive_int,
    require_text,
)

_log = logging.getLogger(__name__)


def find_item(inventory: Sequence[InventoryItem], product_name: str) -> Optional[InventoryItem]:
    """Exact, case-sensitive match on product name."""
    for item in inventory:
        if item.product_name == product_name:
            return item
    return None


def is_low_stock(item: InventoryItem, threshold: int = LOW_STOCK_THRESHOLD) -> bool:
    return item.quantity < threshold


def unit_cost(total_purchase_value: float, quantity: int) -> float:
    if quantity <= 0:
        raise ValidationError("Quantity must be greater than zero.")
    return total_purchase_value / quantity


def register_product(
    product_name,
    quantity,
    total_purchase_value,
    default_sell_price=None,
    existing: Optional[InventoryItem] = None,
) -> InventoryItem:
    """
    Validate registration input and compute the unit cost.

    When `existing` is given (same product name already stocked) its id is
    kept and every other field is replaced, not added to.
    """
    name = require_text(product_name, "Product name")
    qty = require_positive_int(quantity, "Quantity")
    total = require_non_negative(total_purchase_value, "Total purchase value")
    sell = None
    if default_sell_price is not None and str(default_sell_price).strip() != "":
        sell = optional_non_negative(default_sell_price, "Default sell price")

    return InventoryItem(
        id=existing.id if existing else uuid.uuid4().hex,
        product_name=name,
        quantity=qty,
        cost_price=unit_cost(total, qty),
        default_sell_price=sell,
    )


class InventoryService:
    def __init__(self, gateway: PersistenceGateway):
        self.gateway = gateway

    def register(
        self,
        product_name,
        quantity,
        total_purchase_value,
        default_sell_price=None,
    ) -> List[InventoryItem]:
        """Validate then upsert; returns the refreshed inventory list."""
        name = require_text(product_name, "Product name")
        existing = find_item(self.gateway.list_inventory(), name)
        item = register_product(name, quantity, total_purchase_value, default_sell_price, existing)
        items = self.gateway.upsert_inventory_item(item)
        _log.info(
            "%s product %s: qty=%s unit cost=%.2f",
            "Re-registered" if existing else "Registered",
            item.product_name,
            item.quantity,
            item.cost_price,
        )
        return items

    def adjust(self, product_name: str, delta: int) -> None:
        """Signed stock change; no floor is applied."""
        self.gateway.adjust_stock(product_name, int(delta))

    def delete(self, item_id: str) -> List[InventoryItem]:
        """Sales that reference the product are left untouched."""
        items = self.gateway.delete_inventory_item(item_id)
        _log.info("Deleted inventory item %s", item_id)
        return items
