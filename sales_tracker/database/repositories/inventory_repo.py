from __future__ import annotations

"""
Repository for the `inventory` table (one row per product name).

Conventions:
- upsert() is keyed by product_name and fully replaces quantity, cost_price
  and default_sell_price (re-registration is not additive).
- adjust_stock() applies a signed delta with no floor; negative stock is a
  valid state.
"""

import sqlite3
from typing import List, Optional

from ...errors import NotFoundError
from ...records import InventoryItem

_COLUMNS = "item_id, product_name, quantity, cost_price, default_sell_price"


class InventoryRepo:
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn
        # Make sure rows are accessible as dicts
        self.conn.row_factory = sqlite3.Row

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def list_items(self) -> List[InventoryItem]:
        rows = self.conn.execute(
            f"SELECT {_COLUMNS} FROM inventory ORDER BY product_name"
        ).fetchall()
        return [self._row_to_item(r) for r in rows]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def upsert(self, item: InventoryItem) -> None:
        """
        Insert a new product or replace the figures of the existing row with the
        same product_name. The existing item_id is kept on conflict.
        """
        self.conn.execute(
            f"""
            INSERT INTO inventory({_COLUMNS}) VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(product_name) DO UPDATE SET
                quantity           = excluded.quantity,
                cost_price         = excluded.cost_price,
                default_sell_price = excluded.default_sell_price
            """,
            (
                item.id,
                item.product_name,
                int(item.quantity),
                float(item.cost_price),
                self._to_float(item.default_sell_price),
            ),
        )
        self.conn.commit()

    def delete(self, item_id: str) -> None:
        cur = self.conn.execute("DELETE FROM inventory WHERE item_id=?", (item_id,))
        self.conn.commit()
        if cur.rowcount == 0:
            raise NotFoundError(f"Inventory item {item_id} does not exist.")

    def adjust_stock(self, product_name: str, delta: int, *, commit: bool = True) -> None:
        cur = self.conn.execute(
            "UPDATE inventory SET quantity = quantity + ? WHERE product_name=?",
            (int(delta), product_name),
        )
        if cur.rowcount == 0:
            raise NotFoundError(f"Product '{product_name}' is not in the inventory.")
        if commit:
            self.conn.commit()

    # ------------------------------------------------------------------
    # Utilities
    # ------------------------------------------------------------------
    @classmethod
    def _row_to_item(cls, r: sqlite3.Row) -> InventoryItem:
        return InventoryItem(
            id=r["item_id"],
            product_name=r["product_name"],
            quantity=int(r["quantity"]),
            cost_price=float(r["cost_price"] or 0.0),
            default_sell_price=cls._to_float(r["default_sell_price"]),
        )

    @staticmethod
    def _to_float(x) -> Optional[float]:
        if x is None:
            return None
        return float(x)
