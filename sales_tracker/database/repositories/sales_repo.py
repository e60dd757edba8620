from __future__ import annotations

"""
Repository for the `sales` table.

Conventions:
- Rows are converted to records.Sale here; callers never see column names.
- Dates are stored as ISO 'YYYY-MM-DD'.
- Amounts are cast to float on the way out.
"""

import sqlite3
from datetime import date
from typing import List

from ...errors import NotFoundError
from ...records import Sale

_COLUMNS = (
    "sale_id, client_name, product_name, amount, cost, freight, discount, ad_cost, "
    "commission_rate, commission_value, date, sale_type, status"
)


class SalesRepo:
    def __init__(self, conn: sqlite3.Connection):
        # ensure rows behave like dicts/tuples
        conn.row_factory = sqlite3.Row
        self.conn = conn

    # ---- Queries ----------------------------------------------------------

    def list_sales(self) -> List[Sale]:
        """All sales, most recently recorded first."""
        rows = self.conn.execute(
            f"SELECT {_COLUMNS} FROM sales ORDER BY created_at DESC, rowid DESC"
        ).fetchall()
        return [self._row_to_sale(r) for r in rows]

    # ---- Mutations --------------------------------------------------------

    def create(self, sale: Sale) -> Sale:
        self.conn.execute(
            f"INSERT INTO sales({_COLUMNS}) VALUES (?,?,?,?,?,?,?,?,?,?,?,?,?)",
            (
                sale.id,
                sale.client_name,
                sale.product_name,
                float(sale.amount),
                float(sale.cost or 0.0),
                float(sale.freight or 0.0),
                float(sale.discount or 0.0),
                float(sale.ad_cost or 0.0),
                float(sale.commission_rate),
                float(sale.commission_value),
                sale.date.isoformat(),
                sale.sale_type,
                sale.status,
            ),
        )
        self.conn.commit()
        return sale

    def delete(self, sale_id: str, *, commit: bool = True) -> None:
        cur = self.conn.execute("DELETE FROM sales WHERE sale_id=?", (sale_id,))
        if cur.rowcount == 0:
            raise NotFoundError(f"Sale {sale_id} does not exist.")
        if commit:
            self.conn.commit()

    # ---- Internal helpers -------------------------------------------------

    @staticmethod
    def _row_to_sale(r: sqlite3.Row) -> Sale:
        return Sale(
            id=r["sale_id"],
            client_name=r["client_name"],
            product_name=r["product_name"],
            amount=float(r["amount"]),
            cost=float(r["cost"] or 0.0),
            freight=float(r["freight"] or 0.0),
            discount=float(r["discount"] or 0.0),
            ad_cost=float(r["ad_cost"] or 0.0),
            commission_rate=float(r["commission_rate"] or 0.0),
            commission_value=float(r["commission_value"] or 0.0),
            date=date.fromisoformat(str(r["date"])[:10]),
            sale_type=r["sale_type"],
            status=r["status"],
        )
