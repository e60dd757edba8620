from __future__ import annotations
from datetime import date, datetime
import sqlite3

from ...errors import NotFoundError
from ...records import Lead

_COLUMNS = "lead_id, client_name, phone, product_interest, expected_date, notes, created_at, status"


class LeadsRepo:
    def __init__(self, conn: sqlite3.Connection):
        conn.row_factory = sqlite3.Row
        self.conn = conn

    def list_leads(self) -> list[Lead]:
        rows = self.conn.execute(
            f"SELECT {_COLUMNS} FROM leads ORDER BY created_at DESC, rowid DESC"
        ).fetchall()
        return [self._row_to_lead(r) for r in rows]

    def create(self, lead: Lead) -> Lead:
        self.conn.execute(
            f"INSERT INTO leads({_COLUMNS}) VALUES (?,?,?,?,?,?,?,?)",
            (
                lead.id,
                lead.client_name,
                lead.phone,
                lead.product_interest,
                lead.expected_date.isoformat() if lead.expected_date else None,
                lead.notes,
                lead.created_at.isoformat(timespec="seconds"),
                lead.status,
            ),
        )
        self.conn.commit()
        return lead

    def delete(self, lead_id: str) -> None:
        cur = self.conn.execute("DELETE FROM leads WHERE lead_id=?", (lead_id,))
        self.conn.commit()
        if cur.rowcount == 0:
            raise NotFoundError(f"Lead {lead_id} does not exist.")

    def update_status(self, lead_id: str, status: str) -> None:
        cur = self.conn.execute(
            "UPDATE leads SET status=? WHERE lead_id=?", (status, lead_id)
        )
        self.conn.commit()
        if cur.rowcount == 0:
            raise NotFoundError(f"Lead {lead_id} does not exist.")

    @staticmethod
    def _row_to_lead(r: sqlite3.Row) -> Lead:
        exp = r["expected_date"]
        return Lead(
            id=r["lead_id"],
            client_name=r["client_name"],
            phone=r["phone"],
            product_interest=r["product_interest"],
            expected_date=date.fromisoformat(str(exp)[:10]) if exp else None,
            notes=r["notes"],
            created_at=datetime.fromisoformat(str(r["created_at"])),
            status=r["status"],
        )
