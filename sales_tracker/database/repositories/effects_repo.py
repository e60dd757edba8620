import sqlite3


class SaleEffectsRepo:
    """
    Markers for saga steps already applied to a sale (table sale_effects).

    Write methods take commit=False when the caller wraps them in a larger
    transaction.
    """

    def __init__(self, conn: sqlite3.Connection):
        conn.row_factory = sqlite3.Row
        self.conn = conn

    def exists(self, sale_id: str, effect: str) -> bool:
        r = self.conn.execute(
            "SELECT 1 FROM sale_effects WHERE sale_id=? AND effect=? LIMIT 1",
            (sale_id, effect),
        ).fetchone()
        return r is not None

    def mark(self, sale_id: str, effect: str, *, commit: bool = True) -> bool:
        """True if the marker was added, False if it was already there."""
        cur = self.conn.execute(
            "INSERT OR IGNORE INTO sale_effects(sale_id, effect) VALUES (?, ?)",
            (sale_id, effect),
        )
        if commit:
            self.conn.commit()
        return cur.rowcount == 1

    def clear(self, sale_id: str, *, commit: bool = True) -> int:
        cur = self.conn.execute("DELETE FROM sale_effects WHERE sale_id=?", (sale_id,))
        if commit:
            self.conn.commit()
        return cur.rowcount
