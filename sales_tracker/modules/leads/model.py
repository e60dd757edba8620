from __future__ import annotations

from typing import List

from PySide6.QtCore import QAbstractTableModel, QModelIndex, Qt

from ...records import Lead
from ...utils.helpers import fmt_date


class LeadsTableModel(QAbstractTableModel):
    HEADERS = ["Created", "Client", "Phone", "Interest", "Expected", "Status", "Notes"]

    def __init__(self, rows: List[Lead] | None = None):
        super().__init__()
        self._rows: List[Lead] = list(rows or [])

    def rowCount(self, parent=QModelIndex()):
        return len(self._rows)

    def columnCount(self, parent=QModelIndex()):
        return len(self.HEADERS)

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid() or role != Qt.DisplayRole:
            return None
        l = self._rows[index.row()]
        values = [
            l.created_at.strftime("%Y-%m-%d %H:%M"),
            l.client_name,
            l.phone or "",
            l.product_interest or "",
            fmt_date(l.expected_date),
            l.status,
            l.notes or "",
        ]
        return values[index.column()]

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role != Qt.DisplayRole:
            return None
        return self.HEADERS[section] if orientation == Qt.Horizontal else section + 1

    def at(self, row: int) -> Lead:
        return self._rows[row]

    def replace(self, rows: List[Lead]) -> None:
        self.beginResetModel()
        self._rows = list(rows or [])
        self.endResetModel()
