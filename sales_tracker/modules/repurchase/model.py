from __future__ import annotations

from typing import List

from PySide6.QtCore import QAbstractTableModel, QModelIndex, Qt

from ...records import RepurchaseEntry
from ...utils.helpers import fmt_money


class RepurchaseTableModel(QAbstractTableModel):
    HEADERS = ["Client", "Last Product", "Last Purchase", "Days Since", "Last Amount"]

    def __init__(self, rows: List[RepurchaseEntry] | None = None):
        super().__init__()
        self._rows: List[RepurchaseEntry] = list(rows or [])

    def rowCount(self, parent=QModelIndex()):
        return len(self._rows)

    def columnCount(self, parent=QModelIndex()):
        return len(self.HEADERS)

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        e = self._rows[index.row()]
        c = index.column()
        if role == Qt.DisplayRole:
            values = [
                e.client_name,
                e.sale.product_name,
                e.sale.date.isoformat(),
                str(e.days_since),
                fmt_money(e.sale.amount),
            ]
            return values[c]
        if role == Qt.TextAlignmentRole and c in (3, 4):
            return int(Qt.AlignRight | Qt.AlignVCenter)
        return None

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role != Qt.DisplayRole:
            return None
        return self.HEADERS[section] if orientation == Qt.Horizontal else section + 1

    def at(self, row: int) -> RepurchaseEntry:
        return self._rows[row]

    def replace(self, rows: List[RepurchaseEntry]) -> None:
        self.beginResetModel()
        self._rows = list(rows or [])
        self.endResetModel()
