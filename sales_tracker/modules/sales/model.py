from __future__ import annotations

from typing import List

from PySide6.QtCore import QAbstractTableModel, QModelIndex, Qt
from PySide6.QtGui import QColor

from ...records import Sale
from ...services.aggregation import net_profit
from ...utils.helpers import fmt_money


class SalesTableModel(QAbstractTableModel):
    HEADERS = [
        "Date", "Client", "Product", "Type", "Gross", "Discount",
        "Commission", "Cost", "Freight", "Ad Cost", "Net Profit", "Status",
    ]
    _MONEY_COLS = (4, 5, 6, 7, 8, 9, 10)
    _NET_COL = 10

    def __init__(self, rows: List[Sale] | None = None):
        super().__init__()
        self._rows: List[Sale] = list(rows or [])

    def rowCount(self, parent=QModelIndex()):
        return len(self._rows)

    def columnCount(self, parent=QModelIndex()):
        return len(self.HEADERS)

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        s = self._rows[index.row()]
        c = index.column()

        if role == Qt.DisplayRole:
            values = [
                s.date.isoformat(),
                s.client_name,
                s.product_name,
                s.sale_type,
                fmt_money(s.amount),
                fmt_money(s.discount),
                fmt_money(s.commission_value),
                fmt_money(s.cost),
                fmt_money(s.freight),
                fmt_money(s.ad_cost),
                fmt_money(net_profit(s)),
                s.status,
            ]
            return values[c]

        if role == Qt.TextAlignmentRole and c in self._MONEY_COLS:
            return int(Qt.AlignRight | Qt.AlignVCenter)

        if role == Qt.ForegroundRole and c == self._NET_COL and net_profit(s) < 0:
            return QColor("#b00020")

        return None

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role != Qt.DisplayRole:
            return None
        return self.HEADERS[section] if orientation == Qt.Horizontal else section + 1

    # ---- helpers ---------------------------------------------------------
    def at(self, row: int) -> Sale:
        return self._rows[row]

    def rows(self) -> List[Sale]:
        return list(self._rows)

    def replace(self, rows: List[Sale]) -> None:
        self.beginResetModel()
        self._rows = list(rows or [])
        self.endResetModel()
