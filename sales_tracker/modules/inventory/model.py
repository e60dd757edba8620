from __future__ import annotations

from typing import List

from PySide6.QtCore import QAbstractTableModel, QModelIndex, Qt
from PySide6.QtGui import QColor

from ...constants import LOW_STOCK_THRESHOLD
from ...records import InventoryItem
from ...services.inventory_valuation import is_low_stock
from ...utils.helpers import fmt_money


class InventoryTableModel(QAbstractTableModel):
    """Products with quantity, unit cost, default price and a low-stock badge."""

    HEADERS = ["Product", "Qty", "Unit Cost", "Sell Price", "Stock"]

    def __init__(self, rows: List[InventoryItem] | None = None, low_stock_threshold: int = LOW_STOCK_THRESHOLD):
        super().__init__()
        self._rows: List[InventoryItem] = list(rows or [])
        self.low_stock_threshold = low_stock_threshold

    def rowCount(self, parent=QModelIndex()):
        return len(self._rows)

    def columnCount(self, parent=QModelIndex()):
        return len(self.HEADERS)

    def _is_low(self, item: InventoryItem) -> bool:
        return is_low_stock(item, self.low_stock_threshold)

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        it = self._rows[index.row()]
        c = index.column()

        if role == Qt.DisplayRole:
            if c == 0:
                return it.product_name
            if c == 1:
                return str(it.quantity)
            if c == 2:
                return fmt_money(it.cost_price)
            if c == 3:
                return fmt_money(it.default_sell_price) if it.default_sell_price is not None else ""
            if c == 4:
                return "Low" if self._is_low(it) else "OK"

        if role == Qt.TextAlignmentRole and c in (1, 2, 3):
            return int(Qt.AlignRight | Qt.AlignVCenter)

        if role == Qt.ForegroundRole and c in (1, 4) and self._is_low(it):
            return QColor("#b00020")

        return None

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role != Qt.DisplayRole:
            return None
        return self.HEADERS[section] if orientation == Qt.Horizontal else section + 1

    def at(self, row: int) -> InventoryItem:
        return self._rows[row]

    def replace(self, rows: List[InventoryItem]) -> None:
        self.beginResetModel()
        self._rows = list(rows or [])
        self.endResetModel()

    def low_stock_count(self) -> int:
        return sum(1 for it in self._rows if self._is_low(it))
