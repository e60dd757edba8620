from __future__ import annotations

from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from ...widgets.table_view import TableView


class InventoryView(QWidget):
    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        root = QVBoxLayout(self)
        root.setContentsMargins(8, 8, 8, 8)
        root.setSpacing(8)

        row = QHBoxLayout()
        self.btn_register = QPushButton("Register Product", objectName="btn_register")
        self.btn_adjust = QPushButton("Adjust Stock…", objectName="btn_adjust")
        self.btn_delete = QPushButton("Delete", objectName="btn_delete")
        row.addWidget(self.btn_register)
        row.addWidget(self.btn_adjust)
        row.addWidget(self.btn_delete)
        row.addStretch(1)
        self.lbl_low_stock = QLabel("", objectName="lbl_low_stock")
        self.lbl_low_stock.setStyleSheet("color:#b00020; font-weight:bold;")
        row.addWidget(self.lbl_low_stock)
        root.addLayout(row)

        self.table = TableView()
        self.table.setObjectName("tbl_inventory")
        root.addWidget(self.table, 1)

    def set_low_stock_count(self, n: int) -> None:
        self.lbl_low_stock.setText(f"{n} product(s) low on stock" if n else "")
