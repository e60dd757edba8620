from PySide6.QtWidgets import QHBoxLayout, QLabel, QLineEdit, QPushButton, QVBoxLayout, QWidget

from ...widgets.date_range_bar import DateRangeBar
from ...widgets.table_view import TableView


class SalesView(QWidget):
    """
    Sales history:
      - Toolbar: New Sale, Delete, Export CSV, Print Report
      - Date range + client search
      - Table + totals line
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        root = QVBoxLayout(self)

        bar = QHBoxLayout()
        self.btn_new = QPushButton("New Sale")
        self.btn_delete = QPushButton("Delete")
        self.btn_export = QPushButton("Export CSV…")
        self.btn_report = QPushButton("Print Report…")
        for b in (self.btn_new, self.btn_delete, self.btn_export, self.btn_report):
            bar.addWidget(b)
        bar.addStretch(1)
        root.addLayout(bar)

        filters = QHBoxLayout()
        self.date_range = DateRangeBar()
        filters.addWidget(self.date_range)
        filters.addStretch(1)
        filters.addWidget(QLabel("Search:"))
        self.search = QLineEdit()
        self.search.setPlaceholderText("Client name…")
        self.search.setClearButtonEnabled(True)
        filters.addWidget(self.search, 1)
        root.addLayout(filters)

        self.table = TableView()
        root.addWidget(self.table, 1)

        self.lbl_totals = QLabel("")
        root.addWidget(self.lbl_totals)
