from PySide6.QtWidgets import QHBoxLayout, QPushButton, QVBoxLayout, QWidget

from ...widgets.table_view import TableView


class LeadsView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        root = QVBoxLayout(self)

        bar = QHBoxLayout()
        self.btn_new = QPushButton("New Lead")
        self.btn_contacted = QPushButton("Mark Contacted")
        self.btn_lost = QPushButton("Mark Lost")
        self.btn_sell = QPushButton("Sell…")
        self.btn_delete = QPushButton("Delete")
        for b in (self.btn_new, self.btn_contacted, self.btn_lost, self.btn_sell, self.btn_delete):
            bar.addWidget(b)
        bar.addStretch(1)
        root.addLayout(bar)

        self.table = TableView()
        root.addWidget(self.table, 1)
