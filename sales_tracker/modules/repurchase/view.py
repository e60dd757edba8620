from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from ...widgets.table_view import TableView


class RepurchaseView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        root = QVBoxLayout(self)

        bar = QHBoxLayout()
        self.lbl_hint = QLabel("")
        bar.addWidget(self.lbl_hint)
        bar.addStretch(1)
        self.btn_new_sale = QPushButton("New Sale…")
        bar.addWidget(self.btn_new_sale)
        root.addLayout(bar)

        self.table = TableView()
        root.addWidget(self.table, 1)
