from __future__ import annotations

from typing import Optional, Sequence

from PySide6.QtCore import QDate
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDateEdit,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QVBoxLayout,
    QWidget,
)

from ...constants import QT_DATE_FMT
from ...records import InventoryItem
from ...utils.validators import non_empty
from ...widgets.date_range_bar import qdate_to_date


class LeadForm(QDialog):
    """New lead: client name is required, everything else optional."""

    def __init__(self, parent: QWidget | None = None, *, inventory: Sequence[InventoryItem] = ()):
        super().__init__(parent)
        self.setWindowTitle("New Lead")
        self.setModal(True)
        self.setMinimumWidth(400)
        self._payload: Optional[dict] = None

        self.edt_client = QLineEdit()
        self.edt_phone = QLineEdit()
        self.cmb_interest = QComboBox()
        self.cmb_interest.setEditable(True)
        self.cmb_interest.addItem("")
        for it in inventory:
            self.cmb_interest.addItem(it.product_name)

        self.chk_expected = QCheckBox("Expected on")
        self.date_expected = QDateEdit()
        self.date_expected.setDisplayFormat(QT_DATE_FMT)
        self.date_expected.setCalendarPopup(True)
        self.date_expected.setDate(QDate.currentDate().addDays(7))
        self.date_expected.setEnabled(False)
        self.chk_expected.toggled.connect(self.date_expected.setEnabled)

        self.txt_notes = QPlainTextEdit()
        self.txt_notes.setFixedHeight(70)

        self.lbl_error = QLabel("")
        self.lbl_error.setObjectName("errorLabel")
        self.lbl_error.setStyleSheet("color:#b00020;")
        self.lbl_error.setVisible(False)

        self.buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        self.buttons.accepted.connect(self.accept)
        self.buttons.rejected.connect(self.reject)

        layout = QVBoxLayout(self)
        form = QFormLayout()
        form.addRow("Client*", self.edt_client)
        form.addRow("Phone", self.edt_phone)
        form.addRow("Product interest", self.cmb_interest)
        row = QHBoxLayout()
        row.addWidget(self.chk_expected)
        row.addWidget(self.date_expected, 1)
        form.addRow("Purchase date", row)
        form.addRow("Notes", self.txt_notes)
        layout.addLayout(form)
        layout.addWidget(self.lbl_error)
        layout.addWidget(self.buttons)

    def _fail(self, message: str, widget_to_focus: QWidget) -> None:
        self.lbl_error.setText(message)
        self.lbl_error.setVisible(True)
        widget_to_focus.setFocus()

    def get_payload(self) -> dict | None:
        self.lbl_error.setVisible(False)
        if not non_empty(self.edt_client.text()):
            self._fail("Client name is required.", self.edt_client)
            return None
        return {
            "client_name": self.edt_client.text().strip(),
            "phone": self.edt_phone.text(),
            "product_interest": self.cmb_interest.currentText(),
            "expected_date": qdate_to_date(self.date_expected.date()) if self.chk_expected.isChecked() else None,
            "notes": self.txt_notes.toPlainText(),
        }

    def accept(self) -> None:  # type: ignore[override]
        p = self.get_payload()
        if p is None:
            return
        self._payload = p
        super().accept()

    def payload(self) -> dict | None:
        return self._payload
