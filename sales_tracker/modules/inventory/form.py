"""
Dialog for registering (or re-registering) a product.

Unit cost is shown live as total purchase value / quantity. Registering a
name that already exists replaces its quantity, cost and sell price.
"""

from __future__ import annotations

from typing import Optional, Sequence

from PySide6.QtCore import Qt
from PySide6.QtGui import QDoubleValidator
from PySide6.QtWidgets import (
    QCompleter,
    QDialog,
    QDialogButtonBox,
    QDoubleSpinBox,
    QFormLayout,
    QLabel,
    QLineEdit,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from ...errors import ValidationError
from ...records import InventoryItem
from ...services.inventory_valuation import find_item, register_product
from ...utils.helpers import fmt_money
from ...utils.validators import non_empty


class InventoryForm(QDialog):
    def __init__(self, parent: QWidget | None = None, *, inventory: Sequence[InventoryItem] = ()):
        super().__init__(parent)
        self.setWindowTitle("Register Product")
        self.setModal(True)
        self.setMinimumWidth(400)
        self._inventory = list(inventory)
        self._payload: Optional[dict] = None

        self.edt_name = QLineEdit()
        self.edt_name.setPlaceholderText("Product name")
        self.edt_name.setCompleter(QCompleter([i.product_name for i in self._inventory], self))

        self.spin_qty = QSpinBox()
        self.spin_qty.setRange(0, 10**6)
        self.spin_qty.setValue(1)

        self.spin_total = QDoubleSpinBox()
        self.spin_total.setRange(0.0, 10**9)
        self.spin_total.setDecimals(2)
        self.spin_total.setButtonSymbols(QDoubleSpinBox.ButtonSymbols.NoButtons)
        self.spin_total.setAlignment(Qt.AlignRight)

        self.edt_sell = QLineEdit()
        self.edt_sell.setPlaceholderText("optional")
        dv = QDoubleValidator(0.0, 10**9, 2, self)
        dv.setNotation(QDoubleValidator.StandardNotation)
        self.edt_sell.setValidator(dv)

        self.lbl_unit_cost = QLabel("")
        self.lbl_existing = QLabel("")
        self.lbl_existing.setStyleSheet("color:#8a6d00;")

        self.lbl_error = QLabel("")
        self.lbl_error.setObjectName("errorLabel")
        self.lbl_error.setStyleSheet("color:#b00020;")
        self.lbl_error.setVisible(False)

        self.buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        self.buttons.accepted.connect(self.accept)
        self.buttons.rejected.connect(self.reject)

        layout = QVBoxLayout(self)
        form = QFormLayout()
        form.addRow("Product*", self.edt_name)
        form.addRow("Quantity*", self.spin_qty)
        form.addRow("Total purchase value*", self.spin_total)
        form.addRow("Default sell price", self.edt_sell)
        form.addRow("Unit cost", self.lbl_unit_cost)
        layout.addLayout(form)
        layout.addWidget(self.lbl_existing)
        layout.addWidget(self.lbl_error)
        layout.addWidget(self.buttons)

        self.edt_name.textChanged.connect(self._on_name_changed)
        self.spin_qty.valueChanged.connect(lambda *_: self._refresh_unit_cost())
        self.spin_total.valueChanged.connect(lambda *_: self._refresh_unit_cost())
        self._refresh_unit_cost()

    def _on_name_changed(self, text: str) -> None:
        if find_item(self._inventory, (text or "").strip()):
            self.lbl_existing.setText("Already registered: quantity and cost will be replaced.")
        else:
            self.lbl_existing.setText("")

    def _refresh_unit_cost(self) -> None:
        qty = self.spin_qty.value()
        if qty > 0:
            self.lbl_unit_cost.setText(fmt_money(self.spin_total.value() / qty))
        else:
            self.lbl_unit_cost.setText("—")

    def _fail(self, message: str, widget_to_focus: QWidget) -> None:
        self.lbl_error.setText(message)
        self.lbl_error.setVisible(True)
        widget_to_focus.setFocus()

    def get_payload(self) -> dict | None:
        self.lbl_error.setVisible(False)

        if not non_empty(self.edt_name.text()):
            self._fail("Product name is required.", self.edt_name)
            return None
        if self.spin_qty.value() <= 0:
            self._fail("Quantity must be greater than zero.", self.spin_qty)
            return None

        sell_txt = (self.edt_sell.text() or "").strip().replace(",", ".")
        payload = {
            "product_name": self.edt_name.text().strip(),
            "quantity": self.spin_qty.value(),
            "total_purchase_value": self.spin_total.value(),
            "default_sell_price": sell_txt or None,
        }
        try:
            register_product(**payload)
        except ValidationError as e:
            self._fail(str(e), self.edt_sell)
            return None
        return payload

    def accept(self) -> None:  # type: ignore[override]
        p = self.get_payload()
        if p is None:
            return
        self._payload = p
        super().accept()

    def payload(self) -> dict | None:
        return self._payload
