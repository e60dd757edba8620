"""
Dialog for recording a sale.

Collects: client, product (from inventory), gross amount, channel, discount,
freight, commission rate (Referral only), ad cost (Paid Traffic only), date.
Shows the net profit live while typing. On accept, `payload()` returns a
SaleDraft that has already passed build_sale() validation.
"""

from __future__ import annotations

from typing import Optional, Sequence

from PySide6.QtCore import QDate, Qt
from PySide6.QtWidgets import (
    QComboBox,
    QDateEdit,
    QDialog,
    QDialogButtonBox,
    QDoubleSpinBox,
    QFormLayout,
    QLabel,
    QLineEdit,
    QVBoxLayout,
    QWidget,
)

from ...constants import DEFAULT_COMMISSION_RATE, QT_DATE_FMT
from ...errors import ValidationError
from ...records import InventoryItem, SALE_TYPES
from ...services import channels
from ...services.inventory_valuation import find_item
from ...services.leads import SalePrefill
from ...services.sale_recording import SaleDraft, build_sale, preview_net_profit
from ...utils.helpers import fmt_money
from ...utils.validators import non_empty
from ...widgets.date_range_bar import qdate_to_date


def _money_spin(maximum: float = 10**9) -> QDoubleSpinBox:
    sp = QDoubleSpinBox()
    sp.setMinimum(0.0)
    sp.setMaximum(maximum)
    sp.setDecimals(2)
    sp.setButtonSymbols(QDoubleSpinBox.ButtonSymbols.NoButtons)
    sp.setAlignment(Qt.AlignRight)
    return sp


class SaleForm(QDialog):
    def __init__(
        self,
        parent: QWidget | None = None,
        *,
        inventory: Sequence[InventoryItem] = (),
        prefill: Optional[SalePrefill] = None,
    ):
        super().__init__(parent)
        self.setWindowTitle("New Sale")
        self.setModal(True)
        self.setMinimumWidth(440)
        self._inventory = list(inventory)
        self._payload: Optional[SaleDraft] = None

        # --- Widgets ------------------------------------------------------
        self.edt_client = QLineEdit()
        self.edt_client.setPlaceholderText("Client name")

        self.cmb_product = QComboBox()
        self.cmb_product.addItem("(select product)", userData=None)
        for item in self._inventory:
            self.cmb_product.addItem(
                f"{item.product_name}  (stock {item.quantity})", userData=item.product_name
            )

        self.spin_amount = _money_spin()

        self.cmb_type = QComboBox()
        for t in SALE_TYPES:
            self.cmb_type.addItem(t)
            self.cmb_type.setItemData(self.cmb_type.count() - 1, channels.DESCRIPTIONS.get(t, ""), Qt.ToolTipRole)

        self.spin_discount = _money_spin()
        self.spin_freight = _money_spin()
        self.spin_rate = _money_spin(100.0)
        self.spin_rate.setSuffix(" %")
        self.spin_rate.setValue(DEFAULT_COMMISSION_RATE)
        self.spin_ad_cost = _money_spin()

        self.date_edit = QDateEdit()
        self.date_edit.setDisplayFormat(QT_DATE_FMT)
        self.date_edit.setCalendarPopup(True)
        self.date_edit.setDate(QDate.currentDate())

        self.lbl_preview = QLabel("")
        self.lbl_preview.setObjectName("netPreview")

        self.lbl_error = QLabel("")
        self.lbl_error.setObjectName("errorLabel")
        self.lbl_error.setStyleSheet("color:#b00020;")
        self.lbl_error.setVisible(False)

        self.buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        self.buttons.accepted.connect(self.accept)
        self.buttons.rejected.connect(self.reject)

        # --- Layout -------------------------------------------------------
        layout = QVBoxLayout(self)
        form = QFormLayout()
        form.addRow("Client*", self.edt_client)
        form.addRow("Product*", self.cmb_product)
        form.addRow("Gross amount*", self.spin_amount)
        form.addRow("Channel*", self.cmb_type)
        form.addRow("Discount", self.spin_discount)
        form.addRow("Freight", self.spin_freight)
        form.addRow("Commission rate", self.spin_rate)
        form.addRow("Ad cost", self.spin_ad_cost)
        form.addRow("Date*", self.date_edit)
        form.addRow("Net profit", self.lbl_preview)
        layout.addLayout(form)
        layout.addWidget(self.lbl_error)
        layout.addWidget(self.buttons)

        # --- Live updates -------------------------------------------------
        self.cmb_product.currentIndexChanged.connect(self._on_product_changed)
        self.cmb_type.currentIndexChanged.connect(self._on_type_changed)
        for sp in (self.spin_amount, self.spin_discount, self.spin_freight,
                   self.spin_rate, self.spin_ad_cost):
            sp.valueChanged.connect(lambda *_: self._refresh_preview())

        if prefill:
            self._apply_prefill(prefill)
        self._on_type_changed()

    # ----------------------------------------------------------------------
    def _apply_prefill(self, p: SalePrefill) -> None:
        self.edt_client.setText(p.client_name or "")
        if p.product_name:
            idx = self.cmb_product.findData(p.product_name)
            if idx >= 0:
                self.cmb_product.setCurrentIndex(idx)
        if p.amount is not None:
            self.spin_amount.setValue(float(p.amount))

    def _on_product_changed(self, *_):
        item = find_item(self._inventory, self.cmb_product.currentData() or "")
        if item and item.default_sell_price is not None:
            self.spin_amount.setValue(float(item.default_sell_price))
        self._refresh_preview()

    def _on_type_changed(self, *_):
        rule = channels.rule_for(self.cmb_type.currentText())
        self.spin_rate.setEnabled(rule.commission_applicable)
        self.spin_ad_cost.setEnabled(rule.ad_cost_applicable)
        self._refresh_preview()

    def _draft(self) -> SaleDraft:
        return SaleDraft(
            client_name=self.edt_client.text(),
            product_name=self.cmb_product.currentData() or "",
            amount=self.spin_amount.value(),
            sale_type=self.cmb_type.currentText(),
            discount=self.spin_discount.value(),
            freight=self.spin_freight.value(),
            ad_cost=self.spin_ad_cost.value(),
            commission_rate=self.spin_rate.value(),
            date=qdate_to_date(self.date_edit.date()),
        )

    def _refresh_preview(self) -> None:
        net = preview_net_profit(self._draft(), self._inventory)
        self.lbl_preview.setText(fmt_money(net))
        self.lbl_preview.setStyleSheet("color:#b00020;" if net < 0 else "")

    def preview_value(self) -> float:
        return preview_net_profit(self._draft(), self._inventory)

    # ----------------------------------------------------------------------
    # Validation & payload
    # ----------------------------------------------------------------------
    def _fail(self, message: str, widget_to_focus: QWidget) -> None:
        self.lbl_error.setText(message)
        self.lbl_error.setVisible(True)
        widget_to_focus.setFocus()

    def get_payload(self) -> SaleDraft | None:
        self.lbl_error.setVisible(False)

        if not non_empty(self.edt_client.text()):
            self._fail("Client name is required.", self.edt_client)
            return None
        if self.cmb_product.currentData() is None:
            self._fail("Please select a product.", self.cmb_product)
            return None

        draft = self._draft()
        try:
            build_sale(draft, self._inventory)
        except ValidationError as e:
            self._fail(str(e), self.spin_amount)
            return None
        return draft

    def accept(self) -> None:  # type: ignore[override]
        p = self.get_payload()
        if p is None:
            return
        self._payload = p
        super().accept()

    def payload(self) -> SaleDraft | None:
        return self._payload
