import pytest
from PySide6.QtCore import QDate

from sales_tracker.modules.inventory.form import InventoryForm
from sales_tracker.modules.leads.form import LeadForm
from sales_tracker.modules.sales.form import SaleForm
from sales_tracker.services.leads import SalePrefill
from tests.factories import make_item


@pytest.fixture
def inventory():
    return [
        make_item(product_name="Perfume", quantity=10, cost_price=50.0, default_sell_price=200.0),
        make_item(product_name="Soap", quantity=2, cost_price=3.0, default_sell_price=None),
    ]


# ---------- SaleForm ----------

def test_sale_form_prefills_amount_from_product(qtbot, inventory):
    dlg = SaleForm(inventory=inventory)
    qtbot.addWidget(dlg)
    dlg.cmb_product.setCurrentIndex(dlg.cmb_product.findData("Perfume"))
    assert dlg.spin_amount.value() == pytest.approx(200.0)


def test_sale_form_live_net_profit_for_referral(qtbot, inventory):
    dlg = SaleForm(inventory=inventory)
    qtbot.addWidget(dlg)
    dlg.edt_client.setText("Ana")
    dlg.cmb_product.setCurrentIndex(dlg.cmb_product.findData("Perfume"))
    dlg.cmb_type.setCurrentText("Referral")
    dlg.spin_discount.setValue(10)
    dlg.spin_rate.setValue(10)
    dlg.spin_freight.setValue(15)

    assert dlg.preview_value() == pytest.approx(105.0)
    assert dlg.lbl_preview.text() == "105.00"
    assert dlg.spin_rate.isEnabled()
    assert not dlg.spin_ad_cost.isEnabled()


def test_sale_form_channel_toggles_fields(qtbot, inventory):
    dlg = SaleForm(inventory=inventory)
    qtbot.addWidget(dlg)
    dlg.cmb_type.setCurrentText("Paid Traffic")
    assert dlg.spin_ad_cost.isEnabled()
    assert not dlg.spin_rate.isEnabled()
    dlg.cmb_type.setCurrentText("Personal")
    assert not dlg.spin_ad_cost.isEnabled()
    assert not dlg.spin_rate.isEnabled()


def test_sale_form_requires_client(qtbot, inventory):
    dlg = SaleForm(inventory=inventory)
    qtbot.addWidget(dlg)
    dlg.cmb_product.setCurrentIndex(1)
    assert dlg.get_payload() is None
    assert not dlg.lbl_error.isHidden()
    assert "Client" in dlg.lbl_error.text()


def test_sale_form_requires_product(qtbot, inventory):
    dlg = SaleForm(inventory=inventory)
    qtbot.addWidget(dlg)
    dlg.edt_client.setText("Ana")
    assert dlg.get_payload() is None
    assert "product" in dlg.lbl_error.text()


def test_sale_form_prefill_and_payload(qtbot, inventory):
    dlg = SaleForm(inventory=inventory, prefill=SalePrefill("Bia", "Soap", 12.5))
    qtbot.addWidget(dlg)
    dlg.date_edit.setDate(QDate(2024, 6, 30))
    assert dlg.edt_client.text() == "Bia"
    assert dlg.cmb_product.currentData() == "Soap"
    assert dlg.spin_amount.value() == pytest.approx(12.5)

    dlg.accept()
    draft = dlg.payload()
    assert draft is not None
    assert draft.client_name == "Bia"
    assert draft.product_name == "Soap"
    assert draft.date.isoformat() == "2024-06-30"


# ---------- InventoryForm ----------

def test_inventory_form_unit_cost(qtbot):
    dlg = InventoryForm()
    qtbot.addWidget(dlg)
    dlg.edt_name.setText("Perfume")
    dlg.spin_qty.setValue(4)
    dlg.spin_total.setValue(100)
    assert dlg.lbl_unit_cost.text() == "25.00"

    p = dlg.get_payload()
    assert p == {"product_name": "Perfume", "quantity": 4, "total_purchase_value": 100.0,
                 "default_sell_price": None}


def test_inventory_form_rejects_zero_quantity(qtbot):
    dlg = InventoryForm()
    qtbot.addWidget(dlg)
    dlg.edt_name.setText("Perfume")
    dlg.spin_qty.setValue(0)
    assert dlg.get_payload() is None
    assert not dlg.lbl_error.isHidden()


def test_inventory_form_warns_on_existing_product(qtbot, inventory):
    dlg = InventoryForm(inventory=inventory)
    qtbot.addWidget(dlg)
    dlg.edt_name.setText("Perfume")
    assert "replaced" in dlg.lbl_existing.text()
    dlg.edt_name.setText("Candle")
    assert dlg.lbl_existing.text() == ""


# ---------- LeadForm ----------

def test_lead_form_payload(qtbot, inventory):
    dlg = LeadForm(inventory=inventory)
    qtbot.addWidget(dlg)
    dlg.edt_client.setText(" Ana ")
    dlg.cmb_interest.setCurrentText("Perfume")
    p = dlg.get_payload()
    assert p["client_name"] == "Ana"
    assert p["product_interest"] == "Perfume"
    assert p["expected_date"] is None

    dlg.chk_expected.setChecked(True)
    dlg.date_expected.setDate(QDate(2024, 7, 10))
    assert dlg.get_payload()["expected_date"].isoformat() == "2024-07-10"


def test_lead_form_requires_client(qtbot):
    dlg = LeadForm()
    qtbot.addWidget(dlg)
    assert dlg.get_payload() is None
    assert not dlg.lbl_error.isHidden()
