"""Module wiring through MainWindow on a throwaway JSON store."""
import pytest
from PySide6.QtWidgets import QDialog

from sales_tracker.config import AppConfig
from sales_tracker.errors import StorageError
from sales_tracker.main import MainWindow
from sales_tracker.modules.repurchase import RepurchaseController
from sales_tracker.modules.sales import controller as sales_controller
from sales_tracker.modules.sales.form import SaleForm
from sales_tracker.services.leads import SalePrefill, build_lead
from sales_tracker.utils import ui_helpers
from tests.factories import TODAY, at, days_ago, make_item, make_sale


class _AutoAcceptSaleForm(SaleForm):
    """Accepts whatever the prefill produced instead of blocking on exec()."""

    def exec(self):
        self.accept()
        return QDialog.Accepted if self.payload() is not None else QDialog.Rejected


@pytest.fixture
def messages(monkeypatch):
    seen = []
    monkeypatch.setattr(ui_helpers, "info", lambda parent, title, text: seen.append(("info", title)))
    monkeypatch.setattr(ui_helpers, "error", lambda parent, title, text: seen.append(("error", title)))
    monkeypatch.setattr(ui_helpers, "confirm", lambda parent, title, text: True)
    return seen


@pytest.fixture
def window(qtbot, json_gateway, messages):
    json_gateway.upsert_inventory_item(
        make_item(product_name="Perfume", quantity=10, cost_price=50.0, default_sell_price=200.0)
    )
    win = MainWindow(json_gateway, AppConfig())
    qtbot.addWidget(win)
    return win


def test_pages_in_order(window):
    titles = [window.nav.item(i).text() for i in range(window.nav.count())]
    assert titles == ["Dashboard", "Sales", "Inventory", "Leads", "Repurchase"]
    window.show_module("Leads")
    assert window.stack.currentWidget() is window.leads.get_widget()


def test_converting_a_lead_records_sale_everywhere(window, json_gateway, messages, monkeypatch):
    monkeypatch.setattr(sales_controller, "SaleForm", _AutoAcceptSaleForm)
    json_gateway.create_lead(build_lead("Ana", product_interest="Perfume", now=at(9)))
    window.leads.reload()

    window.leads.view.table.selectRow(0)
    window.leads.view.btn_sell.click()

    assert ("info", "Saved") in messages
    sales = json_gateway.list_sales()
    assert len(sales) == 1
    assert sales[0].client_name == "Ana"
    assert sales[0].amount == pytest.approx(200.0)
    assert json_gateway.list_leads() == []
    assert json_gateway.list_inventory()[0].quantity == 9

    assert window.sales.model.rowCount() == 1
    assert window.leads.model.rowCount() == 0
    assert window.dashboard.view.kpi_text("sales_count") == "1"
    assert window.stack.currentWidget() is window.sales.get_widget()


def test_new_sale_without_inventory_is_refused(qtbot, json_gateway, messages):
    win = MainWindow(json_gateway, AppConfig())
    qtbot.addWidget(win)
    assert win.sales.new_sale() is None
    assert messages == [("info", "New Sale")]


def test_sales_search_and_dashboard_totals(window, json_gateway):
    json_gateway.create_sale(make_sale(client_name="Ana", amount=200))
    json_gateway.create_sale(make_sale(client_name="Bia", amount=100))
    window.reload_all()

    assert window.dashboard.view.kpi_text("total_sales") == "300.00"
    assert window.dashboard.view.kpi_text("average_ticket") == "150.00"

    window.sales.view.search.setText("bi")
    assert [s.client_name for s in window.sales.visible_sales()] == ["Bia"]
    assert window.sales.model.rowCount() == 1


def test_deleting_a_sale(window, json_gateway):
    json_gateway.create_sale(make_sale(client_name="Ana"))
    window.reload_all()
    window.sales.view.table.selectRow(0)
    window.sales.view.btn_delete.click()
    assert json_gateway.list_sales() == []
    assert window.sales.model.rowCount() == 0


def test_inventory_low_stock_flag(window, json_gateway):
    json_gateway.upsert_inventory_item(make_item(product_name="Soap", quantity=1))
    window.reload_all()
    assert window.inventory.model.low_stock_count() == 1
    assert window.inventory.view.lbl_low_stock.text() == "1 product(s) low on stock"
    assert window.dashboard.view.kpi_text("low_stock") == "1"


def test_repurchase_list_and_prefill(qtbot, json_gateway, messages):
    json_gateway.create_sale(make_sale(client_name="Ana", date=days_ago(40), amount=80))
    json_gateway.create_sale(make_sale(client_name="Bia", date=days_ago(3)))
    ctrl = RepurchaseController(json_gateway, threshold_days=28, today=lambda: TODAY)
    qtbot.addWidget(ctrl.get_widget())

    assert ctrl.model.rowCount() == 1
    assert ctrl.selected_prefill() is None

    ctrl.view.table.selectRow(0)
    with qtbot.waitSignal(ctrl.sale_requested) as blocker:
        ctrl.view.btn_new_sale.click()
    prefill, lead_id = blocker.args
    assert prefill.client_name == "Ana"
    assert prefill.amount == pytest.approx(80.0)
    assert lead_id == ""


def test_pending_stock_step_can_be_retried(window, json_gateway, messages, monkeypatch):
    monkeypatch.setattr(sales_controller, "SaleForm", _AutoAcceptSaleForm)
    real_apply = json_gateway.apply_stock_effect
    calls = []

    def flaky_apply(sale_id, product_name, delta):
        calls.append(delta)
        if len(calls) == 1:
            raise StorageError("disk full")
        return real_apply(sale_id, product_name, delta)

    monkeypatch.setattr(json_gateway, "apply_stock_effect", flaky_apply)
    asked = []
    monkeypatch.setattr(ui_helpers, "ask_retry", lambda parent, title, text: asked.append(text) or True)

    sale = window.sales.new_sale(SalePrefill("Ana", "Perfume", 150.0))

    assert sale is not None
    assert len(asked) == 1 and "disk full" in asked[0]
    assert json_gateway.list_inventory()[0].quantity == 9
    assert len(json_gateway.list_sales()) == 1
    assert ("info", "Saved") in messages


def test_export_csv_writes_visible_rows(window, json_gateway, messages, monkeypatch, tmp_path):
    json_gateway.create_sale(make_sale(client_name="Ana"))
    json_gateway.create_sale(make_sale(client_name="Bia"))
    window.reload_all()
    window.sales.view.search.setText("ana")

    target = tmp_path / "export.csv"
    monkeypatch.setattr(ui_helpers, "save_path", lambda *a: str(target))
    window.sales.view.btn_export.click()

    lines = target.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert lines[1].startswith("Ana,")
    assert ("info", "Export CSV") in messages
