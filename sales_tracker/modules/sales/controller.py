"""
Controller for the sales module.

Wires the gateway <-> SalesTableModel <-> SalesView and connects New Sale,
Delete, Export CSV and Print Report. Other modules open the sale form
through new_sale(prefill, lead_id) (lead conversion, repurchase).
"""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from PySide6.QtWidgets import QDialog, QWidget

from ..base_module import BaseModule
from .form import SaleForm
from .model import SalesTableModel
from .view import SalesView
from ...database.gateway import PersistenceGateway
from ...errors import DomainError, NotFoundError, StorageError, ValidationError
from ...records import InventoryItem, Sale
from ...services.aggregation import filter_by_date_range, search_sales, summarize
from ...services.leads import SalePrefill
from ...services.report_export import (
    export_file_name,
    render_sales_report_html,
    write_sales_csv,
)
from ...services.sale_recording import RecordingResult, SaleRecorder
from ...utils import ui_helpers as ui
from ...utils.helpers import fmt_money
from ...widgets.report_preview import ReportPreview

_log = logging.getLogger(__name__)

_STEP_LABELS = {
    "stock_decrement": "update the product stock",
    "lead_removed": "remove the converted lead",
}


class SalesController(BaseModule):
    def __init__(self, gateway: PersistenceGateway):
        super().__init__()
        self.gateway = gateway
        self.recorder = SaleRecorder(gateway)
        self._sales: List[Sale] = []
        self._inventory: List[InventoryItem] = []

        self.view = SalesView()
        self.model = SalesTableModel()
        self.view.table.setModel(self.model)
        self._wire()
        self.reload()

    # ------------------------------------------------------------------ #
    # BaseModule API
    # ------------------------------------------------------------------ #
    def get_widget(self) -> QWidget:
        return self.view

    def reload(self) -> None:
        """Fetch from the gateway; on failure keep what is on screen."""
        try:
            sales = self.gateway.list_sales()
            inventory = self.gateway.list_inventory()
        except DomainError as e:
            self._handle_error("Failed to load sales", e)
            return
        self._sales = sales
        self._inventory = inventory
        self._apply_filters()

    # ------------------------------------------------------------------ #
    # Wiring
    # ------------------------------------------------------------------ #
    def _wire(self) -> None:
        self.view.btn_new.clicked.connect(lambda: self.new_sale())
        self.view.btn_delete.clicked.connect(self._on_delete)
        self.view.btn_export.clicked.connect(self._on_export_csv)
        self.view.btn_report.clicked.connect(self._on_report)
        self.view.date_range.changed.connect(self._apply_filters)
        self.view.search.textChanged.connect(lambda _=None: self._apply_filters())

    def visible_sales(self) -> List[Sale]:
        """Sales after the date range and client search, as shown."""
        start, end = self.view.date_range.range()
        rows = filter_by_date_range(self._sales, start, end)
        return search_sales(rows, self.view.search.text())

    def _apply_filters(self) -> None:
        rows = self.visible_sales()
        self.model.replace(rows)
        summ = summarize(rows)
        self.view.lbl_totals.setText(
            f"{summ.sales_count} sales · total {fmt_money(summ.total_sales)}"
            f" · net profit {fmt_money(summ.total_net_profit)}"
        )

    def _selected_sale(self) -> Optional[Sale]:
        row = self.view.table.selected_row()
        return self.model.at(row) if row >= 0 else None

    # ------------------------------------------------------------------ #
    # Error mapping helpers
    # ------------------------------------------------------------------ #
    def _handle_error(self, context: str, err: Exception) -> None:
        title, msg = self._map_error(context, err)
        _log.warning("%s: %s", context, err)
        ui.error(self.view, title, msg)

    @staticmethod
    def _map_error(context: str, err: Exception) -> tuple[str, str]:
        if isinstance(err, ValidationError):
            return "Invalid data", str(err)
        if isinstance(err, NotFoundError):
            return "Not found", f"{err}\nThe list will be refreshed."
        if isinstance(err, StorageError):
            return "Storage error", f"{context}.\n\n{err}"
        return "Error", f"{context}: {err}"

    # ------------------------------------------------------------------ #
    # Actions
    # ------------------------------------------------------------------ #
    def new_sale(self, prefill: Optional[SalePrefill] = None, lead_id: Optional[str] = None) -> Optional[Sale]:
        """
        Open the sale form and record the sale. When lead_id is given the
        lead is removed once the sale is saved. Returns the saved sale.
        """
        if not self._inventory:
            ui.info(self.view, "New Sale", "Register a product in the inventory first.")
            return None

        form = SaleForm(self.view, inventory=self._inventory, prefill=prefill)
        if form.exec() != QDialog.Accepted:
            return None
        draft = form.payload()
        if draft is None:
            return None

        try:
            result = self.recorder.record(draft, self._inventory, lead_id=lead_id)
        except DomainError as e:
            self._handle_error("Failed to save the sale", e)
            return None

        while not result.complete and self._ask_retry(result):
            result = self.recorder.complete(result.sale, lead_id)

        self.data_changed.emit()
        if result.complete:
            ui.info(self.view, "Saved", "Sale recorded.")
        return result.sale

    def _ask_retry(self, result: RecordingResult) -> bool:
        steps = ", ".join(_STEP_LABELS.get(s, s) for s in result.pending_steps)
        errors = "\n".join(result.errors)
        return ui.ask_retry(
            self.view,
            "Sale saved with problems",
            f"The sale was saved, but the app could not {steps}.\n\n{errors}\n\nTry again now?",
        )

    def _on_delete(self) -> None:
        sale = self._selected_sale()
        if sale is None:
            ui.info(self.view, "Select", "Please select a sale to delete.")
            return
        if not ui.confirm(
            self.view, "Delete",
            f"Delete the sale to {sale.client_name} ({sale.product_name}, {sale.date.isoformat()})?",
        ):
            return
        try:
            self.gateway.delete_sale(sale.id)
        except NotFoundError as e:
            self._handle_error("Failed to delete sale", e)
            self.data_changed.emit()
            return
        except DomainError as e:
            self._handle_error("Failed to delete sale", e)
            return
        self.data_changed.emit()

    def _on_export_csv(self) -> None:
        rows = self.visible_sales()
        if not rows:
            ui.info(self.view, "Export CSV", "There are no sales to export.")
            return
        path = ui.save_path(
            self.view, "Export to CSV", export_file_name(date.today()), "CSV Files (*.csv)"
        )
        if not path:
            return
        try:
            n = write_sales_csv(rows, path)
        except DomainError as e:
            self._handle_error("Failed to export CSV", e)
            return
        ui.info(self.view, "Export CSV", f"Exported {n} sales to:\n{path}")

    def _on_report(self) -> None:
        rows = self.visible_sales()
        start, end = self.view.date_range.range()
        html = render_sales_report_html(rows, summarize(rows), start, end)
        ReportPreview(html, self.view).exec()
