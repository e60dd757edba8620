from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtWidgets import QDialog, QInputDialog, QWidget

from ..base_module import BaseModule
from .form import InventoryForm
from .model import InventoryTableModel
from .view import InventoryView
from ...constants import LOW_STOCK_THRESHOLD
from ...database.gateway import PersistenceGateway
from ...errors import DomainError, NotFoundError, ValidationError
from ...records import InventoryItem
from ...services.inventory_valuation import InventoryService
from ...utils import ui_helpers as ui

_log = logging.getLogger(__name__)


class InventoryController(BaseModule):
    """
    Product list with registration, manual stock adjustment and delete.
    Deleting a product never touches the sales that reference it.
    """

    def __init__(self, gateway: PersistenceGateway, low_stock_threshold: int = LOW_STOCK_THRESHOLD):
        super().__init__()
        self.gateway = gateway
        self.service = InventoryService(gateway)
        self.view = InventoryView()
        self.model = InventoryTableModel(low_stock_threshold=low_stock_threshold)
        self.view.table.setModel(self.model)

        self.view.btn_register.clicked.connect(self._on_register)
        self.view.btn_adjust.clicked.connect(self._on_adjust)
        self.view.btn_delete.clicked.connect(self._on_delete)
        self.reload()

    def get_widget(self) -> QWidget:
        return self.view

    def reload(self) -> None:
        try:
            items = self.gateway.list_inventory()
        except DomainError as e:
            self._handle_error("Failed to load inventory", e)
            return
        self._show(items)

    def _show(self, items) -> None:
        self.model.replace(items)
        self.view.set_low_stock_count(self.model.low_stock_count())

    def _selected(self) -> Optional[InventoryItem]:
        row = self.view.table.selected_row()
        return self.model.at(row) if row >= 0 else None

    def _handle_error(self, context: str, err: Exception) -> None:
        title, msg = self._map_error(context, err)
        _log.warning("%s: %s", context, err)
        ui.error(self.view, title, msg)

    @staticmethod
    def _map_error(context: str, err: Exception) -> tuple[str, str]:
        if isinstance(err, ValidationError):
            return "Invalid data", str(err)
        if isinstance(err, NotFoundError):
            return "Not found", str(err)
        if isinstance(err, DomainError):
            return "Storage error", f"{context}.\n\n{err}"
        return "Error", f"{context}: {err}"

    # ------------------------------------------------------------------ #
    def _on_register(self) -> None:
        form = InventoryForm(self.view, inventory=self.model_items())
        if form.exec() != QDialog.Accepted:
            return
        p = form.payload()
        if not p:
            return
        try:
            items = self.service.register(**p)
        except DomainError as e:
            self._handle_error("Failed to register product", e)
            return
        self._show(items)
        self.data_changed.emit()

    def _on_adjust(self) -> None:
        item = self._selected()
        if item is None:
            ui.info(self.view, "Select", "Please select a product to adjust.")
            return
        delta, ok = QInputDialog.getInt(
            self.view, "Adjust Stock",
            f"Change in quantity for {item.product_name} (e.g. 5 or -2):",
            0, -10**6, 10**6,
        )
        if not ok or delta == 0:
            return
        try:
            self.service.adjust(item.product_name, delta)
        except DomainError as e:
            self._handle_error("Failed to adjust stock", e)
            return
        self.data_changed.emit()

    def _on_delete(self) -> None:
        item = self._selected()
        if item is None:
            ui.info(self.view, "Select", "Please select a product to delete.")
            return
        if not ui.confirm(self.view, "Delete", f"Delete {item.product_name} from the inventory?"):
            return
        try:
            items = self.service.delete(item.id)
        except DomainError as e:
            self._handle_error("Failed to delete product", e)
            self.reload()
            return
        self._show(items)
        self.data_changed.emit()

    def model_items(self):
        return [self.model.at(r) for r in range(self.model.rowCount())]
