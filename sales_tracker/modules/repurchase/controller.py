from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QWidget

from ..base_module import BaseModule
from .model import RepurchaseTableModel
from .view import RepurchaseView
from ...constants import REPURCHASE_THRESHOLD_DAYS
from ...database.gateway import PersistenceGateway
from ...errors import DomainError
from ...services.aggregation import repurchase_candidates
from ...services.leads import SalePrefill
from ...utils import ui_helpers as ui

_log = logging.getLogger(__name__)


class RepurchaseController(BaseModule):
    """Clients whose latest purchase is at least `threshold_days` old."""
    sale_requested = Signal(object, str)

    def __init__(
        self,
        gateway: PersistenceGateway,
        threshold_days: int = REPURCHASE_THRESHOLD_DAYS,
        today: Callable[[], date] = date.today,
    ):
        super().__init__()
        self.gateway = gateway
        self.threshold_days = threshold_days
        self._today = today
        self.view = RepurchaseView()
        self.view.lbl_hint.setText(f"Clients with no purchase in the last {threshold_days} days")
        self.model = RepurchaseTableModel()
        self.view.table.setModel(self.model)
        self.view.btn_new_sale.clicked.connect(self._on_new_sale)
        self.reload()

    def get_widget(self) -> QWidget:
        return self.view

    def reload(self) -> None:
        try:
            sales = self.gateway.list_sales()
        except DomainError as e:
            _log.warning("Failed to load sales: %s", e)
            ui.error(self.view, "Storage error", f"Failed to load sales.\n\n{e}")
            return
        self.model.replace(repurchase_candidates(sales, self._today(), self.threshold_days))

    def selected_prefill(self) -> Optional[SalePrefill]:
        row = self.view.table.selected_row()
        if row < 0:
            return None
        last = self.model.at(row).sale
        return SalePrefill(client_name=last.client_name, product_name=last.product_name, amount=last.amount)

    def _on_new_sale(self) -> None:
        prefill = self.selected_prefill()
        if prefill is None:
            ui.info(self.view, "Select", "Please select a client.")
            return
        self.sale_requested.emit(prefill, "")
