from __future__ import annotations

import logging

from PySide6.QtWidgets import QWidget

from ..base_module import BaseModule
from .view import DashboardView
from ...constants import LOW_STOCK_THRESHOLD
from ...database.gateway import PersistenceGateway
from ...errors import DomainError
from ...services.aggregation import filter_by_date_range, revenue_by_product, summarize
from ...services.inventory_valuation import is_low_stock
from ...utils import ui_helpers as ui

_log = logging.getLogger(__name__)


class DashboardController(BaseModule):
    """
    KPIs and per-product revenue for the selected period. Everything is
    recomputed from the full sales list on reload or period change.
    """

    def __init__(self, gateway: PersistenceGateway, low_stock_threshold: int = LOW_STOCK_THRESHOLD):
        super().__init__()
        self.gateway = gateway
        self.low_stock_threshold = low_stock_threshold
        self._sales = []
        self._inventory = []
        self.view = DashboardView()
        self.view.date_range.changed.connect(self._refresh)
        self.reload()

    def get_widget(self) -> QWidget:
        return self.view

    def reload(self) -> None:
        try:
            sales = self.gateway.list_sales()
            inventory = self.gateway.list_inventory()
        except DomainError as e:
            _log.warning("Dashboard reload failed: %s", e)
            ui.error(self.view, "Storage error", f"Failed to load dashboard data.\n\n{e}")
            return
        self._sales = sales
        self._inventory = inventory
        self._refresh()

    def _refresh(self) -> None:
        start, end = self.view.date_range.range()
        period = filter_by_date_range(self._sales, start, end)
        self.view.set_summary(summarize(period))
        self.view.set_product_totals(revenue_by_product(period))
        self.view.set_low_stock_count(
            sum(1 for it in self._inventory if is_low_stock(it, self.low_stock_threshold))
        )
