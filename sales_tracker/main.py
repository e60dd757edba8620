from __future__ import annotations

import logging
import sys
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QSizePolicy,
    QStackedWidget,
    QWidget,
)

from .config import AppConfig, load_config
from .constants import APP_NAME
from .database import open_gateway
from .database.gateway import PersistenceGateway
from .errors import DomainError
from .modules.base_module import BaseModule
from .modules.dashboard import DashboardController
from .modules.inventory import InventoryController
from .modules.leads import LeadsController
from .modules.repurchase import RepurchaseController
from .modules.sales import SalesController
from .utils.loggers import get_logger

_log = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, gateway: PersistenceGateway, config: Optional[AppConfig] = None):
        super().__init__()
        self.config = config or AppConfig()
        self.gateway = gateway
        self.setWindowTitle(APP_NAME)
        self.setWindowFlag(Qt.WindowMinimizeButtonHint, True)
        self.setWindowFlag(Qt.WindowMaximizeButtonHint, True)
        self.setMinimumSize(900, 560)

        # ---- Central layout: left nav + stacked pages ----
        central = QWidget(self)
        row = QHBoxLayout(central)
        self.setCentralWidget(central)

        self.nav = QListWidget()
        self.nav.setFixedWidth(120)
        self.nav.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Expanding)
        self.stack = QStackedWidget()
        row.addWidget(self.nav)
        row.addWidget(self.stack, 1)

        self.modules: list[tuple[str, BaseModule]] = []
        self.nav.currentRowChanged.connect(self.stack.setCurrentIndex)

        cfg = self.config
        self.dashboard = DashboardController(gateway, low_stock_threshold=cfg.low_stock_threshold)
        self.sales = SalesController(gateway)
        self.inventory = InventoryController(gateway, low_stock_threshold=cfg.low_stock_threshold)
        self.leads = LeadsController(gateway)
        self.repurchase = RepurchaseController(gateway, threshold_days=cfg.repurchase_threshold_days)

        self.add_module("Dashboard", self.dashboard)
        self.add_module("Sales", self.sales)
        self.add_module("Inventory", self.inventory)
        self.add_module("Leads", self.leads)
        self.add_module("Repurchase", self.repurchase)

        self.leads.sale_requested.connect(self._open_sale)
        self.repurchase.sale_requested.connect(self._open_sale)
        self.dashboard.view.low_stock_view_requested.connect(lambda: self.show_module("Inventory"))

        if self.nav.count():
            self.nav.setCurrentRow(0)

    def add_module(self, title: str, module: BaseModule) -> None:
        self.nav.addItem(QListWidgetItem(title))
        self.stack.addWidget(module.get_widget())
        self.modules.append((title, module))
        module.data_changed.connect(self.reload_all)

    def show_module(self, title: str) -> None:
        for i, (t, _m) in enumerate(self.modules):
            if t == title:
                self.nav.setCurrentRow(i)
                return

    def reload_all(self) -> None:
        """Every write ends here: re-read the gateway into all pages."""
        for _title, mod in self.modules:
            mod.reload()

    def _open_sale(self, prefill, lead_id: str) -> None:
        self.show_module("Sales")
        self.sales.new_sale(prefill=prefill, lead_id=lead_id or None)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self.gateway.close()
        super().closeEvent(event)


def main():
    try:
        config = load_config()
    except DomainError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(2)

    logger = get_logger(level=config.log_level)
    logger.info("Starting %s (backend=%s, data=%s)", APP_NAME, config.backend, config.data_dir)

    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)

    gateway = open_gateway(config)
    win = MainWindow(gateway, config)
    win.resize(1100, 700)
    win.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
