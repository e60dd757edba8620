from __future__ import annotations

from typing import Dict, Sequence

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QFont, QStandardItem, QStandardItemModel
from PySide6.QtWidgets import (
    QFrame, QGridLayout, QHBoxLayout, QLabel, QSizePolicy, QVBoxLayout, QWidget,
)

from ...records import ProductTotal, SalesSummary
from ...utils.helpers import fmt_money
from ...widgets.bar_chart import RevenueChart
from ...widgets.date_range_bar import DateRangeBar
from ...widgets.table_view import TableView


class DashboardView(QWidget):
    """
    Pure-UI dashboard surface. Controller drives it by calling the setters.

    Signals:
        low_stock_view_requested()

    Public setters the controller will use:
        set_summary(summary)
        set_product_totals(rows)
        set_low_stock_count(n)
    """
    low_stock_view_requested = Signal()

    KPIS = (
        ("total_sales", "Total Sales", "gross, period"),
        ("net_profit", "Net Profit", "after all deductions"),
        ("commission", "Commission", "referral channel"),
        ("freight", "Freight", "shipping paid"),
        ("sales_count", "Sales", "transactions"),
        ("average_ticket", "Average Ticket", "total / sales"),
        ("low_stock", "Low Stock", "products below threshold"),
    )

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self._kpi_cards: Dict[str, KPICard] = {}
        self._build_ui()

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(8, 8, 8, 8)
        root.setSpacing(10)

        top = QHBoxLayout()
        title = QLabel("<h2>Dashboard</h2>")
        title.setTextFormat(Qt.RichText)
        top.addWidget(title)
        top.addStretch(1)
        self.date_range = DateRangeBar()
        top.addWidget(self.date_range)
        root.addLayout(top)

        gridwrap = QWidget()
        self.grid = QGridLayout(gridwrap)
        self.grid.setContentsMargins(0, 0, 0, 0)
        self.grid.setHorizontalSpacing(10)
        self.grid.setVerticalSpacing(10)
        for i, (key, label, caption) in enumerate(self.KPIS):
            card = KPICard(label, caption)
            self._kpi_cards[key] = card
            self.grid.addWidget(card, i // 4, i % 4)
        self._kpi_cards["low_stock"].clicked.connect(self.low_stock_view_requested)
        gridwrap.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)
        root.addWidget(gridwrap)

        body = QHBoxLayout()
        self.chart = RevenueChart()
        body.addWidget(self.chart, 3)

        self.tbl_products = TableView()
        self.model_products = QStandardItemModel(0, 2)
        self.model_products.setHorizontalHeaderLabels(["Product", "Revenue"])
        self.tbl_products.setModel(self.model_products)
        body.addWidget(self.tbl_products, 2)
        root.addLayout(body, 1)

    # ---------------- Public setters for controller ----------------
    def kpi_text(self, key: str) -> str:
        return self._kpi_cards[key].lbl_value.text()

    def set_summary(self, s: SalesSummary) -> None:
        self._kpi_cards["total_sales"].set_value(fmt_money(s.total_sales))
        self._kpi_cards["net_profit"].set_value(fmt_money(s.total_net_profit))
        self._kpi_cards["commission"].set_value(fmt_money(s.total_commission))
        self._kpi_cards["freight"].set_value(fmt_money(s.total_freight))
        self._kpi_cards["sales_count"].set_value(str(s.sales_count))
        self._kpi_cards["average_ticket"].set_value(fmt_money(s.average_ticket))

    def set_low_stock_count(self, n: int) -> None:
        self._kpi_cards["low_stock"].set_value(str(int(n)))

    def set_product_totals(self, rows: Sequence[ProductTotal]) -> None:
        self.model_products.removeRows(0, self.model_products.rowCount())
        for r in rows:
            val = QStandardItem(fmt_money(r.value))
            val.setTextAlignment(Qt.AlignRight | Qt.AlignVCenter)
            self.model_products.appendRow([QStandardItem(r.name), val])
        self.chart.set_totals(rows)


# ======================= Visual building blocks =======================

class KPICard(QFrame):
    clicked = Signal()

    def __init__(self, title: str, caption: str) -> None:
        super().__init__()
        self.setObjectName("kpi_card")
        self.setStyleSheet("""
            QFrame#kpi_card {
                border: 1px solid #e1e1e1;
                border-radius: 10px;
                background: #fff;
            }
        """)

        v = QVBoxLayout(self)
        v.setContentsMargins(12, 10, 12, 12)
        v.setSpacing(2)

        self.lbl_title = QLabel(title)
        f = self.lbl_title.font()
        f.setBold(True)
        self.lbl_title.setFont(f)

        self.lbl_value = QLabel("—")
        fv = QFont(self.lbl_value.font())
        fv.setPointSize(fv.pointSize() + 6)
        fv.setBold(True)
        self.lbl_value.setFont(fv)

        self.lbl_caption = QLabel(caption)
        self.lbl_caption.setStyleSheet("color:#777;")

        v.addWidget(self.lbl_title)
        v.addWidget(self.lbl_value)
        v.addWidget(self.lbl_caption)

    def mousePressEvent(self, e) -> None:  # type: ignore[override]
        if e.button() == Qt.LeftButton:
            self.clicked.emit()
        super().mousePressEvent(e)

    def set_value(self, s: str) -> None:
        self.lbl_value.setText(s)
