from __future__ import annotations

from typing import Sequence

from PySide6.QtCharts import QBarCategoryAxis, QBarSeries, QBarSet, QChart, QChartView, QValueAxis
from PySide6.QtCore import Qt
from PySide6.QtGui import QPainter

from ..records import ProductTotal


class RevenueChart(QChartView):
    """Bar chart of gross revenue per product (largest first)."""

    MAX_BARS = 10

    def __init__(self, parent=None):
        self._chart = QChart()
        self._chart.setTitle("Revenue by Product")
        self._chart.legend().setVisible(False)
        self._chart.setAnimationOptions(QChart.NoAnimation)
        super().__init__(self._chart, parent)
        self.setRenderHint(QPainter.Antialiasing)
        self.setMinimumHeight(220)

    def set_totals(self, totals: Sequence[ProductTotal]) -> None:
        self._chart.removeAllSeries()
        for ax in list(self._chart.axes()):
            self._chart.removeAxis(ax)

        rows = list(totals)[: self.MAX_BARS]
        bar_set = QBarSet("Revenue")
        for r in rows:
            bar_set.append(float(r.value))
        series = QBarSeries()
        series.append(bar_set)
        self._chart.addSeries(series)

        ax_x = QBarCategoryAxis()
        ax_x.append([r.name for r in rows])
        self._chart.addAxis(ax_x, Qt.AlignBottom)
        series.attachAxis(ax_x)

        ax_y = QValueAxis()
        ax_y.setLabelFormat("%.0f")
        ax_y.setRange(0, max([r.value for r in rows], default=0.0) or 1.0)
        self._chart.addAxis(ax_y, Qt.AlignLeft)
        series.attachAxis(ax_y)
