from __future__ import annotations

from datetime import date
from typing import Optional, Tuple

from PySide6.QtCore import QDate, Signal
from PySide6.QtWidgets import QCheckBox, QDateEdit, QHBoxLayout, QLabel, QPushButton, QWidget

from ..constants import QT_DATE_FMT


def qdate_to_date(qd: QDate) -> date:
    return date(qd.year(), qd.month(), qd.day())


class DateRangeBar(QWidget):
    """
    'From'/'To' date pickers, each with its own enable box. An unchecked
    bound is open-ended. Emits changed() whenever the effective range moves.
    """
    changed = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        lay = QHBoxLayout(self)
        lay.setContentsMargins(0, 0, 0, 0)

        today = QDate.currentDate()

        self.chk_from = QCheckBox("From")
        self.ed_from = QDateEdit()
        self.ed_from.setCalendarPopup(True)
        self.ed_from.setDisplayFormat(QT_DATE_FMT)
        self.ed_from.setDate(QDate(today.year(), today.month(), 1))
        self.ed_from.setEnabled(False)

        self.chk_to = QCheckBox("To")
        self.ed_to = QDateEdit()
        self.ed_to.setCalendarPopup(True)
        self.ed_to.setDisplayFormat(QT_DATE_FMT)
        self.ed_to.setDate(today)
        self.ed_to.setEnabled(False)

        self.btn_clear = QPushButton("All dates")

        lay.addWidget(QLabel("Period:"))
        lay.addWidget(self.chk_from)
        lay.addWidget(self.ed_from)
        lay.addWidget(self.chk_to)
        lay.addWidget(self.ed_to)
        lay.addWidget(self.btn_clear)

        self.chk_from.toggled.connect(self._on_toggle)
        self.chk_to.toggled.connect(self._on_toggle)
        self.ed_from.dateChanged.connect(lambda *_: self.changed.emit())
        self.ed_to.dateChanged.connect(lambda *_: self.changed.emit())
        self.btn_clear.clicked.connect(self.clear)

    def _on_toggle(self, *_):
        self.ed_from.setEnabled(self.chk_from.isChecked())
        self.ed_to.setEnabled(self.chk_to.isChecked())
        self.changed.emit()

    def clear(self) -> None:
        self.blockSignals(True)
        self.chk_from.setChecked(False)
        self.chk_to.setChecked(False)
        self.blockSignals(False)
        self.changed.emit()

    def set_range(self, start: Optional[date], end: Optional[date]) -> None:
        self.blockSignals(True)
        if start:
            self.ed_from.setDate(QDate(start.year, start.month, start.day))
        if end:
            self.ed_to.setDate(QDate(end.year, end.month, end.day))
        self.chk_from.setChecked(start is not None)
        self.chk_to.setChecked(end is not None)
        self.blockSignals(False)
        self.changed.emit()

    def range(self) -> Tuple[Optional[date], Optional[date]]:
        start = qdate_to_date(self.ed_from.date()) if self.chk_from.isChecked() else None
        end = qdate_to_date(self.ed_to.date()) if self.chk_to.isChecked() else None
        return start, end
