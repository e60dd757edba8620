from __future__ import annotations

from PySide6.QtGui import QKeySequence, QShortcut, QTextDocument
from PySide6.QtPrintSupport import QPrintDialog, QPrinter
from PySide6.QtWidgets import QDialog, QTextBrowser, QToolBar, QVBoxLayout

from ..errors import DomainError
from ..services.report_export import write_sales_pdf
from ..utils import ui_helpers as ui


class ReportPreview(QDialog):
    """Shows a rendered HTML report with Print and Save PDF actions."""

    def __init__(self, html: str, parent=None, *, doc_name: str = "sales_report"):
        super().__init__(parent)
        self.setWindowTitle("Sales Report")
        self.resize(1000, 700)
        self._html = html
        self._doc_name = doc_name

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        toolbar = QToolBar()
        layout.addWidget(toolbar)
        self.act_print = toolbar.addAction("Print")
        self.act_print.triggered.connect(self.print_report)
        self.act_pdf = toolbar.addAction("Save PDF…")
        self.act_pdf.triggered.connect(self.save_pdf)

        print_shortcut = QShortcut(QKeySequence("Ctrl+P"), self)
        print_shortcut.activated.connect(self.print_report)

        self.browser = QTextBrowser()
        self.browser.setOpenExternalLinks(True)
        self.browser.setHtml(html)
        layout.addWidget(self.browser)

    def html(self) -> str:
        return self._html

    def print_report(self) -> None:
        printer = QPrinter(QPrinter.HighResolution)
        printer.setDocName(self._doc_name)
        dlg = QPrintDialog(printer, self)
        if dlg.exec() != QPrintDialog.Accepted:
            return
        doc = QTextDocument()
        doc.setHtml(self._html)
        doc.print_(printer)

    def save_pdf(self) -> None:
        path = ui.save_path(self, "Save PDF", f"{self._doc_name}.pdf", "PDF Files (*.pdf)")
        if not path:
            return
        try:
            write_sales_pdf(self._html, path)
        except DomainError as e:
            ui.error(self, "Save PDF", str(e))
            return
        ui.info(self, "Save PDF", f"Report saved to:\n{path}")
