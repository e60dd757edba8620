"""
Thin wrappers around the stock Qt dialogs. Controllers call these through
the module (ui.info, ui.error, ...) so tests can monkeypatch them.
"""
from typing import Optional

from PySide6.QtWidgets import QFileDialog, QMessageBox, QWidget


def info(parent: QWidget, title: str, text: str):
    QMessageBox.information(parent, title, text)


def error(parent: QWidget, title: str, text: str):
    QMessageBox.critical(parent, title, text)


def confirm(parent: QWidget, title: str, text: str) -> bool:
    ans = QMessageBox.question(parent, title, text, QMessageBox.Yes | QMessageBox.No, QMessageBox.No)
    return ans == QMessageBox.Yes


def ask_retry(parent: QWidget, title: str, text: str) -> bool:
    """Retry / Ignore question; True means retry."""
    ans = QMessageBox.question(
        parent, title, text,
        QMessageBox.StandardButton.Retry | QMessageBox.StandardButton.Ignore,
    )
    return ans == QMessageBox.StandardButton.Retry


def save_path(parent: QWidget, caption: str, suggested: str, file_filter: str) -> Optional[str]:
    """Native save dialog; None when cancelled."""
    path, _ = QFileDialog.getSaveFileName(parent, caption, suggested, file_filter)
    return path or None
