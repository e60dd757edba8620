from PySide6.QtCore import QObject, Signal
from PySide6.QtWidgets import QWidget


class BaseModule(QObject):
    """
    One navigation page. Controllers emit data_changed after a successful
    write; the main window then calls reload() on every module.
    """
    data_changed = Signal()

    def get_widget(self) -> QWidget:
        raise NotImplementedError

    def reload(self) -> None:
        raise NotImplementedError
