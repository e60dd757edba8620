from .controller import RepurchaseController
from .model import RepurchaseTableModel
from .view import RepurchaseView

__all__ = ["RepurchaseController", "RepurchaseTableModel", "RepurchaseView"]
