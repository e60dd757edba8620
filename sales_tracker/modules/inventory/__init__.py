from .controller import InventoryController
from .form import InventoryForm
from .model import InventoryTableModel
from .view import InventoryView

__all__ = [
    "InventoryController",
    "InventoryForm",
    "InventoryTableModel",
    "InventoryView",
]
