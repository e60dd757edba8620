from .controller import SalesController
from .form import SaleForm
from .model import SalesTableModel
from .view import SalesView

__all__ = ["SalesController", "SaleForm", "SalesTableModel", "SalesView"]
