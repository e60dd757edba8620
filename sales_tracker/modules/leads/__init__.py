from .controller import LeadsController
from .form import LeadForm
from .model import LeadsTableModel
from .view import LeadsView

__all__ = ["LeadsController", "LeadForm", "LeadsTableModel", "LeadsView"]
