from .controller import DashboardController
from .view import DashboardView, KPICard

__all__ = ["DashboardController", "DashboardView", "KPICard"]
