# database/repositories/__init__.py
"""
Repository layer public API (SQLite backend).

Usage:
    from sales_tracker.database.repositories import (
        SalesRepo, LeadsRepo, InventoryRepo, SaleEffectsRepo,
    )
"""

from .effects_repo import SaleEffectsRepo
from .inventory_repo import InventoryRepo
from .leads_repo import LeadsRepo
from .sales_repo import SalesRepo

__all__ = [
    "SalesRepo",
    "LeadsRepo",
    "InventoryRepo",
    "SaleEffectsRepo",
]
