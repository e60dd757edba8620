from __future__ import annotations

"""
Persistence contract shared by every storage backend.

Implementations:
  - SqliteGateway     (database/sqlite_gateway.py)  relational, one table per collection
  - JsonStoreGateway  (database/json_store.py)      local key-value document

Conventions:
- Every method may raise StorageError.
- Deleting/updating a missing id raises NotFoundError.
- list_sales()/list_leads() return newest-created first; list_inventory()
  is ordered by product name.
- Effects are markers for saga steps already applied to a sale
  (see services/sale_recording.py). Deleting a sale drops its markers.
"""

from abc import ABC, abstractmethod
from typing import List

from ..records import InventoryItem, Lead, Sale

EFFECT_STOCK_DECREMENT = "stock_decrement"
EFFECT_LEAD_REMOVED = "lead_removed"


class PersistenceGateway(ABC):

    # ---- Sales ------------------------------------------------------------
    @abstractmethod
    def list_sales(self) -> List[Sale]: ...

    @abstractmethod
    def create_sale(self, sale: Sale) -> Sale: ...

    @abstractmethod
    def delete_sale(self, sale_id: str) -> None: ...

    # ---- Leads ------------------------------------------------------------
    @abstractmethod
    def list_leads(self) -> List[Lead]: ...

    @abstractmethod
    def create_lead(self, lead: Lead) -> Lead: ...

    @abstractmethod
    def delete_lead(self, lead_id: str) -> None: ...

    @abstractmethod
    def update_lead_status(self, lead_id: str, status: str) -> None: ...

    # ---- Inventory --------------------------------------------------------
    @abstractmethod
    def list_inventory(self) -> List[InventoryItem]: ...

    @abstractmethod
    def upsert_inventory_item(self, item: InventoryItem) -> List[InventoryItem]:
        """Insert or fully replace the item keyed by product_name."""

    @abstractmethod
    def delete_inventory_item(self, item_id: str) -> List[InventoryItem]: ...

    @abstractmethod
    def adjust_stock(self, product_name: str, delta: int) -> None:
        """Add a signed delta to quantity. No floor is applied."""

    # ---- Applied effects --------------------------------------------------
    @abstractmethod
    def effect_applied(self, sale_id: str, effect: str) -> bool: ...

    @abstractmethod
    def mark_effect(self, sale_id: str, effect: str) -> None: ...

    @abstractmethod
    def apply_stock_effect(self, sale_id: str, product_name: str, delta: int) -> bool:
        """
        Adjust stock and record the stock_decrement marker for `sale_id` in one
        write. Returns False (and changes nothing) when the marker already
        exists. An unknown product raises NotFoundError and leaves no marker.
        """

    # ---- Lifecycle --------------------------------------------------------
    def close(self) -> None:
        """Release backend resources. Default: nothing to do."""
        return None
