from __future__ import annotations

"""
SQLite implementation of PersistenceGateway.

Composes the per-table repositories. sqlite3 errors are logged and re-raised
as StorageError so callers only ever deal with the DomainError family.
"""

import functools
import logging
import sqlite3
from typing import List

from ..errors import DomainError, StorageError
from ..records import InventoryItem, Lead, Sale
from .gateway import EFFECT_STOCK_DECREMENT, PersistenceGateway
from .repositories import InventoryRepo, LeadsRepo, SaleEffectsRepo, SalesRepo

_log = logging.getLogger(__name__)


def _storage_op(fn):
    """Translate sqlite3 failures into StorageError; domain errors pass through."""

    @functools.wraps(fn)
    def wrapper(self, *args, **kwargs):
        try:
            return fn(self, *args, **kwargs)
        except DomainError:
            raise
        except sqlite3.Error as e:
            try:
                self.conn.rollback()
            except sqlite3.Error:
                _log.debug("rollback after failed %s also failed", fn.__name__)
            _log.error("SQLite %s failed: %s", fn.__name__, e)
            raise StorageError(f"Database error during {fn.__name__}: {e}") from e

    return wrapper


class SqliteGateway(PersistenceGateway):
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn
        self.sales = SalesRepo(conn)
        self.leads = LeadsRepo(conn)
        self.inventory = InventoryRepo(conn)
        self.effects = SaleEffectsRepo(conn)

    # ---- Sales ------------------------------------------------------------
    @_storage_op
    def list_sales(self) -> List[Sale]:
        return self.sales.list_sales()

    @_storage_op
    def create_sale(self, sale: Sale) -> Sale:
        _log.debug("INSERT sale %s", sale.id)
        return self.sales.create(sale)

    @_storage_op
    def delete_sale(self, sale_id: str) -> None:
        _log.debug("DELETE sale %s", sale_id)
        with self.conn:
            self.sales.delete(sale_id, commit=False)
            self.effects.clear(sale_id, commit=False)

    # ---- Leads ------------------------------------------------------------
    @_storage_op
    def list_leads(self) -> List[Lead]:
        return self.leads.list_leads()

    @_storage_op
    def create_lead(self, lead: Lead) -> Lead:
        _log.debug("INSERT lead %s", lead.id)
        return self.leads.create(lead)

    @_storage_op
    def delete_lead(self, lead_id: str) -> None:
        _log.debug("DELETE lead %s", lead_id)
        self.leads.delete(lead_id)

    @_storage_op
    def update_lead_status(self, lead_id: str, status: str) -> None:
        self.leads.update_status(lead_id, status)

    # ---- Inventory --------------------------------------------------------
    @_storage_op
    def list_inventory(self) -> List[InventoryItem]:
        return self.inventory.list_items()

    @_storage_op
    def upsert_inventory_item(self, item: InventoryItem) -> List[InventoryItem]:
        _log.debug("UPSERT inventory %s", item.product_name)
        self.inventory.upsert(item)
        return self.inventory.list_items()

    @_storage_op
    def delete_inventory_item(self, item_id: str) -> List[InventoryItem]:
        self.inventory.delete(item_id)
        return self.inventory.list_items()

    @_storage_op
    def adjust_stock(self, product_name: str, delta: int) -> None:
        _log.debug("ADJUST stock %s by %+d", product_name, delta)
        self.inventory.adjust_stock(product_name, delta)

    # ---- Applied effects --------------------------------------------------
    @_storage_op
    def effect_applied(self, sale_id: str, effect: str) -> bool:
        return self.effects.exists(sale_id, effect)

    @_storage_op
    def mark_effect(self, sale_id: str, effect: str) -> None:
        self.effects.mark(sale_id, effect)

    @_storage_op
    def apply_stock_effect(self, sale_id: str, product_name: str, delta: int) -> bool:
        with self.conn:
            if not self.effects.mark(sale_id, EFFECT_STOCK_DECREMENT, commit=False):
                return False
            self.inventory.adjust_stock(product_name, delta, commit=False)
        _log.debug("ADJUST stock %s by %+d for sale %s", product_name, delta, sale_id)
        return True

    def close(self) -> None:
        self.conn.close()
