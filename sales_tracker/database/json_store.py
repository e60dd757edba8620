from __future__ import annotations

"""
Local document-store implementation of PersistenceGateway.

One JSON file holds four collections, each under its own key:

    {
      "sales_db":     [ {id, clientName, productName, amount, ...}, ... ],
      "leads_db":     [ {id, clientName, createdAt, status, ...}, ... ],
      "inventory_db": [ {id, productName, quantity, costPrice, ...}, ... ],
      "effects_db":   [ {saleId, effect}, ... ]
    }

Keys inside records are camelCase. Every mutation rewrites the whole file
through a temp file + os.replace so a crash never leaves a half-written store.
"""

import json
import logging
import os
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List

from ..errors import NotFoundError, StorageError
from ..records import InventoryItem, Lead, Sale, SALE_TYPE_INSTAGRAM
from .gateway import EFFECT_STOCK_DECREMENT, PersistenceGateway

_log = logging.getLogger(__name__)

KEY_SALES = "sales_db"
KEY_LEADS = "leads_db"
KEY_INVENTORY = "inventory_db"
KEY_EFFECTS = "effects_db"
_KEYS = (KEY_SALES, KEY_LEADS, KEY_INVENTORY, KEY_EFFECTS)


# ---------- record <-> document ----------

def sale_to_doc(s: Sale) -> Dict[str, Any]:
    return {
        "id": s.id,
        "clientName": s.client_name,
        "productName": s.product_name,
        "amount": s.amount,
        "cost": s.cost,
        "freight": s.freight,
        "discount": s.discount,
        "adCost": s.ad_cost,
        "commissionRate": s.commission_rate,
        "commissionValue": s.commission_value,
        "date": s.date.isoformat(),
        "saleType": s.sale_type,
        "status": s.status,
    }


def doc_to_sale(d: Dict[str, Any]) -> Sale:
    return Sale(
        id=str(d["id"]),
        client_name=d["clientName"],
        product_name=d["productName"],
        amount=float(d.get("amount") or 0.0),
        cost=float(d.get("cost") or 0.0),
        freight=float(d.get("freight") or 0.0),
        discount=float(d.get("discount") or 0.0),
        ad_cost=float(d.get("adCost") or 0.0),
        commission_rate=float(d.get("commissionRate") or 0.0),
        commission_value=float(d.get("commissionValue") or 0.0),
        date=date.fromisoformat(str(d["date"])[:10]),
        sale_type=d.get("saleType") or SALE_TYPE_INSTAGRAM,
        status=d.get("status") or "Pending",
    )


def lead_to_doc(l: Lead) -> Dict[str, Any]:
    return {
        "id": l.id,
        "clientName": l.client_name,
        "phone": l.phone,
        "productInterest": l.product_interest,
        "expectedDate": l.expected_date.isoformat() if l.expected_date else None,
        "notes": l.notes,
        "createdAt": l.created_at.isoformat(timespec="seconds"),
        "status": l.status,
    }


def doc_to_lead(d: Dict[str, Any]) -> Lead:
    exp = d.get("expectedDate")
    return Lead(
        id=str(d["id"]),
        client_name=d["clientName"],
        phone=d.get("phone"),
        product_interest=d.get("productInterest"),
        expected_date=date.fromisoformat(str(exp)[:10]) if exp else None,
        notes=d.get("notes"),
        created_at=datetime.fromisoformat(str(d["createdAt"]).replace("Z", "+00:00")),
        status=d.get("status") or "Pending",
    )


def item_to_doc(i: InventoryItem) -> Dict[str, Any]:
    return {
        "id": i.id,
        "productName": i.product_name,
        "quantity": int(i.quantity),
        "costPrice": i.cost_price,
        "defaultSellPrice": i.default_sell_price,
    }


def doc_to_item(d: Dict[str, Any]) -> InventoryItem:
    dsp = d.get("defaultSellPrice")
    return InventoryItem(
        id=str(d["id"]),
        product_name=d["productName"],
        quantity=int(d.get("quantity") or 0),
        cost_price=float(d.get("costPrice") or 0.0),
        default_sell_price=float(dsp) if dsp is not None else None,
    )


class JsonStoreGateway(PersistenceGateway):
    def __init__(self, path: Path):
        self.path = Path(path)

    # ---- file I/O ---------------------------------------------------------
    def _load(self) -> Dict[str, List[Dict[str, Any]]]:
        if not self.path.exists():
            return {k: [] for k in _KEYS}
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, json.JSONDecodeError) as e:
            _log.error("Could not read %s: %s", self.path, e)
            raise StorageError(f"Could not read data file {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Data file {self.path} is not a JSON object.")
        for k in _KEYS:
            data.setdefault(k, [])
        return data

    def _save(self, data: Dict[str, List[Dict[str, Any]]]) -> None:
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except OSError as e:
            _log.error("Could not write %s: %s", self.path, e)
            raise StorageError(f"Could not write data file {self.path}: {e}") from e
        _log.debug("Saved %s (%s)", self.path, ", ".join(f"{k}={len(data[k])}" for k in _KEYS))

    def _decode(self, docs: List[Dict[str, Any]], convert, what: str) -> list:
        try:
            return [convert(d) for d in docs]
        except (KeyError, ValueError, TypeError) as e:
            _log.error("Malformed %s record in %s: %r", what, self.path, e)
            raise StorageError(f"Malformed {what} record in data file {self.path}: {e!r}") from e

    def _sorted_items(self, docs: List[Dict[str, Any]]) -> List[InventoryItem]:
        return sorted(self._decode(docs, doc_to_item, "inventory"), key=lambda i: i.product_name)

    @staticmethod
    def _index_of(docs: List[Dict[str, Any]], key: str, value: Any) -> int:
        for i, d in enumerate(docs):
            if d.get(key) == value:
                return i
        return -1

    # ---- Sales ------------------------------------------------------------
    def list_sales(self) -> List[Sale]:
        return self._decode(self._load()[KEY_SALES], doc_to_sale, "sale")

    def create_sale(self, sale: Sale) -> Sale:
        data = self._load()
        # newest first
        data[KEY_SALES].insert(0, sale_to_doc(sale))
        self._save(data)
        return sale

    def delete_sale(self, sale_id: str) -> None:
        data = self._load()
        idx = self._index_of(data[KEY_SALES], "id", sale_id)
        if idx < 0:
            raise NotFoundError(f"Sale {sale_id} does not exist.")
        del data[KEY_SALES][idx]
        data[KEY_EFFECTS] = [e for e in data[KEY_EFFECTS] if e.get("saleId") != sale_id]
        self._save(data)

    # ---- Leads ------------------------------------------------------------
    def list_leads(self) -> List[Lead]:
        return self._decode(self._load()[KEY_LEADS], doc_to_lead, "lead")

    def create_lead(self, lead: Lead) -> Lead:
        data = self._load()
        data[KEY_LEADS].insert(0, lead_to_doc(lead))
        self._save(data)
        return lead

    def delete_lead(self, lead_id: str) -> None:
        data = self._load()
        idx = self._index_of(data[KEY_LEADS], "id", lead_id)
        if idx < 0:
            raise NotFoundError(f"Lead {lead_id} does not exist.")
        del data[KEY_LEADS][idx]
        self._save(data)

    def update_lead_status(self, lead_id: str, status: str) -> None:
        data = self._load()
        idx = self._index_of(data[KEY_LEADS], "id", lead_id)
        if idx < 0:
            raise NotFoundError(f"Lead {lead_id} does not exist.")
        data[KEY_LEADS][idx]["status"] = status
        self._save(data)

    # ---- Inventory --------------------------------------------------------
    def list_inventory(self) -> List[InventoryItem]:
        return self._sorted_items(self._load()[KEY_INVENTORY])

    def upsert_inventory_item(self, item: InventoryItem) -> List[InventoryItem]:
        data = self._load()
        docs = data[KEY_INVENTORY]
        idx = self._index_of(docs, "productName", item.product_name)
        doc = item_to_doc(item)
        if idx < 0:
            docs.append(doc)
        else:
            doc["id"] = docs[idx]["id"]
            docs[idx] = doc
        self._save(data)
        return self._sorted_items(docs)

    def delete_inventory_item(self, item_id: str) -> List[InventoryItem]:
        data = self._load()
        docs = data[KEY_INVENTORY]
        idx = self._index_of(docs, "id", item_id)
        if idx < 0:
            raise NotFoundError(f"Inventory item {item_id} does not exist.")
        del docs[idx]
        self._save(data)
        return self._sorted_items(docs)

    def adjust_stock(self, product_name: str, delta: int) -> None:
        data = self._load()
        docs = data[KEY_INVENTORY]
        idx = self._index_of(docs, "productName", product_name)
        if idx < 0:
            raise NotFoundError(f"Product '{product_name}' is not in the inventory.")
        docs[idx]["quantity"] = int(docs[idx].get("quantity") or 0) + int(delta)
        self._save(data)

    # ---- Applied effects --------------------------------------------------
    def effect_applied(self, sale_id: str, effect: str) -> bool:
        return any(
            d.get("saleId") == sale_id and d.get("effect") == effect
            for d in self._load()[KEY_EFFECTS]
        )

    def mark_effect(self, sale_id: str, effect: str) -> None:
        data = self._load()
        if any(d.get("saleId") == sale_id and d.get("effect") == effect
               for d in data[KEY_EFFECTS]):
            return
        data[KEY_EFFECTS].append({"saleId": sale_id, "effect": effect})
        self._save(data)

    def apply_stock_effect(self, sale_id: str, product_name: str, delta: int) -> bool:
        data = self._load()
        if any(d.get("saleId") == sale_id and d.get("effect") == EFFECT_STOCK_DECREMENT
               for d in data[KEY_EFFECTS]):
            return False
        docs = data[KEY_INVENTORY]
        idx = self._index_of(docs, "productName", product_name)
        if idx < 0:
            raise NotFoundError(f"Product '{product_name}' is not in the inventory.")
        docs[idx]["quantity"] = int(docs[idx].get("quantity") or 0) + int(delta)
        data[KEY_EFFECTS].append({"saleId": sale_id, "effect": EFFECT_STOCK_DECREMENT})
        # one save: quantity and marker land together
        self._save(data)
        return True
