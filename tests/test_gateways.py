"""Behaviour both storage backends must share."""
import json
from datetime import date

import pytest

from sales_tracker.database import JsonStoreGateway
from sales_tracker.errors import NotFoundError, StorageError
from sales_tracker.records import Lead
from tests.factories import at, make_item, make_sale


def test_sales_roundtrip_newest_first(gateway):
    a = make_sale(client_name="A", freight=3.5, discount=1.0, ad_cost=2.0)
    b = make_sale(client_name="B", date=date(2024, 1, 5), sale_type="Referral",
                  amount=200.0, commission_rate=10.0)
    gateway.create_sale(a)
    gateway.create_sale(b)
    assert gateway.list_sales() == [b, a]


def test_delete_sale(gateway):
    s = gateway.create_sale(make_sale())
    gateway.delete_sale(s.id)
    assert gateway.list_sales() == []


def test_delete_missing_sale_raises_not_found(gateway):
    with pytest.raises(NotFoundError):
        gateway.delete_sale("nope")


def test_leads_roundtrip_and_status(gateway):
    l1 = Lead(id="l1", client_name="Ana", created_at=at(9), phone="555",
              product_interest="Perfume", expected_date=date(2024, 7, 10), notes="call back")
    l2 = Lead(id="l2", client_name="Bia", created_at=at(10))
    gateway.create_lead(l1)
    gateway.create_lead(l2)
    assert gateway.list_leads() == [l2, l1]

    gateway.update_lead_status("l1", "Contacted")
    got = {l.id: l for l in gateway.list_leads()}
    assert got["l1"].status == "Contacted"

    gateway.delete_lead("l2")
    assert [l.id for l in gateway.list_leads()] == ["l1"]


def test_lead_missing_ids_raise(gateway):
    with pytest.raises(NotFoundError):
        gateway.delete_lead("x")
    with pytest.raises(NotFoundError):
        gateway.update_lead_status("x", "Lost")


def test_upsert_replaces_by_product_name_and_keeps_id(gateway):
    first = make_item(id="keep", product_name="Perfume", quantity=10, cost_price=40.0)
    gateway.upsert_inventory_item(first)
    again = make_item(id="other", product_name="Perfume", quantity=3, cost_price=55.0, default_sell_price=None)
    items = gateway.upsert_inventory_item(again)
    assert len(items) == 1
    assert items[0].id == "keep"
    assert items[0].quantity == 3
    assert items[0].cost_price == 55.0
    assert items[0].default_sell_price is None


def test_inventory_sorted_by_name(gateway):
    gateway.upsert_inventory_item(make_item(product_name="Soap"))
    items = gateway.upsert_inventory_item(make_item(product_name="Cream"))
    assert [i.product_name for i in items] == ["Cream", "Soap"]
    assert [i.product_name for i in gateway.list_inventory()] == ["Cream", "Soap"]


def test_adjust_stock_has_no_floor(gateway):
    gateway.upsert_inventory_item(make_item(product_name="Soap", quantity=1))
    gateway.adjust_stock("Soap", -1)
    gateway.adjust_stock("Soap", -1)
    assert gateway.list_inventory()[0].quantity == -1


def test_adjust_unknown_product_raises(gateway):
    with pytest.raises(NotFoundError):
        gateway.adjust_stock("Ghost", -1)


def test_delete_inventory_item(gateway):
    items = gateway.upsert_inventory_item(make_item(product_name="Soap"))
    assert gateway.delete_inventory_item(items[0].id) == []
    with pytest.raises(NotFoundError):
        gateway.delete_inventory_item(items[0].id)


def test_effect_markers_are_idempotent(gateway):
    assert not gateway.effect_applied("s1", "stock_decrement")
    gateway.mark_effect("s1", "stock_decrement")
    gateway.mark_effect("s1", "stock_decrement")
    assert gateway.effect_applied("s1", "stock_decrement")
    assert not gateway.effect_applied("s1", "lead_removed")


def test_stock_effect_applies_once(gateway):
    gateway.upsert_inventory_item(make_item(product_name="Soap", quantity=5))
    assert gateway.apply_stock_effect("s1", "Soap", -1) is True
    assert gateway.apply_stock_effect("s1", "Soap", -1) is False
    assert gateway.list_inventory()[0].quantity == 4
    assert gateway.effect_applied("s1", "stock_decrement")


def test_stock_effect_on_unknown_product_leaves_no_marker(gateway):
    with pytest.raises(NotFoundError):
        gateway.apply_stock_effect("s1", "Ghost", -1)
    assert not gateway.effect_applied("s1", "stock_decrement")


def test_delete_sale_drops_its_markers(gateway):
    gateway.upsert_inventory_item(make_item(product_name="Perfume", quantity=5))
    keep = gateway.create_sale(make_sale())
    gone = gateway.create_sale(make_sale())
    for s in (keep, gone):
        gateway.apply_stock_effect(s.id, "Perfume", -1)
        gateway.mark_effect(s.id, "lead_removed")

    gateway.delete_sale(gone.id)

    assert not gateway.effect_applied(gone.id, "stock_decrement")
    assert not gateway.effect_applied(gone.id, "lead_removed")
    assert gateway.effect_applied(keep.id, "stock_decrement")
    assert gateway.effect_applied(keep.id, "lead_removed")


# ---------- backend specifics ----------

def test_json_store_uses_camel_case_collections(json_gateway):
    json_gateway.create_sale(make_sale(ad_cost=4.0))
    json_gateway.upsert_inventory_item(make_item(default_sell_price=99.0))
    data = json.loads(json_gateway.path.read_text(encoding="utf-8"))
    assert set(data) == {"sales_db", "leads_db", "inventory_db", "effects_db"}
    assert {"clientName", "productName", "adCost", "commissionValue", "saleType"} <= set(data["sales_db"][0])
    assert {"productName", "costPrice", "defaultSellPrice"} <= set(data["inventory_db"][0])


def test_json_store_missing_file_is_empty(tmp_path):
    gw = JsonStoreGateway(tmp_path / "nested" / "store.json")
    assert gw.list_sales() == []
    gw.create_sale(make_sale())
    assert (tmp_path / "nested" / "store.json").exists()


def test_json_store_corrupt_file_raises_storage_error(tmp_path):
    p = tmp_path / "store.json"
    p.write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageError):
        JsonStoreGateway(p).list_sales()


def test_json_sale_without_sale_type_defaults_to_instagram(json_gateway):
    doc = {"id": "old", "clientName": "Ana", "productName": "Perfume", "amount": 90, "date": "2024-06-01"}
    json_gateway.path.write_text(json.dumps({"sales_db": [doc]}), encoding="utf-8")
    [sale] = json_gateway.list_sales()
    assert sale.sale_type == "Instagram"
    assert sale.status == "Pending"


@pytest.mark.parametrize(
    "collection, doc, read",
    [
        ("sales_db", {"id": "x", "clientName": "Ana", "productName": "P", "date": "30/06/2024"}, "list_sales"),
        ("sales_db", {"id": "x", "productName": "P", "date": "2024-06-30"}, "list_sales"),
        ("leads_db", {"id": "x", "clientName": "Ana"}, "list_leads"),
        ("inventory_db", {"id": "x", "productName": "P", "quantity": "lots"}, "list_inventory"),
    ],
)
def test_json_malformed_record_raises_storage_error(json_gateway, collection, doc, read):
    json_gateway.path.write_text(json.dumps({collection: [doc]}), encoding="utf-8")
    with pytest.raises(StorageError):
        getattr(json_gateway, read)()


def test_sqlite_errors_become_storage_error(sqlite_gateway):
    s = make_sale()
    sqlite_gateway.create_sale(s)
    with pytest.raises(StorageError):
        sqlite_gateway.create_sale(s)  # duplicate primary key


def test_sqlite_records_schema_version(conn):
    from sales_tracker.constants import SCHEMA_VERSION
    from sales_tracker.database.versioning import get_current_version

    assert get_current_version(conn) == SCHEMA_VERSION
