import pytest

from sales_tracker.errors import NotFoundError, ValidationError
from sales_tracker.services.inventory_valuation import (
    InventoryService,
    find_item,
    is_low_stock,
    register_product,
    unit_cost,
)
from tests.factories import make_item


def test_unit_cost_is_total_over_quantity():
    item = register_product("Perfume", 4, 100)
    assert item.cost_price == pytest.approx(25.0)
    assert item.quantity == 4
    assert item.default_sell_price is None


def test_register_accepts_text_input():
    item = register_product("  Soap ", "2", "9.5", "7.25")
    assert item.product_name == "Soap"
    assert item.cost_price == pytest.approx(4.75)
    assert item.default_sell_price == pytest.approx(7.25)


@pytest.mark.parametrize("qty", [0, -3, 2.5, "abc"])
def test_quantity_must_be_positive_whole_number(qty):
    with pytest.raises(ValidationError):
        register_product("Perfume", qty, 100)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"product_name": " "},
        {"total_purchase_value": -1},
        {"default_sell_price": "-2"},
    ],
)
def test_register_validation(kwargs):
    args = {"product_name": "Perfume", "quantity": 1, "total_purchase_value": 10}
    args.update(kwargs)
    with pytest.raises(ValidationError):
        register_product(**args)


def test_unit_cost_rejects_zero_quantity():
    with pytest.raises(ValidationError):
        unit_cost(10.0, 0)


def test_find_item_is_exact_match():
    inv = [make_item(product_name="Perfume")]
    assert find_item(inv, "Perfume") is inv[0]
    assert find_item(inv, "perfume") is None


def test_low_stock_flag_includes_negative_stock():
    assert is_low_stock(make_item(quantity=-2))
    assert is_low_stock(make_item(quantity=4))
    assert not is_low_stock(make_item(quantity=5))
    assert is_low_stock(make_item(quantity=5), threshold=6)


def test_reregistration_replaces_and_keeps_id(gateway):
    svc = InventoryService(gateway)
    first = svc.register("Perfume", 10, 400, 120)[0]
    items = svc.register("Perfume", 2, 100)
    assert len(items) == 1
    assert items[0].id == first.id
    assert items[0].quantity == 2
    assert items[0].cost_price == pytest.approx(50.0)
    assert items[0].default_sell_price is None


def test_adjust_and_delete(gateway):
    svc = InventoryService(gateway)
    item = svc.register("Soap", 1, 5)[0]
    svc.adjust("Soap", -3)
    assert gateway.list_inventory()[0].quantity == -2
    assert svc.delete(item.id) == []


def test_adjust_unknown_product(gateway):
    with pytest.raises(NotFoundError):
        InventoryService(gateway).adjust("Ghost", 1)


def test_invalid_registration_writes_nothing(gateway):
    with pytest.raises(ValidationError):
        InventoryService(gateway).register("Soap", 0, 5)
    assert gateway.list_inventory() == []
