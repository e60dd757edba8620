from datetime import date, datetime

import pytest

from sales_tracker.errors import ValidationError
from sales_tracker.services.aggregation import (
    commission_value,
    filter_by_date_range,
    net_profit,
    parse_date,
    repurchase_candidates,
    revenue_by_product,
    search_sales,
    summarize,
)
from tests.factories import TODAY, days_ago, make_sale


# ---------- parse_date ----------

def test_parse_date_accepts_date_datetime_and_iso_text():
    assert parse_date(date(2024, 1, 2)) == date(2024, 1, 2)
    assert parse_date(datetime(2024, 1, 2, 23, 59)) == date(2024, 1, 2)
    assert parse_date("2024-01-02") == date(2024, 1, 2)
    assert parse_date(" 2024-01-02T10:30:00Z ") == date(2024, 1, 2)
    assert parse_date("2024-01-02 08:00:00") == date(2024, 1, 2)


@pytest.mark.parametrize("bad", ["", "   ", "02/01/2024", "2024-13-01", "yesterday", 20240102])
def test_parse_date_rejects_malformed_input(bad):
    with pytest.raises(ValidationError):
        parse_date(bad)


# ---------- per-sale figures ----------

def test_commission_and_net_profit_worked_example():
    s = make_sale(amount=200.0, discount=10.0, commission_rate=10.0, cost=50.0, freight=15.0, ad_cost=0.0)
    assert commission_value(200.0, 10.0) == pytest.approx(20.0)
    assert s.commission_value == pytest.approx(20.0)
    assert net_profit(s) == pytest.approx(105.0)


def test_net_profit_can_be_negative():
    s = make_sale(amount=10.0, cost=50.0)
    assert net_profit(s) == pytest.approx(-40.0)


# ---------- filter_by_date_range ----------

def test_filter_is_inclusive_on_both_bounds_and_keeps_order():
    a = make_sale(date=date(2024, 6, 1))
    b = make_sale(date=date(2024, 6, 15))
    c = make_sale(date=date(2024, 6, 30))
    d = make_sale(date=date(2024, 7, 1))
    out = filter_by_date_range([d, c, b, a], "2024-06-01", date(2024, 6, 30))
    assert out == [c, b, a]


def test_filter_open_bounds():
    a = make_sale(date=date(2024, 1, 1))
    b = make_sale(date=date(2024, 12, 31))
    assert filter_by_date_range([a, b]) == [a, b]
    assert filter_by_date_range([a, b], start="2024-06-01") == [b]
    assert filter_by_date_range([a, b], end="2024-06-01") == [a]
    assert filter_by_date_range([a, b], "", "") == [a, b]


def test_filter_truncates_timestamp_bounds():
    a = make_sale(date=date(2024, 6, 30))
    assert filter_by_date_range([a], end=datetime(2024, 6, 30, 0, 0, 1)) == [a]


def test_filter_rejects_bad_bound():
    with pytest.raises(ValidationError):
        filter_by_date_range([make_sale()], start="not-a-date")


# ---------- summarize ----------

def test_summarize_empty_has_zero_average():
    s = summarize([])
    assert s.sales_count == 0
    assert s.total_sales == 0.0
    assert s.average_ticket == 0.0


def test_summarize_totals():
    rows = [
        make_sale(amount=200.0, discount=10.0, commission_rate=10.0, cost=50.0, freight=15.0),
        make_sale(amount=100.0, cost=40.0, freight=5.0),
    ]
    s = summarize(rows)
    assert s.sales_count == 2
    assert s.total_sales == pytest.approx(300.0)
    assert s.total_commission == pytest.approx(20.0)
    assert s.total_freight == pytest.approx(20.0)
    assert s.total_net_profit == pytest.approx(105.0 + 55.0)
    assert s.average_ticket == pytest.approx(150.0)


# ---------- revenue_by_product ----------

def test_revenue_by_product_sorted_by_value_then_name():
    rows = [
        make_sale(product_name="B", amount=50.0),
        make_sale(product_name="A", amount=30.0),
        make_sale(product_name="C", amount=80.0),
        make_sale(product_name="A", amount=20.0),
    ]
    out = revenue_by_product(rows)
    assert [(r.name, r.value) for r in out] == [("C", 80.0), ("A", 50.0), ("B", 50.0)]


# ---------- repurchase_candidates ----------

def test_recent_purchase_excludes_client():
    rows = [make_sale(client_name="Ana", date=days_ago(40)), make_sale(client_name="Ana", date=days_ago(10))]
    assert repurchase_candidates(rows, TODAY) == []


def test_latest_sale_is_selected_when_all_are_old():
    old = make_sale(client_name="Ana", date=days_ago(40))
    newer = make_sale(client_name="Ana", date=days_ago(30))
    out = repurchase_candidates([old, newer], TODAY)
    assert len(out) == 1
    assert out[0].sale is newer
    assert out[0].days_since == 30


def test_threshold_is_inclusive():
    s = make_sale(client_name="Bia", date=days_ago(28))
    assert [e.days_since for e in repurchase_candidates([s], TODAY)] == [28]
    s27 = make_sale(client_name="Bia", date=days_ago(27))
    assert repurchase_candidates([s27], TODAY) == []


def test_same_day_tie_keeps_first_encountered():
    first = make_sale(client_name="Ana", product_name="First", date=days_ago(35))
    second = make_sale(client_name="Ana", product_name="Second", date=days_ago(35))
    out = repurchase_candidates([first, second], TODAY)
    assert out[0].sale is first


def test_grouping_is_case_sensitive_and_sorted_recent_first():
    rows = [
        make_sale(client_name="ana", date=days_ago(60)),
        make_sale(client_name="Ana", date=days_ago(29)),
        make_sale(client_name="Caio", date=days_ago(45)),
    ]
    out = repurchase_candidates(rows, TODAY)
    assert [e.client_name for e in out] == ["Ana", "Caio", "ana"]


def test_custom_threshold():
    s = make_sale(client_name="Ana", date=days_ago(8))
    assert len(repurchase_candidates([s], TODAY, threshold_days=7)) == 1


# ---------- search ----------

def test_search_is_case_insensitive_substring():
    a = make_sale(client_name="Ana Souza")
    b = make_sale(client_name="Bruno")
    assert search_sales([a, b], "souz") == [a]
    assert search_sales([a, b], "  ") == [a, b]
    assert search_sales([a, b], None) == [a, b]
