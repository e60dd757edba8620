import csv
from datetime import date

import pytest

from sales_tracker.errors import StorageError
from sales_tracker.services.aggregation import summarize
from sales_tracker.services.report_export import (
    CSV_HEADERS,
    export_file_name,
    render_sales_report_html,
    sale_to_csv_row,
    write_sales_csv,
)
from tests.factories import make_sale


def test_export_file_name():
    assert export_file_name(date(2024, 6, 30)) == "sales_report_2024-06-30.csv"


def test_csv_row_formats_money_and_date():
    s = make_sale(client_name="Ana", product_name="Perfume", amount=200, discount=10,
                  commission_rate=10, cost=50, freight=15, date=date(2024, 6, 1))
    assert sale_to_csv_row(s) == [
        "Ana", "Perfume", "200.00", "10.00", "20.00", "50.00", "15.00", "0.00", "2024-06-01", "Pending",
    ]


def test_write_sales_csv(tmp_path):
    path = tmp_path / "out.csv"
    n = write_sales_csv([make_sale(client_name="Ana, Jr."), make_sale()], path)
    assert n == 2
    with open(path, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0] == CSV_HEADERS
    assert rows[1][0] == "Ana, Jr."
    assert len(rows) == 3


def test_write_empty_csv_has_header_only(tmp_path):
    path = tmp_path / "out.csv"
    assert write_sales_csv([], path) == 0
    assert path.read_text(encoding="utf-8").strip() == ",".join(CSV_HEADERS)


def test_write_csv_failure_is_storage_error(tmp_path):
    with pytest.raises(StorageError):
        write_sales_csv([make_sale()], tmp_path / "missing" / "out.csv")


def test_html_report_contains_rows_and_totals():
    sales = [make_sale(client_name="Ana", amount=200), make_sale(client_name="Bia", amount=100, cost=150)]
    html = render_sales_report_html(sales, summarize(sales), date(2024, 6, 1), date(2024, 6, 30))
    assert "2024-06-01 to 2024-06-30" in html
    assert "300.00" in html
    assert "Ana" in html and "Bia" in html
    assert 'class="num neg">-50.00' in html


def test_html_report_escapes_names():
    sales = [make_sale(client_name="<b>Eve</b>")]
    html = render_sales_report_html(sales, summarize(sales))
    assert "&lt;b&gt;Eve&lt;/b&gt;" in html
    assert "<b>Eve</b>" not in html
    assert "All sales" in html


def test_html_report_empty():
    html = render_sales_report_html([], summarize([]))
    assert "No sales in this period." in html
