from __future__ import annotations

"""
Sales report export: CSV for spreadsheets, HTML for the on-screen preview
and PDF (WeasyPrint) for printing.

All three take the sales exactly as the user currently sees them (already
filtered by date range and search).
"""

import csv
import logging
from datetime import date
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..constants import APP_NAME
from ..errors import StorageError
from ..records import Sale, SalesSummary
from .aggregation import net_profit

_log = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
REPORT_TEMPLATE = "sales_report.html"

CSV_HEADERS: List[str] = [
    "Client",
    "Product",
    "Gross Amount",
    "Discount",
    "Commission",
    "Cost",
    "Freight",
    "Ad Cost",
    "Date",
    "Status",
]

_REPORT_PDF_CSS = """
@page { size: A4 landscape; margin: 12mm; }
body { font-family: sans-serif; font-size: 9pt; }
"""


def _money(v: float) -> str:
    return f"{float(v or 0.0):.2f}"


def export_file_name(today: Optional[date] = None) -> str:
    """sales_report_YYYY-MM-DD.csv, stamped with the export date."""
    return f"sales_report_{(today or date.today()).isoformat()}.csv"


def sale_to_csv_row(s: Sale) -> List[str]:
    return [
        s.client_name,
        s.product_name,
        _money(s.amount),
        _money(s.discount),
        _money(s.commission_value),
        _money(s.cost),
        _money(s.freight),
        _money(s.ad_cost),
        s.date.isoformat(),
        s.status,
    ]


def write_sales_csv(sales: Iterable[Sale], path) -> int:
    """Write header + one row per sale; returns the number of sale rows."""
    n = 0
    try:
        with open(path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow(CSV_HEADERS)
            for s in sales:
                w.writerow(sale_to_csv_row(s))
                n += 1
    except OSError as e:
        _log.error("CSV export to %s failed: %s", path, e)
        raise StorageError(f"Could not write {path}: {e}") from e
    _log.info("Exported %d sales to %s", n, path)
    return n


def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html"]),
    )


def render_sales_report_html(
    sales: Sequence[Sale],
    summary: SalesSummary,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> str:
    rows = [
        {
            "client": s.client_name,
            "product": s.product_name,
            "sale_type": s.sale_type,
            "date": s.date.isoformat(),
            "status": s.status,
            "amount": _money(s.amount),
            "discount": _money(s.discount),
            "commission": _money(s.commission_value),
            "cost": _money(s.cost),
            "freight": _money(s.freight),
            "ad_cost": _money(s.ad_cost),
            "net_profit": _money(net_profit(s)),
        }
        for s in sales
    ]
    template = _environment().get_template(REPORT_TEMPLATE)
    return template.render(
        app_name=APP_NAME,
        generated_on=date.today().isoformat(),
        date_from=date_from.isoformat() if date_from else None,
        date_to=date_to.isoformat() if date_to else None,
        rows=rows,
        summary={
            "total_sales": _money(summary.total_sales),
            "total_commission": _money(summary.total_commission),
            "total_net_profit": _money(summary.total_net_profit),
            "total_freight": _money(summary.total_freight),
            "sales_count": summary.sales_count,
            "average_ticket": _money(summary.average_ticket),
        },
    )


def write_sales_pdf(html: str, path) -> None:
    # loaded on demand: native pango/cairo deps
    from weasyprint import CSS, HTML

    try:
        HTML(string=html, base_url=str(TEMPLATES_DIR)).write_pdf(
            str(path), stylesheets=[CSS(string=_REPORT_PDF_CSS)]
        )
    except OSError as e:
        _log.error("PDF export to %s failed: %s", path, e)
        raise StorageError(f"Could not write {path}: {e}") from e
    _log.info("Wrote PDF report to %s", path)
