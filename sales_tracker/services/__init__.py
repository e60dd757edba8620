"""
Pure-Python business logic. Nothing in here imports Qt.

aggregation         - date filter, summary, per-product totals, repurchase list, search
channels            - commission / ad-cost rules per sale channel
sale_recording      - draft validation + the sale write steps
inventory_valuation - product registration, unit cost, stock adjustment
leads               - lead creation, status, conversion prefill
report_export       - CSV / HTML / PDF sales reports
"""
