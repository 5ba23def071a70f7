"""
Core business logic services.

Layer-pure functions that depend only on:
- stockbook/core/entities/*
- stockbook/core/exceptions.py

NO infrastructure imports. All inputs are passed in already loaded.
"""

from stockbook.core.services.customer_analytics import (
    UNKNOWN_PHONE,
    compute_customer_analytics,
    filter_customer_analytics,
    get_visit_frequency,
    sort_customer_analytics,
)
from stockbook.core.services.inventory_analytics import (
    calculate_average_margin,
    calculate_inventory_value,
    calculate_total_profit,
    calculate_total_revenue,
    category_distribution,
    compute_inventory_summary,
    count_critical_stock,
    count_low_stock,
    count_out_of_stock,
)
from stockbook.core.services.invoice_totals import (
    DEFAULT_TAX_RATE,
    InvoiceTotals,
    compute_invoice_totals,
)
from stockbook.core.services.product_catalog import (
    ALL_CATEGORIES,
    DEFAULT_CATEGORIES,
    filter_by_category,
    find_by_code,
    recent_products,
    search_products,
    sort_products,
    top_selling_products,
)
from stockbook.core.services.stock_classifier import (
    classify_stock,
    is_critical_or_worse,
    products_in_class,
)
from stockbook.core.services.transaction_history import get_product_transactions
from stockbook.core.services.trend_bucketer import compute_trend, week_start

__all__ = [
    # Stock classifier
    "classify_stock",
    "is_critical_or_worse",
    "products_in_class",
    # Inventory aggregator
    "compute_inventory_summary",
    "calculate_inventory_value",
    "calculate_total_revenue",
    "calculate_total_profit",
    "calculate_average_margin",
    "count_low_stock",
    "count_critical_stock",
    "count_out_of_stock",
    "category_distribution",
    # Catalog helpers
    "ALL_CATEGORIES",
    "DEFAULT_CATEGORIES",
    "search_products",
    "filter_by_category",
    "find_by_code",
    "sort_products",
    "top_selling_products",
    "recent_products",
    # Customer analytics
    "UNKNOWN_PHONE",
    "compute_customer_analytics",
    "get_visit_frequency",
    "sort_customer_analytics",
    "filter_customer_analytics",
    # Trend bucketer
    "compute_trend",
    "week_start",
    # Transaction history
    "get_product_transactions",
    # Invoice arithmetic
    "DEFAULT_TAX_RATE",
    "InvoiceTotals",
    "compute_invoice_totals",
]
