from datetime import timedelta

from sqlalchemy.orm import Session

from ledgerboard.core.constants import UNCATEGORIZED_LABEL
from ledgerboard.core.dates import as_utc, business_timezone, utc_now
from ledgerboard.core.errors import NotFoundError
from ledgerboard.core.money import ZERO, format_idr, parse_amount
from ledgerboard.core.periods import (
    day_window,
    month_window,
    normalize_period,
    period_window,
    previous_window,
    weekly_buckets,
)
from ledgerboard.core.stock_rules import display_percentage, stock_status
from ledgerboard.services import record_store
from ledgerboard.services.aggregation_service import (
    filter_window,
    growth_percentage,
    record_value,
    sales_by_category,
    sales_series,
    summarize,
)

# half-open store queries need to reach an inclusive upper bound
_INCLUSIVE_PAD = timedelta(microseconds=1)


def dashboard_metrics(db: Session, user_id: int, now=None, tz=None):
    user = record_store.get_user(db, user_id)
    if user is None:
        raise NotFoundError("User", user_id)

    now = as_utc(now) or utc_now()
    tz = tz or business_timezone()
    today = day_window(now, tz)
    month = month_window(now, tz)

    today_transactions = record_store.get_transactions_in_window(db, user_id, today.start, today.end)
    monthly_transactions = record_store.get_transactions_in_window(db, user_id, month.start, month.end)
    inventory_items = record_store.get_inventory_items(db, user_id)
    low_stock_items = record_store.get_low_stock_items(db, user_id)
    recommendations = record_store.get_recommendations(db, user_id)

    today_sales = summarize(today_transactions)["total_sales"]
    monthly_revenue = summarize(monthly_transactions)["total_sales"]

    return {
        "user": {
            "name": user.name,
            "business_name": user.business_name,
            "first_name": user.first_name,
        },
        "today_sales": today_sales,
        "today_sales_formatted": format_idr(today_sales),
        "total_products": len(inventory_items),
        "low_stock_count": len(low_stock_items),
        "monthly_transaction_count": len(monthly_transactions),
        "monthly_revenue": monthly_revenue,
        "monthly_revenue_formatted": format_idr(monthly_revenue),
        "unread_recommendations": sum(1 for r in recommendations if not r.is_read),
    }


def financial_summary(transactions, period, now, tz):
    """Totals for the selected period against the equally long period before it."""
    current_window = period_window(period, now, tz)
    prior_window = previous_window(current_window)

    current = summarize(filter_window(transactions, current_window))
    previous = summarize(filter_window(transactions, prior_window))

    return {
        "period": normalize_period(period),
        "total_revenue": current["total_sales"],
        "total_expenses": current["total_expenses"],
        "net_profit": current["net_profit"],
        "profit_margin": current["profit_margin"],
        "previous_revenue": previous["total_sales"],
        "previous_expenses": previous["total_expenses"],
        "revenue_growth": growth_percentage(current["total_sales"], previous["total_sales"]),
        "expense_growth": growth_percentage(current["total_expenses"], previous["total_expenses"]),
    }


def inventory_report(items):
    report_items = []
    total_value = ZERO
    low_count = 0
    critical_count = 0

    for item in items:
        current_stock = int(record_value(item, "current_stock") or 0)
        min_stock_level = int(record_value(item, "min_stock_level") or 0)
        price_per_unit = record_value(item, "price_per_unit")
        status = stock_status(current_stock, min_stock_level)
        value = parse_amount(price_per_unit) * current_stock

        if status == "low":
            low_count += 1
        elif status == "critical":
            critical_count += 1
        total_value += value

        report_items.append(
            {
                "id": record_value(item, "id"),
                "name": record_value(item, "name"),
                "category": record_value(item, "category") or UNCATEGORIZED_LABEL,
                "current_stock": current_stock,
                "min_stock_level": min_stock_level,
                "unit": record_value(item, "unit"),
                "price_per_unit": price_per_unit,
                "stock_status": status,
                "stock_percentage": display_percentage(current_stock, min_stock_level),
                "total_value": value,
            }
        )

    return {
        "items": report_items,
        "total_value": total_value,
        "low_stock_count": low_count,
        "critical_stock_count": critical_count,
    }


def business_report(db: Session, user_id: int, period, now=None, tz=None):
    if record_store.get_user(db, user_id) is None:
        raise NotFoundError("User", user_id)

    period = normalize_period(period)
    now = as_utc(now) or utc_now()
    tz = tz or business_timezone()

    current_window = period_window(period, now, tz)
    prior_window = previous_window(current_window)
    buckets = weekly_buckets(now) if period == "month" else []

    fetch_start = min([prior_window.start] + [b.window.start for b in buckets])
    fetch_end = max([current_window.end] + [b.window.end for b in buckets]) + _INCLUSIVE_PAD
    transactions = record_store.get_transactions_in_window(db, user_id, fetch_start, fetch_end)
    current_transactions = filter_window(transactions, current_window)

    return {
        "financial": financial_summary(transactions, period, now, tz),
        "sales_series": sales_series(
            transactions if period == "month" else current_transactions,
            period,
            now,
        ),
        "sales_by_category": sales_by_category(current_transactions),
        "inventory": inventory_report(record_store.get_inventory_items(db, user_id)),
    }


__all__ = ["business_report", "dashboard_metrics", "financial_summary", "inventory_report"]
