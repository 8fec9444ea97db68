from decimal import Decimal

from ledgerboard.core.constants import EXPENSE_TYPES, TOTAL_BUCKET_LABEL, UNCATEGORIZED_LABEL
from ledgerboard.core.money import ZERO, parse_amount, quantize_percent
from ledgerboard.core.periods import normalize_period, weekly_buckets

_HUNDRED = Decimal(100)


def record_value(record, field):
    if isinstance(record, dict):
        return record.get(field)
    return getattr(record, field, None)


def _sum_amounts(transactions, types):
    total = ZERO
    for transaction in transactions:
        if record_value(transaction, "type") in types:
            total += parse_amount(record_value(transaction, "amount"))
    return total


def filter_window(transactions, window):
    return [t for t in transactions if window.contains(record_value(t, "date"))]


def profit_margin(total_sales, net_profit):
    if not total_sales:
        return ZERO
    return quantize_percent(Decimal(net_profit) / Decimal(total_sales) * _HUNDRED)


def growth_percentage(current, previous):
    # no positive base to grow from
    if previous is None or Decimal(previous) <= 0:
        return ZERO
    return quantize_percent((Decimal(current) - Decimal(previous)) / Decimal(previous) * _HUNDRED)


def summarize(transactions):
    total_sales = _sum_amounts(transactions, ("sale",))
    total_expenses = _sum_amounts(transactions, EXPENSE_TYPES)
    net_profit = total_sales - total_expenses
    return {
        "total_sales": total_sales,
        "total_expenses": total_expenses,
        "net_profit": net_profit,
        "profit_margin": profit_margin(total_sales, net_profit),
    }


def _bucket_totals(label, transactions):
    return {
        "period": label,
        "sales": _sum_amounts(transactions, ("sale",)),
        "purchases": _sum_amounts(transactions, ("purchase",)),
        "expenses": _sum_amounts(transactions, ("expense",)),
    }


def sales_series(transactions, period, now):
    """Chart buckets: four sliding weeks for "month", one "Total" bucket otherwise."""
    period = normalize_period(period)
    if period != "month":
        return [_bucket_totals(TOTAL_BUCKET_LABEL, transactions)]
    return [
        _bucket_totals(bucket.label, filter_window(transactions, bucket.window))
        for bucket in weekly_buckets(now)
    ]


def sales_by_category(transactions):
    totals = {}
    for transaction in transactions:
        if record_value(transaction, "type") != "sale":
            continue
        category = record_value(transaction, "category") or UNCATEGORIZED_LABEL
        totals[category] = totals.get(category, ZERO) + parse_amount(record_value(transaction, "amount"))
    # stable output independent of input order
    return [
        {"name": name, "value": value}
        for name, value in sorted(totals.items(), key=lambda entry: (-entry[1], entry[0]))
    ]


__all__ = [
    "filter_window",
    "growth_percentage",
    "profit_margin",
    "record_value",
    "sales_by_category",
    "sales_series",
    "summarize",
]
