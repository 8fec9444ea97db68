from decimal import Decimal

from ledgerboard.core.constants import CRITICAL_STOCK_PERCENT, LOW_STOCK_PERCENT

_FULL = Decimal(100)


def _as_int(value):
    if value is None:
        return 0
    return int(value)


def stock_percentage(current_stock, min_stock_level):
    current = _as_int(current_stock)
    minimum = _as_int(min_stock_level)
    # no minimum configured: nothing to measure against
    if minimum <= 0:
        return _FULL
    return Decimal(current) * _FULL / Decimal(minimum)


def stock_status(current_stock, min_stock_level):
    current = _as_int(current_stock)
    if current <= 0:
        return "out"
    percentage = stock_percentage(current, min_stock_level)
    if percentage <= CRITICAL_STOCK_PERCENT:
        return "critical"
    if percentage <= LOW_STOCK_PERCENT:
        return "low"
    return "normal"


def is_low_stock(current_stock, min_stock_level):
    """Dashboard alert predicate; strictly below the minimum."""
    return _as_int(current_stock) < _as_int(min_stock_level)


def display_percentage(current_stock, min_stock_level):
    return min(stock_percentage(current_stock, min_stock_level), _FULL)


__all__ = ["display_percentage", "is_low_stock", "stock_percentage", "stock_status"]
