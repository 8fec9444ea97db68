TRANSACTION_TYPES = ("sale", "purchase", "expense")
EXPENSE_TYPES = ("purchase", "expense")

STOCK_STATUSES = ("out", "critical", "low", "normal")
CRITICAL_STOCK_PERCENT = 25
LOW_STOCK_PERCENT = 50

RECOMMENDATION_TYPES = ("restock", "sales_opportunity", "optimization")
RECOMMENDATION_PRIORITIES = ("low", "medium", "high", "critical")

REPORT_PERIODS = ("today", "week", "month", "year")
DEFAULT_REPORT_PERIOD = "month"
WEEKLY_BUCKETS = 4
TOTAL_BUCKET_LABEL = "Total"

UNCATEGORIZED_LABEL = "Lainnya"
DEFAULT_UNIT = "pcs"
