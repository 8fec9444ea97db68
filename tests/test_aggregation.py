import random
import unittest
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from ledgerboard.services.aggregation_service import (
    growth_percentage,
    profit_margin,
    sales_by_category,
    sales_series,
    summarize,
)
from ledgerboard.services.dashboard_service import financial_summary

UTC = timezone.utc


def _tx(tx_type, amount, date=None, category=None):
    return {"type": tx_type, "amount": amount, "date": date, "category": category}


class SummarizeTest(unittest.TestCase):
    def test_sale_and_purchase_scenario(self):
        summary = summarize([_tx("sale", "45000"), _tx("purchase", "750000")])
        self.assertEqual(summary["total_sales"], Decimal("45000"))
        self.assertEqual(summary["total_expenses"], Decimal("750000"))
        self.assertEqual(summary["net_profit"], Decimal("-705000"))
        self.assertEqual(summary["profit_margin"], Decimal("-1566.67"))

    def test_margin_without_sales_is_zero(self):
        summary = summarize([_tx("expense", "1000")])
        self.assertEqual(summary["profit_margin"], Decimal("0"))
        self.assertEqual(profit_margin(Decimal("0"), Decimal("-5")), Decimal("0"))

    def test_decimal_amounts_do_not_drift(self):
        summary = summarize([_tx("sale", "0.10"), _tx("sale", "0.20")])
        self.assertEqual(summary["total_sales"], Decimal("0.30"))

    def test_unparseable_amount_counts_as_zero(self):
        summary = summarize([_tx("sale", "abc"), _tx("sale", "10")])
        self.assertEqual(summary["total_sales"], Decimal("10"))

    def test_order_independent(self):
        transactions = [
            _tx("sale", "125000"),
            _tx("sale", "350000.50"),
            _tx("purchase", "850000"),
            _tx("expense", "150000.25"),
            _tx("sale", "200000"),
        ]
        expected = summarize(transactions)
        shuffled = list(transactions)
        for seed in range(5):
            random.Random(seed).shuffle(shuffled)
            self.assertEqual(summarize(shuffled), expected)
        self.assertEqual(summarize(transactions), expected)

    def test_growth(self):
        self.assertEqual(growth_percentage(Decimal("150"), Decimal("100")), Decimal("50.00"))
        self.assertEqual(growth_percentage(Decimal("150"), Decimal("0")), Decimal("0"))
        self.assertEqual(growth_percentage(Decimal("50"), Decimal("200")), Decimal("-75.00"))

    def test_growth_needs_positive_base(self):
        self.assertEqual(growth_percentage(Decimal("100"), Decimal("-50")), Decimal("0"))
        self.assertEqual(growth_percentage(Decimal("100"), None), Decimal("0"))


class FinancialSummaryTest(unittest.TestCase):
    def test_week_against_previous_week(self):
        now = datetime(2024, 5, 15, 12, 0, tzinfo=UTC)
        transactions = [
            _tx("sale", "200", datetime(2024, 5, 10, tzinfo=UTC)),
            _tx("expense", "50", datetime(2024, 5, 12, tzinfo=UTC)),
            _tx("sale", "100", datetime(2024, 5, 3, tzinfo=UTC)),
            _tx("purchase", "25", datetime(2024, 5, 5, tzinfo=UTC)),
            _tx("sale", "999", datetime(2024, 4, 1, tzinfo=UTC)),
        ]
        summary = financial_summary(transactions, "week", now, UTC)

        self.assertEqual(summary["period"], "week")
        self.assertEqual(summary["total_revenue"], Decimal("200"))
        self.assertEqual(summary["total_expenses"], Decimal("50"))
        self.assertEqual(summary["net_profit"], Decimal("150"))
        self.assertEqual(summary["profit_margin"], Decimal("75.00"))
        self.assertEqual(summary["previous_revenue"], Decimal("100"))
        self.assertEqual(summary["previous_expenses"], Decimal("25"))
        self.assertEqual(summary["revenue_growth"], Decimal("100.00"))
        self.assertEqual(summary["expense_growth"], Decimal("100.00"))

    def test_no_previous_activity_means_zero_growth(self):
        now = datetime(2024, 5, 15, 12, 0, tzinfo=UTC)
        transactions = [_tx("sale", "200", now - timedelta(hours=1))]
        summary = financial_summary(transactions, "today", now, UTC)
        self.assertEqual(summary["total_revenue"], Decimal("200"))
        self.assertEqual(summary["revenue_growth"], Decimal("0"))


class SalesSeriesTest(unittest.TestCase):
    def test_month_uses_sliding_weeks(self):
        now = datetime(2024, 5, 29, 12, 0, tzinfo=UTC)
        transactions = [
            _tx("sale", "100", now),
            _tx("purchase", "40", now - timedelta(days=2)),
            _tx("expense", "10", now - timedelta(days=20)),
            _tx("sale", "500", now - timedelta(days=30)),
        ]
        series = sales_series(transactions, "month", now)

        self.assertEqual([b["period"] for b in series], ["4", "3", "2", "1"])
        by_label = {b["period"]: b for b in series}
        self.assertEqual(by_label["1"]["sales"], Decimal("100"))
        self.assertEqual(by_label["2"]["purchases"], Decimal("40"))
        self.assertEqual(by_label["4"]["expenses"], Decimal("10"))
        self.assertEqual(sum(b["sales"] for b in series), Decimal("100"))

    def test_other_periods_yield_single_total(self):
        now = datetime(2024, 5, 29, 12, 0, tzinfo=UTC)
        transactions = [
            _tx("sale", "100", now),
            _tx("purchase", "40", now),
            _tx("expense", "10", now),
        ]
        series = sales_series(transactions, "week", now)
        self.assertEqual(
            series,
            [
                {
                    "period": "Total",
                    "sales": Decimal("100"),
                    "purchases": Decimal("40"),
                    "expenses": Decimal("10"),
                }
            ],
        )


class SalesByCategoryTest(unittest.TestCase):
    def test_groups_sales_with_fallback_label(self):
        transactions = [
            _tx("sale", "125000", category="Minuman"),
            _tx("sale", "200000", category="Minuman"),
            _tx("sale", "50000"),
            _tx("purchase", "999999", category="Minuman"),
        ]
        result = sales_by_category(transactions)
        self.assertEqual(
            result,
            [
                {"name": "Minuman", "value": Decimal("325000")},
                {"name": "Lainnya", "value": Decimal("50000")},
            ],
        )


if __name__ == "__main__":
    unittest.main()
