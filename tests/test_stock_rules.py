import unittest
from decimal import Decimal

from ledgerboard.core.stock_rules import display_percentage, is_low_stock, stock_percentage, stock_status


class StockRulesTest(unittest.TestCase):
    def test_status_boundaries(self):
        cases = [
            (0, 20, "out"),
            (5, 20, "critical"),
            (6, 20, "low"),
            (10, 20, "low"),
            (11, 20, "normal"),
            (15, 20, "normal"),
            (20, 20, "normal"),
        ]
        for current, minimum, expected in cases:
            with self.subTest(current=current, minimum=minimum):
                self.assertEqual(stock_status(current, minimum), expected)

    def test_percentage_is_exact(self):
        self.assertEqual(stock_percentage(5, 20), Decimal(25))
        self.assertEqual(stock_percentage(15, 20), Decimal(75))

    def test_zero_minimum_is_normal(self):
        self.assertEqual(stock_percentage(3, 0), Decimal(100))
        self.assertEqual(stock_status(3, 0), "normal")

    def test_zero_stock_is_out_even_without_minimum(self):
        self.assertEqual(stock_status(0, 0), "out")

    def test_low_stock_predicate_is_strict(self):
        self.assertTrue(is_low_stock(4, 5))
        self.assertFalse(is_low_stock(5, 5))
        self.assertFalse(is_low_stock(0, 0))
        # exactly at minimum is not an alert, yet half of it already counts as "low"
        self.assertEqual(stock_status(5, 10), "low")
        self.assertFalse(is_low_stock(10, 10))

    def test_display_percentage_caps_at_hundred(self):
        self.assertEqual(display_percentage(50, 15), Decimal(100))
        self.assertEqual(display_percentage(3, 12), Decimal(25))


if __name__ == "__main__":
    unittest.main()
