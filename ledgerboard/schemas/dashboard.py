from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel


class DashboardUser(BaseModel):
    name: str
    business_name: Optional[str] = None
    first_name: str


class DashboardMetrics(BaseModel):
    user: DashboardUser
    today_sales: Decimal
    today_sales_formatted: str
    total_products: int
    low_stock_count: int
    monthly_transaction_count: int
    monthly_revenue: Decimal
    monthly_revenue_formatted: str
    unread_recommendations: int


class FinancialSummary(BaseModel):
    period: str
    total_revenue: Decimal
    total_expenses: Decimal
    net_profit: Decimal
    profit_margin: Decimal
    previous_revenue: Decimal
    previous_expenses: Decimal
    revenue_growth: Decimal
    expense_growth: Decimal


class SalesBucket(BaseModel):
    period: str
    sales: Decimal
    purchases: Decimal
    expenses: Decimal


class CategorySales(BaseModel):
    name: str
    value: Decimal


class InventoryReportItem(BaseModel):
    id: int
    name: str
    category: str
    current_stock: int
    min_stock_level: int
    unit: str
    price_per_unit: Optional[Decimal] = None
    stock_status: str
    stock_percentage: Decimal
    total_value: Decimal


class InventoryReport(BaseModel):
    items: List[InventoryReportItem]
    total_value: Decimal
    low_stock_count: int
    critical_stock_count: int


class BusinessReport(BaseModel):
    financial: FinancialSummary
    sales_series: List[SalesBucket]
    sales_by_category: List[CategorySales]
    inventory: InventoryReport
