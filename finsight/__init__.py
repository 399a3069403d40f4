from finsight.aggregate import sum_by_category, sum_by_month, total_by_type
from finsight.alerts import alert_id, generate_alerts, has_active_alerts
from finsight.charts import budget_comparison_rows, category_breakdown, monthly_series
from finsight.domain import (
    Alert,
    Budget,
    BudgetEvaluation,
    CategorySlice,
    DashboardSummary,
    Insight,
    MonthlyTotals,
    Transaction,
)
from finsight.errors import InvalidInput
from finsight.evaluate import evaluate, evaluate_month
from finsight.insights import generate_insights
from finsight.store import Store, load_store, save_store

__all__ = [
    "Alert", "Budget", "BudgetEvaluation", "CategorySlice", "DashboardSummary",
    "Insight", "InvalidInput", "MonthlyTotals", "Store", "Transaction",
    "alert_id", "budget_comparison_rows", "category_breakdown", "evaluate",
    "evaluate_month", "generate_alerts", "generate_insights", "has_active_alerts",
    "load_store", "monthly_series", "save_store", "sum_by_category", "sum_by_month",
    "total_by_type",
]
