import logging
from datetime import date
from typing import Any, Callable, Dict, List, Sequence

from finsight.alerts import generate_alerts
from finsight.charts import budget_comparison_rows, category_breakdown, monthly_series
from finsight.errors import InvalidInput
from finsight.functional import check_unique_budgets
from finsight.insights import generate_insights
from finsight.months import current_month
from finsight.store import Store
from finsight.views import dashboard_summary

logger = logging.getLogger(__name__)

Validator = Callable[[Store, date], Sequence[str]]
Calculator = Callable[[Store, date, Dict[str, Any]], Dict[str, Any]]


class DashboardService:
    """Recomputes every derived view of a store from scratch.

    validators: functions taking (store, now) -> Sequence[str] of problems
    calculators: functions taking (store, now, acc) -> dict (partial results);
    acc holds the results of the calculators that already ran.
    """

    def __init__(self, validators: Sequence[Validator], calculators: Sequence[Calculator]):
        self.validators = validators
        self.calculators = calculators

    def recompute(self, store: Store, now: date) -> Dict[str, Any]:
        report = {
            "month": current_month(now),
            "validation": [],
            "steps": [],
            "result": {},
        }

        for v in self.validators:
            try:
                msgs = v(store, now)
            except InvalidInput as e:
                msgs = [f"{e.field}: {e.message}"]
            report["validation"].append({"validator": getattr(v, "__name__", str(v)), "messages": list(msgs)})

        acc: Dict[str, Any] = {}
        for calc in self.calculators:
            out = calc(store, now, acc)
            report["steps"].append({"calculator": getattr(calc, "__name__", str(calc)), "output": out})
            acc.update(out)

        problems = sum(len(v["messages"]) for v in report["validation"])
        logger.debug("Recomputed %s: %d step(s), %d validation message(s)",
                     report["month"], len(report["steps"]), problems)
        report["result"] = acc
        return report


def validate_unique_budgets(store: Store, now: date) -> List[str]:
    result = check_unique_budgets(store.budgets)
    return [result.get_error()["message"]] if result.is_left() else []


def calc_alerts(store: Store, now: date, acc: Dict[str, Any]) -> Dict[str, Any]:
    return {"alerts": generate_alerts(store.transactions, store.budgets, now, store.dismissed_alerts)}


def calc_insights(store: Store, now: date, acc: Dict[str, Any]) -> Dict[str, Any]:
    return {"insights": generate_insights(store.transactions, store.budgets, now)}


def calc_summary(store: Store, now: date, acc: Dict[str, Any]) -> Dict[str, Any]:
    return {"summary": dashboard_summary(store.transactions, now)}


def calc_charts(store: Store, now: date, acc: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "monthly_series": monthly_series(store.transactions),
        "expense_breakdown": category_breakdown(store.transactions, "expense"),
        "income_breakdown": category_breakdown(store.transactions, "income"),
        "budget_rows": budget_comparison_rows(store.transactions, store.budgets, current_month(now)),
    }


def default_service() -> DashboardService:
    return DashboardService(
        validators=[validate_unique_budgets],
        calculators=[calc_alerts, calc_insights, calc_summary, calc_charts],
    )
