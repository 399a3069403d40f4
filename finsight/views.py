from datetime import date
from typing import Iterable, List, Optional

from finsight.aggregate import sum_by_category, total_by_type
from finsight.categories import EXPENSE_CATEGORIES
from finsight.domain import Budget, DashboardSummary, Transaction
from finsight.functional import Maybe, Nothing, Some
from finsight.months import current_month

RECENT_COUNT = 5

_SORT_KEYS = {
    "date": lambda t: t.date,
    "amount": lambda t: t.amount,
    "description": lambda t: t.description.lower(),
}


def top_category(trans: Iterable[Transaction], tx_type: str = "expense") -> Maybe[tuple[str, float]]:
    totals = sum_by_category(trans, tx_type)
    if not totals:
        return Nothing()
    return Some(max(totals.items(), key=lambda item: item[1]))


def dashboard_summary(trans: Iterable[Transaction], now: date) -> DashboardSummary:
    trans = tuple(trans)
    month = current_month(now)

    total_income = total_by_type(trans, "income")
    total_expenses = total_by_type(trans, "expense")

    return DashboardSummary(
        total_income=total_income,
        total_expenses=total_expenses,
        balance=total_income - total_expenses,
        top_expense_category=top_category(trans),
        recent=tuple(sorted(trans, key=lambda t: t.date, reverse=True)[:RECENT_COUNT]),
        month_income=total_by_type(trans, "income", month),
        month_expenses=total_by_type(trans, "expense", month),
    )


def filter_transactions(
    trans: Iterable[Transaction],
    search: str = "",
    type_filter: str = "all",
    sort_by: str = "date",
    descending: bool = True,
) -> List[Transaction]:
    needle = search.lower()
    matched = [
        t for t in trans
        if (needle in t.description.lower() or needle in t.category.lower())
        and (type_filter == "all" or t.type == type_filter)
    ]
    key = _SORT_KEYS.get(sort_by, _SORT_KEYS["date"])
    return sorted(matched, key=key, reverse=descending)


def available_months(budgets: Iterable[Budget], selected: Optional[str] = None) -> List[str]:
    months = {b.month for b in budgets}
    if selected:
        months.add(selected)
    return sorted(months, reverse=True)


def budget_categories_available(
    budgets: Iterable[Budget], month: str, editing: Optional[Budget] = None
) -> List[str]:
    taken = {b.category for b in budgets if b.month == month}
    return [
        c for c in EXPENSE_CATEGORIES
        if c not in taken or (editing is not None and editing.category == c)
    ]
