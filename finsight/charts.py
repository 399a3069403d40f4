from typing import Iterable, List

from finsight.aggregate import sum_by_category, sum_by_month
from finsight.categories import CATEGORY_COLORS, registry_color
from finsight.domain import Budget, BudgetEvaluation, CategorySlice, MonthlyTotals, Transaction
from finsight.evaluate import evaluate_month
from finsight.months import parse_month

SERIES_MONTHS = 6


def monthly_series(trans: Iterable[Transaction], months: int = SERIES_MONTHS) -> List[MonthlyTotals]:
    series = sum_by_month(trans)
    return series[-months:] if months > 0 else []


def category_breakdown(
    trans: Iterable[Transaction], tx_type: str, stable_colors: bool = False
) -> List[CategorySlice]:
    """Category totals for one type, largest first.

    By default the palette is cycled over the order in which categories
    first appear, so a category's colour can change between renders.
    ``stable_colors`` keys the colour on the category name instead.
    """
    totals = sum_by_category(trans, tx_type)
    slices = [
        CategorySlice(
            name=name,
            value=value,
            color=registry_color(name) if stable_colors else CATEGORY_COLORS[i % len(CATEGORY_COLORS)],
        )
        for i, (name, value) in enumerate(totals.items())
    ]
    return sorted(slices, key=lambda s: s.value, reverse=True)


def budget_comparison_rows(
    trans: Iterable[Transaction], budgets: Iterable[Budget], month: str
) -> List[BudgetEvaluation]:
    rows = evaluate_month(budgets, trans, parse_month(month))
    return sorted(rows, key=lambda r: r.budget_amount, reverse=True)
