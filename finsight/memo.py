from functools import lru_cache

from finsight.aggregate import sum_by_category
from finsight.domain import Transaction


@lru_cache(maxsize=128)
def month_expense_by_category(
    transactions: tuple[Transaction, ...], month: str
) -> tuple[tuple[str, float], ...]:
    # hashable snapshot so repeated recomputes over the same tuple are free
    return tuple(sum_by_category(transactions, "expense", month).items())


def month_expense_total(transactions: tuple[Transaction, ...], month: str) -> float:
    return sum(total for _, total in month_expense_by_category(transactions, month))
