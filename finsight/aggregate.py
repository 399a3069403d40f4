from collections import defaultdict
from typing import Callable, Dict, Iterable, Iterator, List, Optional

from finsight.domain import MonthlyTotals, Transaction
from finsight.months import month_key

Predicate = Callable[[Transaction], bool]


def by_type(tx_type: str) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return t.type == tx_type

    return _filter


def by_month(month: str) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return month_key(t.date) == month

    return _filter


def by_category(category: str) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return t.category == category

    return _filter


def iter_transactions(trans: Iterable[Transaction], *preds: Predicate) -> Iterator[Transaction]:
    for t in trans:
        if all(p(t) for p in preds):
            yield t


def sum_by_category(
    trans: Iterable[Transaction], tx_type: str, month: Optional[str] = None
) -> Dict[str, float]:
    """Total amount per category for one transaction type.

    Keys keep the order in which categories first appear.
    """
    preds = [by_type(tx_type)]
    if month is not None:
        preds.append(by_month(month))

    totals: Dict[str, float] = {}
    for t in iter_transactions(trans, *preds):
        totals[t.category] = totals.get(t.category, 0) + t.amount
    return totals


def total_by_type(
    trans: Iterable[Transaction], tx_type: str, month: Optional[str] = None
) -> float:
    return sum(sum_by_category(trans, tx_type, month).values())


def sum_by_month(trans: Iterable[Transaction]) -> List[MonthlyTotals]:
    income: Dict[str, float] = defaultdict(float)
    expense: Dict[str, float] = defaultdict(float)

    for t in trans:
        month = month_key(t.date)
        if t.type == "expense":
            expense[month] += t.amount
        else:
            income[month] += t.amount

    months = sorted(set(income) | set(expense))
    return [MonthlyTotals(month=m, income=income[m], expense=expense[m]) for m in months]
