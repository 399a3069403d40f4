import math
from typing import Iterable, List

from finsight.aggregate import by_category, by_month, by_type, iter_transactions
from finsight.domain import Budget, BudgetEvaluation, Transaction

OVER_BUDGET_PCT = 100
ON_TRACK_PCT = 80


def classify(percentage: float) -> str:
    if percentage > OVER_BUDGET_PCT:
        return "over"
    if percentage >= ON_TRACK_PCT:
        return "on-track"
    return "under"


def percentage_of(actual: float, budget_amount: float) -> float:
    # a zero (or broken) budget reads as 0%, never inf/nan
    if not budget_amount > 0:
        return 0.0
    percentage = actual / budget_amount * 100
    return percentage if math.isfinite(percentage) else 0.0


def evaluate(budget: Budget, trans: Iterable[Transaction]) -> BudgetEvaluation:
    spent = sum(
        t.amount
        for t in iter_transactions(
            trans, by_type("expense"), by_category(budget.category), by_month(budget.month)
        )
    )
    percentage = percentage_of(spent, budget.amount)

    return BudgetEvaluation(
        category=budget.category,
        month=budget.month,
        budget_amount=budget.amount,
        actual_spent=spent,
        remaining=max(0, budget.amount - spent),
        percentage=percentage,
        status=classify(percentage),
    )


def evaluate_month(
    budgets: Iterable[Budget], trans: Iterable[Transaction], month: str
) -> List[BudgetEvaluation]:
    trans = tuple(trans)
    return [evaluate(b, trans) for b in budgets if b.month == month]
