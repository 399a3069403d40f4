from datetime import date
from typing import Callable, Iterable, List

from finsight.domain import Budget, Insight, Transaction
from finsight.evaluate import evaluate
from finsight.memo import month_expense_by_category, month_expense_total
from finsight.months import current_month, previous_month

MAX_INSIGHTS = 6

GOOD_CONTROL_PCT = 50
TREND_INCREASE_PCT = 20
TREND_DECREASE_PCT = -10
CONCENTRATION_PCT = 40
MAX_MISSING_BUDGETS = 3


def _budget_status(trans, budgets, month) -> List[Insight]:
    out = []
    for budget in budgets:
        if budget.month != month:
            continue
        ev = evaluate(budget, trans)
        if ev.status == "over":
            over = ev.actual_spent - ev.budget_amount
            out.append(Insight(
                kind="warning",
                title="Budget Exceeded",
                description=f"You've spent ${over:.2f} over your {budget.category} budget this month.",
                category=budget.category,
                amount=over,
            ))
        elif ev.status == "on-track":
            left = ev.budget_amount - ev.actual_spent
            out.append(Insight(
                kind="warning",
                title="Approaching Budget Limit",
                description=(
                    f"You've used {ev.percentage:.1f}% of your {budget.category} budget. "
                    f"${left:.2f} remaining."
                ),
                category=budget.category,
                amount=left,
            ))
        elif ev.percentage < GOOD_CONTROL_PCT and ev.actual_spent > 0:
            out.append(Insight(
                kind="success",
                title="Great Spending Control",
                description=(
                    f"You're doing well with your {budget.category} budget! "
                    f"Only {ev.percentage:.1f}% used so far."
                ),
                category=budget.category,
            ))
    return out


def _trend(trans, budgets, month) -> List[Insight]:
    current = month_expense_total(trans, month)
    previous = month_expense_total(trans, previous_month(month))
    if previous <= 0:
        return []

    change = (current - previous) / previous * 100
    if change > TREND_INCREASE_PCT:
        return [Insight(
            kind="warning",
            title="Spending Increased Significantly",
            description=(
                f"Your spending is {change:.1f}% higher than last month. "
                "Consider reviewing your expenses."
            ),
            amount=current - previous,
        )]
    if change < TREND_DECREASE_PCT:
        return [Insight(
            kind="success",
            title="Spending Decreased",
            description=f"Great job! Your spending is {abs(change):.1f}% lower than last month.",
            amount=abs(current - previous),
        )]
    return []


def _concentration(trans, budgets, month) -> List[Insight]:
    totals = month_expense_by_category(trans, month)
    current = sum(total for _, total in totals)
    if not totals or current <= 0:
        return []

    # max() keeps the first category on ties
    name, top = max(totals, key=lambda item: item[1])
    share = top / current * 100
    if share > CONCENTRATION_PCT:
        return [Insight(
            kind="info",
            title="High Category Concentration",
            description=(
                f"{share:.1f}% of your spending is in {name}. "
                "Consider diversifying your expenses."
            ),
            category=name,
        )]
    return []


def _missing_budgets(trans, budgets, month) -> List[Insight]:
    budgeted = {b.category for b in budgets if b.month == month}
    missing = [name for name, _ in month_expense_by_category(trans, month) if name not in budgeted]
    if 0 < len(missing) <= MAX_MISSING_BUDGETS:
        return [Insight(
            kind="info",
            title="Missing Budgets",
            description=f"Consider setting budgets for: {', '.join(missing)}.",
        )]
    return []


RULES: tuple[Callable[..., List[Insight]], ...] = (
    _budget_status,
    _trend,
    _concentration,
    _missing_budgets,
)


def generate_insights(
    trans: Iterable[Transaction], budgets: Iterable[Budget], now: date
) -> List[Insight]:
    """Narrative observations for the month containing ``now``.

    Rules run in a fixed order (budget health, trend, concentration,
    missing budgets). Once MAX_INSIGHTS are collected no further rule
    starts; a rule that already started contributes all of its results
    before the list is cut to MAX_INSIGHTS.
    """
    month = current_month(now)
    trans = tuple(trans)
    budgets = tuple(budgets)

    insights: List[Insight] = []
    for rule in RULES:
        if len(insights) >= MAX_INSIGHTS:
            break
        insights.extend(rule(trans, budgets, month))
    return insights[:MAX_INSIGHTS]
