import logging
from datetime import date
from typing import Iterable, List

from finsight.domain import Alert, Budget, Transaction
from finsight.evaluate import OVER_BUDGET_PCT, evaluate
from finsight.months import current_month

logger = logging.getLogger(__name__)

WARNING_PCT = 90

CRITICAL = "critical"
WARNING = "warning"

_ID_SUFFIX = {CRITICAL: "exceeded", WARNING: "warning"}


def alert_id(category: str, month: str, severity: str) -> str:
    return f"{category}-{month}-{_ID_SUFFIX[severity]}"


def generate_alerts(
    trans: Iterable[Transaction],
    budgets: Iterable[Budget],
    now: date,
    dismissed_ids: Iterable[str] = (),
) -> List[Alert]:
    """Threshold alerts for the budgets of the month containing ``now``.

    Critical (over 100%) alerts come first, then warnings (90-100%), each
    group by descending percentage. Alert ids depend only on category,
    month and severity, so a dismissed warning does not hide a later
    critical alert for the same budget.
    """
    month = current_month(now)
    trans = tuple(trans)
    dismissed = set(dismissed_ids)

    alerts: List[Alert] = []
    skipped = 0
    for budget in budgets:
        if budget.month != month:
            continue
        ev = evaluate(budget, trans)

        if ev.percentage > OVER_BUDGET_PCT:
            severity = CRITICAL
            over_amount = ev.actual_spent - ev.budget_amount
        elif ev.percentage >= WARNING_PCT:
            severity = WARNING
            over_amount = 0
        else:
            continue

        aid = alert_id(budget.category, budget.month, severity)
        if aid in dismissed:
            skipped += 1
            continue

        alerts.append(Alert(
            id=aid,
            severity=severity,
            category=budget.category,
            month=budget.month,
            budget_amount=ev.budget_amount,
            actual_spent=ev.actual_spent,
            over_amount=over_amount,
            percentage=ev.percentage,
        ))

    logger.debug("%d alert(s) for %s, %d dismissed", len(alerts), month, skipped)
    return sorted(alerts, key=lambda a: (a.severity != CRITICAL, -a.percentage))


def has_active_alerts(
    trans: Iterable[Transaction],
    budgets: Iterable[Budget],
    now: date,
    dismissed_ids: Iterable[str] = (),
) -> bool:
    return bool(generate_alerts(trans, budgets, now, dismissed_ids))
