from typing import Tuple
from uuid import uuid4

from finsight.domain import Budget, Transaction
from finsight.functional import Either, Right, validate_budget


def new_id() -> str:
    return uuid4().hex


def add_transaction(
    trans: Tuple[Transaction, ...], t: Transaction
) -> Tuple[Transaction, ...]:
    # newest first, as the transaction list shows them
    return (t,) + trans


def replace_transaction(
    trans: Tuple[Transaction, ...], t: Transaction
) -> Tuple[Transaction, ...]:
    return tuple(t if old.id == t.id else old for old in trans)


def delete_transaction(
    trans: Tuple[Transaction, ...], tid: str
) -> Tuple[Transaction, ...]:
    return tuple(filter(lambda t: t.id != tid, trans))


def add_budget(
    budgets: Tuple[Budget, ...], b: Budget
) -> Either[dict, Tuple[Budget, ...]]:
    return validate_budget(b, budgets).bind(lambda ok: Right((ok,) + budgets))


def replace_budget(
    budgets: Tuple[Budget, ...], b: Budget
) -> Either[dict, Tuple[Budget, ...]]:
    return validate_budget(b, budgets).bind(
        lambda ok: Right(tuple(ok if old.id == ok.id else old for old in budgets))
    )


def delete_budget(budgets: Tuple[Budget, ...], bid: str) -> Tuple[Budget, ...]:
    return tuple(filter(lambda b: b.id != bid, budgets))


def dismiss_alert(dismissed: Tuple[str, ...], alert_id: str) -> Tuple[str, ...]:
    if alert_id in dismissed:
        return dismissed
    return dismissed + (alert_id,)
