import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple, Union

from finsight.domain import (
    Budget,
    Transaction,
    budget_from_record,
    to_record,
    transaction_from_record,
)
from finsight.errors import InvalidInput
from finsight.functional import (
    Either,
    Left,
    Right,
    check_unique_budgets,
    validate_budget,
    validate_transaction,
)

logger = logging.getLogger(__name__)

TRANSACTIONS_KEY = "transactions"
BUDGETS_KEY = "budgets"
DISMISSED_KEY = "dismissedAlerts"


@dataclass(frozen=True)
class Store:
    """Everything the host persists between sessions."""

    transactions: Tuple[Transaction, ...] = ()
    budgets: Tuple[Budget, ...] = ()
    dismissed_alerts: Tuple[str, ...] = ()


def _decode(records, decode, validate, field: str) -> Either[dict, tuple]:
    if not isinstance(records, list):
        return Left(InvalidInput(field, f"{field} must be a JSON array", records).to_dict())

    items = []
    for index, record in enumerate(records):
        try:
            item = decode(record)
        except (KeyError, TypeError) as e:
            return Left(InvalidInput(f"{field}[{index}]", f"Malformed record: {e}", record).to_dict())
        checked = validate(item)
        if checked.is_left():
            return checked
        items.append(item)
    return Right(tuple(items))


def store_from_dict(data: dict) -> Either[dict, Store]:
    if not isinstance(data, dict):
        return Left(InvalidInput("store", "Store must be a JSON object", None).to_dict())

    trans = _decode(data.get(TRANSACTIONS_KEY, []), transaction_from_record, validate_transaction, TRANSACTIONS_KEY)
    if trans.is_left():
        return trans

    budgets = _decode(data.get(BUDGETS_KEY, []), budget_from_record, validate_budget, BUDGETS_KEY)
    if budgets.is_left():
        return budgets

    dismissed = data.get(DISMISSED_KEY, [])
    if not isinstance(dismissed, list):
        return Left(InvalidInput(DISMISSED_KEY, f"{DISMISSED_KEY} must be a JSON array", dismissed).to_dict())
    dismissed = tuple(str(a) for a in dismissed)

    return budgets.bind(check_unique_budgets).bind(
        lambda ok: Right(Store(
            transactions=trans.get_or_else(()),
            budgets=ok,
            dismissed_alerts=dismissed,
        ))
    )


def store_to_dict(store: Store) -> dict:
    return {
        TRANSACTIONS_KEY: [to_record(t) for t in store.transactions],
        BUDGETS_KEY: [to_record(b) for b in store.budgets],
        DISMISSED_KEY: list(store.dismissed_alerts),
    }


def load_store(path: Union[str, Path]) -> Either[dict, Store]:
    path = Path(path)
    if not path.exists():
        logger.info("No store at %s, starting empty", path)
        return Right(Store())

    with path.open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error("Store %s is not readable JSON: %s", path, e)
            return Left(InvalidInput("store", f"Invalid JSON: {e}", str(path)).to_dict())

    result = store_from_dict(data)
    if result.is_left():
        logger.error("Rejected store %s: %s", path, result.get_error()["message"])
    else:
        store = result.get_or_else(Store())
        logger.info(
            "Loaded %d transaction(s) and %d budget(s) from %s",
            len(store.transactions), len(store.budgets), path,
        )
    return result


def save_store(store: Store, path: Union[str, Path]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(store_to_dict(store), f, indent=2)
    logger.debug("Saved store to %s", path)
