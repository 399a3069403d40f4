import math
from abc import ABC, abstractmethod
from typing import Callable, Generic, Iterable, Optional, TypeVar

from finsight.categories import EXPENSE_CATEGORIES, TRANSACTION_TYPES, is_known_category
from finsight.domain import Budget, Transaction
from finsight.errors import InvalidInput
from finsight.months import month_key, parse_month

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')


class Maybe(Generic[T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_some(self) -> bool:
        pass

    def is_none(self) -> bool:
        return not self.is_some()


class Some(Maybe[T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Some(f(self._value))

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_some(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Some({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Some) and self._value == other._value


class Nothing(Maybe[T]):

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Nothing()

    def get_or_else(self, default: T) -> T:
        return default

    def is_some(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Nothing()"

    def __eq__(self, other) -> bool:
        return isinstance(other, Nothing)


class Either(Generic[E, T], ABC):

    @abstractmethod
    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_right(self) -> bool:
        pass

    def is_left(self) -> bool:
        return not self.is_right()

    @abstractmethod
    def get_error(self) -> E:
        pass


class Right(Either[E, T]):

    def __init__(self, value: T):
        self._value = value

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_right(self) -> bool:
        return True

    def get_error(self) -> E:
        raise ValueError("Cannot get error from Right")

    def __repr__(self) -> str:
        return f"Right({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Right) and self._value == other._value


class Left(Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return Left(self._error)

    def get_or_else(self, default: T) -> T:
        return default

    def is_right(self) -> bool:
        return False

    def get_error(self) -> E:
        return self._error

    def __repr__(self) -> str:
        return f"Left({self._error!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Left) and self._error == other._error


def _invalid(field: str, message: str, value=None) -> Left:
    return Left(InvalidInput(field, message, value).to_dict())


def _is_positive_number(value) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
        and value > 0
    )


def validate_transaction(t: Transaction) -> Either[dict, Transaction]:
    if not _is_positive_number(t.amount):
        return _invalid("amount", "Amount must be greater than 0", t.amount)

    try:
        month_key(t.date)
    except InvalidInput as e:
        return Left(e.to_dict())

    if not isinstance(t.description, str) or not t.description.strip():
        return _invalid("description", "Description is required", t.description)

    if t.type not in TRANSACTION_TYPES:
        return _invalid("type", f"Unknown transaction type {t.type!r}", t.type)

    if not is_known_category(t.type, t.category):
        return _invalid(
            "category",
            f"Category {t.category!r} is not a valid {t.type} category",
            t.category,
        )

    return Right(t)


def validate_budget(b: Budget, existing: Iterable[Budget] = ()) -> Either[dict, Budget]:
    if b.category not in EXPENSE_CATEGORIES:
        return _invalid("category", f"Category {b.category!r} is not an expense category", b.category)

    if not _is_positive_number(b.amount):
        return _invalid("amount", "Amount must be greater than 0", b.amount)

    try:
        parse_month(b.month)
    except InvalidInput as e:
        return Left(e.to_dict())

    duplicate = any(
        o.category == b.category and o.month == b.month and o.id != b.id
        for o in existing
    )
    if duplicate:
        return _invalid("category", "Budget already exists for this category and month", b.category)

    return Right(b)


def check_unique_budgets(budgets: tuple[Budget, ...]) -> Either[dict, tuple[Budget, ...]]:
    seen: dict[tuple[str, str], Optional[str]] = {}
    for b in budgets:
        key = (b.category, b.month)
        if key in seen:
            return _invalid(
                "budgets",
                f"Duplicate budget for {b.category} in {b.month} (ids {seen[key]}, {b.id})",
                b.id,
            )
        seen[key] = b.id
    return Right(budgets)
