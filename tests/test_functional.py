from finsight.domain import Budget, Transaction
from finsight.functional import (
    Left,
    Nothing,
    Right,
    Some,
    check_unique_budgets,
    validate_budget,
    validate_transaction,
)


def make_tx(**overrides):
    fields = dict(id="t1", amount=12.5, date="2024-06-01", description="Lunch",
                  type="expense", category="Food & Dining")
    fields.update(overrides)
    return Transaction(**fields)


def test_maybe_and_either_basics():
    assert Some(5).map(lambda x: x * 2).get_or_else(0) == 10
    assert Nothing().map(lambda x: x * 2).get_or_else(0) == 0
    assert Nothing().is_none()

    assert Right(2).bind(lambda x: Right(x + 1)) == Right(3)
    assert Left("boom").bind(lambda x: Right(x + 1)).get_error() == "boom"
    assert Left("boom").get_or_else(7) == 7


def test_valid_transaction():
    t = make_tx()
    assert validate_transaction(t) == Right(t)


def test_transaction_errors_name_the_field():
    cases = {
        "amount": make_tx(amount=0),
        "date": make_tx(date="2024-02-30"),
        "description": make_tx(description="   "),
        "type": make_tx(type="transfer"),
        "category": make_tx(type="income"),
    }
    for field, tx in cases.items():
        result = validate_transaction(tx)
        assert result.is_left()
        err = result.get_error()
        assert err["error"] == "InvalidInput"
        assert err["field"] == field


def test_non_finite_amount_rejected():
    assert validate_transaction(make_tx(amount=float("inf"))).is_left()
    assert validate_transaction(make_tx(amount=float("nan"))).is_left()


def test_validate_budget_duplicates():
    existing = (Budget("b1", "Food & Dining", 200, "2024-06"),)

    dup = validate_budget(Budget("b2", "Food & Dining", 300, "2024-06"), existing)
    assert dup.is_left()
    assert dup.get_error()["message"] == "Budget already exists for this category and month"

    # editing the same budget is fine
    assert validate_budget(Budget("b1", "Food & Dining", 300, "2024-06"), existing).is_right()
    assert validate_budget(Budget("b3", "Food & Dining", 300, "2024-07"), existing).is_right()


def test_validate_budget_fields():
    assert validate_budget(Budget("b1", "Salary", 10, "2024-06")).get_error()["field"] == "category"
    assert validate_budget(Budget("b1", "Travel", -1, "2024-06")).get_error()["field"] == "amount"
    assert validate_budget(Budget("b1", "Travel", 10, "06-2024")).get_error()["field"] == "month"


def test_check_unique_budgets():
    budgets = (
        Budget("b1", "Travel", 10, "2024-06"),
        Budget("b2", "Travel", 20, "2024-07"),
    )
    assert check_unique_budgets(budgets) == Right(budgets)

    broken = budgets + (Budget("b3", "Travel", 30, "2024-06"),)
    result = check_unique_budgets(broken)
    assert result.is_left()
    assert result.get_error()["field"] == "budgets"

