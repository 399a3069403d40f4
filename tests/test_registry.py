from datetime import date, datetime

import pytest

from finsight.categories import (
    CATEGORY_COLORS,
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    categories_for,
    is_known_category,
    registry_color,
)
from finsight.errors import InvalidInput
from finsight.months import current_month, month_key, month_label, month_title, parse_month, previous_month


def test_category_sets():
    assert len(EXPENSE_CATEGORIES) == 13
    assert len(INCOME_CATEGORIES) == 8
    assert len(CATEGORY_COLORS) == 13
    assert categories_for("income") is INCOME_CATEGORIES
    assert is_known_category("expense", "Food & Dining")
    assert not is_known_category("income", "Food & Dining")
    assert not is_known_category("transfer", "Other")


def test_categories_for_unknown_type():
    with pytest.raises(InvalidInput) as exc:
        categories_for("transfer")
    assert exc.value.field == "type"


def test_registry_color_is_stable():
    assert registry_color("Food & Dining") == CATEGORY_COLORS[0]
    assert registry_color("Something else") == registry_color("Something else")
    assert registry_color("Something else") in CATEGORY_COLORS


def test_month_key():
    assert month_key("2024-06-30") == "2024-06"
    assert month_key("2025-09-01T10:00:00") == "2025-09"
    assert month_key(date(2024, 2, 29)) == "2024-02"
    assert current_month(datetime(2024, 12, 31, 23, 59)) == "2024-12"


@pytest.mark.parametrize("bad", ["2024-13-01", "2023-02-29", "yesterday", "", None])
def test_month_key_rejects_bad_dates(bad):
    with pytest.raises(InvalidInput) as exc:
        month_key(bad)
    assert exc.value.field == "date"


def test_previous_month():
    assert previous_month("2024-06") == "2024-05"
    assert previous_month("2024-01") == "2023-12"


def test_parse_month():
    assert parse_month("2024-06") == "2024-06"
    with pytest.raises(InvalidInput):
        parse_month("2024-6")


def test_month_labels():
    assert month_label("2024-06") == "Jun 2024"
    assert month_title("2024-06") == "June 2024"
