from datetime import date

from finsight.categories import EXPENSE_CATEGORIES
from finsight.domain import Budget, Transaction
from finsight.insights import MAX_INSIGHTS, generate_insights

NOW = date(2024, 6, 15)


def make_tx(id, amount, date, category="Food & Dining", type="expense"):
    return Transaction(id=id, amount=amount, date=date, description=f"tx {id}", type=type, category=category)


def make_budget(id, amount, month="2024-06", category="Food & Dining"):
    return Budget(id=id, category=category, amount=amount, month=month)


def titles(insights):
    return [i.title for i in insights]


def test_rules_in_declaration_order():
    trans = (
        make_tx("t1", 150, "2024-06-02"),
        make_tx("t2", 20, "2024-06-03", category="Shopping"),
        make_tx("t3", 50, "2024-05-20"),
    )
    insights = generate_insights(trans, (make_budget("b1", 100),), NOW)

    assert titles(insights) == [
        "Budget Exceeded",
        "Spending Increased Significantly",
        "High Category Concentration",
        "Missing Budgets",
    ]
    exceeded = insights[0]
    assert exceeded.kind == "warning"
    assert exceeded.amount == 50
    assert exceeded.description == "You've spent $50.00 over your Food & Dining budget this month."
    assert insights[1].amount == 120
    assert insights[2].category == "Food & Dining"
    assert insights[3].description == "Consider setting budgets for: Shopping."


def test_approaching_limit_and_good_control():
    trans = (
        make_tx("t1", 85, "2024-06-02"),
        make_tx("t2", 30, "2024-06-02", category="Shopping"),
        make_tx("t3", 60, "2024-06-02", category="Travel"),
    )
    budgets = (
        make_budget("b1", 100),
        make_budget("b2", 100, category="Shopping"),
        make_budget("b3", 100, category="Travel"),
    )
    insights = generate_insights(trans, budgets, NOW)

    approaching = insights[0]
    assert approaching.title == "Approaching Budget Limit"
    assert approaching.amount == 15
    assert "85.0%" in approaching.description
    assert insights[1].title == "Great Spending Control"
    assert insights[1].kind == "success"
    # 60% is deliberately silent
    assert all(i.category != "Travel" for i in insights)


def test_unused_budget_is_silent():
    insights = generate_insights((), (make_budget("b1", 100),), NOW)
    assert insights == []


def test_no_prior_month_suppresses_trend():
    trans = (make_tx("t1", 5000, "2024-06-02"),)
    insights = generate_insights(trans, (make_budget("b1", 10000),), NOW)

    assert "Spending Increased Significantly" not in titles(insights)
    assert "Spending Decreased" not in titles(insights)


def test_spending_decreased():
    trans = (
        make_tx("t1", 80, "2024-06-02"),
        make_tx("t2", 100, "2024-05-02"),
    )
    insights = generate_insights(trans, (make_budget("b1", 1000),), NOW)
    decreased = [i for i in insights if i.title == "Spending Decreased"]

    assert len(decreased) == 1
    assert decreased[0].kind == "success"
    assert decreased[0].amount == 20
    assert "20.0% lower" in decreased[0].description


def test_small_change_has_no_trend():
    trans = (
        make_tx("t1", 105, "2024-06-02"),
        make_tx("t2", 100, "2024-05-02"),
    )
    insights = generate_insights(trans, (make_budget("b1", 1000),), NOW)
    assert not any(i.title.startswith("Spending") for i in insights)


def test_previous_month_wraps_year():
    trans = (
        make_tx("t1", 300, "2024-01-05"),
        make_tx("t2", 100, "2023-12-28"),
    )
    insights = generate_insights(trans, (make_budget("b1", 1000, month="2024-01"),), date(2024, 1, 31))
    assert "Spending Increased Significantly" in titles(insights)


def test_no_concentration_when_spread():
    trans = tuple(
        make_tx(f"t{i}", 10, "2024-06-02", category=c)
        for i, c in enumerate(EXPENSE_CATEGORIES[:3])
    )
    budgets = tuple(make_budget(f"b{i}", 1000, category=c) for i, c in enumerate(EXPENSE_CATEGORIES[:3]))
    assert "High Category Concentration" not in titles(generate_insights(trans, budgets, NOW))


def test_four_unbudgeted_categories_are_not_listed():
    trans = tuple(
        make_tx(f"t{i}", 10, "2024-06-02", category=c)
        for i, c in enumerate(EXPENSE_CATEGORIES[:4])
    )
    assert "Missing Budgets" not in titles(generate_insights(trans, (), NOW))


def test_three_unbudgeted_categories_are_listed():
    trans = tuple(
        make_tx(f"t{i}", 10, "2024-06-02", category=c)
        for i, c in enumerate(EXPENSE_CATEGORIES[:3])
    )
    missing = [i for i in generate_insights(trans, (), NOW) if i.title == "Missing Budgets"]
    assert missing[0].description == (
        "Consider setting budgets for: Food & Dining, Transportation, Shopping."
    )


def test_never_more_than_six():
    cats = EXPENSE_CATEGORIES[:8]
    trans = tuple(make_tx(f"t{i}", 500, "2024-06-02", category=c) for i, c in enumerate(cats))
    trans += (make_tx("old", 10, "2024-05-02"),)
    budgets = tuple(make_budget(f"b{i}", 100, category=c) for i, c in enumerate(cats))

    insights = generate_insights(trans, budgets, NOW)
    assert len(insights) == MAX_INSIGHTS
    assert set(titles(insights)) == {"Budget Exceeded"}


def test_cap_applies_between_rules():
    cats = EXPENSE_CATEGORIES[:5]
    trans = tuple(make_tx(f"t{i}", 500, "2024-06-02", category=c) for i, c in enumerate(cats))
    trans += (make_tx("old", 10, "2024-05-02"),)
    budgets = tuple(make_budget(f"b{i}", 100, category=c) for i, c in enumerate(cats))

    insights = generate_insights(trans, budgets, NOW)
    assert len(insights) == 6
    assert insights[-1].title == "Spending Increased Significantly"


def test_exactly_hundred_percent_is_approaching_not_exceeded():
    insights = generate_insights((make_tx("t1", 100, "2024-06-02"),), (make_budget("b1", 100),), NOW)

    assert insights[0].title == "Approaching Budget Limit"
    assert insights[0].amount == 0
    assert "Budget Exceeded" not in titles(insights)


def test_exactly_half_used_is_silent():
    insights = generate_insights((make_tx("t1", 50, "2024-06-02"),), (make_budget("b1", 100),), NOW)
    assert all(i.category != "Food & Dining" for i in insights)


def test_trend_thresholds_are_exclusive():
    for current in (120, 90):
        trans = (
            make_tx("t1", current, "2024-06-02"),
            make_tx("t2", 100, "2024-05-02"),
        )
        insights = generate_insights(trans, (make_budget("b1", 1000),), NOW)
        assert not any(i.title.startswith("Spending") for i in insights)


def test_exactly_forty_percent_share_is_not_concentrated():
    trans = (
        make_tx("t1", 40, "2024-06-02"),
        make_tx("t2", 30, "2024-06-02", category="Shopping"),
        make_tx("t3", 30, "2024-06-02", category="Travel"),
    )
    budgets = (
        make_budget("b1", 1000),
        make_budget("b2", 1000, category="Shopping"),
        make_budget("b3", 1000, category="Travel"),
    )
    assert "High Category Concentration" not in titles(generate_insights(trans, budgets, NOW))
