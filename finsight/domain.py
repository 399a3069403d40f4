from dataclasses import asdict, dataclass
from typing import Optional, Tuple

from finsight.months import month_label, month_title


@dataclass(frozen=True)
class Transaction:
    id: str
    amount: float     # always positive, sign comes from type
    date: str         # ISO date, e.g. "2024-06-15"
    description: str
    type: str         # "income" or "expense"
    category: str


# A monthly spending limit for one expense category
@dataclass(frozen=True)
class Budget:
    id: str
    category: str
    amount: float
    month: str  # "YYYY-MM"


@dataclass(frozen=True)
class BudgetEvaluation:
    category: str
    month: str
    budget_amount: float
    actual_spent: float
    remaining: float
    percentage: float
    status: str  # "under", "on-track" or "over"


@dataclass(frozen=True)
class Alert:
    id: str
    severity: str  # "critical" or "warning"
    category: str
    month: str
    budget_amount: float
    actual_spent: float
    over_amount: float
    percentage: float

    @property
    def title(self) -> str:
        if self.severity == "critical":
            return f"Budget Exceeded: {self.category}"
        return f"Budget Alert: {self.category}"

    @property
    def message(self) -> str:
        if self.severity == "critical":
            return (
                f"You've spent ${self.actual_spent:.2f} in {self.category} this month, "
                f"which is ${self.over_amount:.2f} over your budget of ${self.budget_amount:.2f} "
                f"({self.percentage:.1f}% of budget used)."
            )
        month = month_title(self.month)
        return (
            f"You've used {self.percentage:.1f}% of your {self.category} budget for {month}. "
            f"You have ${self.budget_amount - self.actual_spent:.2f} remaining."
        )


@dataclass(frozen=True)
class Insight:
    kind: str  # "warning", "success" or "info"
    title: str
    description: str
    category: Optional[str] = None
    amount: Optional[float] = None


@dataclass(frozen=True)
class MonthlyTotals:
    month: str
    income: float
    expense: float

    @property
    def label(self) -> str:
        return month_label(self.month)


@dataclass(frozen=True)
class CategorySlice:
    name: str
    value: float
    color: str


@dataclass(frozen=True)
class DashboardSummary:
    total_income: float
    total_expenses: float
    balance: float
    top_expense_category: object  # Maybe[tuple[str, float]]
    recent: Tuple[Transaction, ...]
    month_income: float
    month_expenses: float


def to_record(obj) -> dict:
    return asdict(obj)


def transaction_from_record(data: dict) -> Transaction:
    return Transaction(
        id=str(data["id"]),
        amount=data["amount"],
        date=data["date"],
        description=data["description"],
        type=data["type"],
        category=data["category"],
    )


def budget_from_record(data: dict) -> Budget:
    return Budget(
        id=str(data["id"]),
        category=data["category"],
        amount=data["amount"],
        month=data["month"],
    )
