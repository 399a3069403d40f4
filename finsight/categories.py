import zlib
from typing import Tuple

from finsight.errors import InvalidInput

EXPENSE_CATEGORIES: Tuple[str, ...] = (
    "Food & Dining",
    "Transportation",
    "Shopping",
    "Entertainment",
    "Bills & Utilities",
    "Healthcare",
    "Education",
    "Travel",
    "Personal Care",
    "Home & Garden",
    "Insurance",
    "Investments",
    "Other",
)

INCOME_CATEGORIES: Tuple[str, ...] = (
    "Salary",
    "Freelance",
    "Business",
    "Investments",
    "Rental Income",
    "Gifts",
    "Refunds",
    "Other",
)

CATEGORY_COLORS: Tuple[str, ...] = (
    "#3b82f6",  # blue
    "#10b981",  # emerald
    "#f59e0b",  # amber
    "#ef4444",  # red
    "#8b5cf6",  # violet
    "#06b6d4",  # cyan
    "#f97316",  # orange
    "#84cc16",  # lime
    "#ec4899",  # pink
    "#6366f1",  # indigo
    "#14b8a6",  # teal
    "#f43f5e",  # rose
    "#64748b",  # slate
)

TRANSACTION_TYPES = ("income", "expense")


def categories_for(tx_type: str) -> Tuple[str, ...]:
    if tx_type == "income":
        return INCOME_CATEGORIES
    if tx_type == "expense":
        return EXPENSE_CATEGORIES
    raise InvalidInput("type", f"Unknown transaction type {tx_type!r}", tx_type)


def is_known_category(tx_type: str, name: str) -> bool:
    if tx_type not in TRANSACTION_TYPES:
        return False
    return name in categories_for(tx_type)


def registry_color(name: str) -> str:
    """Colour keyed by category name, independent of chart ordering."""
    registry = EXPENSE_CATEGORIES + tuple(c for c in INCOME_CATEGORIES if c not in EXPENSE_CATEGORIES)
    if name in registry:
        index = registry.index(name)
    else:
        index = zlib.crc32(name.encode("utf-8"))
    return CATEGORY_COLORS[index % len(CATEGORY_COLORS)]
