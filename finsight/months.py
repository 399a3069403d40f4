from datetime import date, datetime
from typing import Union

from finsight.errors import InvalidInput

DateLike = Union[str, date, datetime]


def month_key(value: DateLike, field: str = "date") -> str:
    """Return the YYYY-MM key of an ISO date, a date or a datetime.

    Strings may carry a time part ("2025-09-01T10:00:00"); only the
    calendar date is read and it has to be a real day.
    """
    if isinstance(value, (date, datetime)):
        return f"{value.year:04d}-{value.month:02d}"
    if not isinstance(value, str):
        raise InvalidInput(field, f"Expected an ISO date for {field}, got {type(value).__name__}", value)
    try:
        parsed = datetime.strptime(value[:10], "%Y-%m-%d")
    except ValueError:
        raise InvalidInput(field, f"Cannot interpret {value!r} as an ISO date", value) from None
    return f"{parsed.year:04d}-{parsed.month:02d}"


def parse_month(value: str, field: str = "month") -> str:
    if not isinstance(value, str) or len(value) != 7:
        raise InvalidInput(field, f"Cannot interpret {value!r} as a YYYY-MM month", value)
    try:
        datetime.strptime(value, "%Y-%m")
    except ValueError:
        raise InvalidInput(field, f"Cannot interpret {value!r} as a YYYY-MM month", value) from None
    return value


def current_month(now: Union[date, datetime]) -> str:
    return month_key(now, field="now")


def previous_month(key: str) -> str:
    parse_month(key)
    year, month = int(key[:4]), int(key[5:7])
    if month == 1:
        return f"{year - 1:04d}-12"
    return f"{year:04d}-{month - 1:02d}"


def month_label(key: str) -> str:
    return datetime.strptime(parse_month(key), "%Y-%m").strftime("%b %Y")


def month_title(key: str) -> str:
    return datetime.strptime(parse_month(key), "%Y-%m").strftime("%B %Y")
