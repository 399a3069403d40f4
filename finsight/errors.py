from typing import Any, Optional


class InvalidInput(ValueError):
    """Raised when an input value cannot be interpreted.

    field names the offending attribute, e.g. "date" or "month".
    """

    def __init__(self, field: str, message: str, value: Optional[Any] = None):
        super().__init__(message)
        self.field = field
        self.message = message
        self.value = value

    def to_dict(self) -> dict:
        return {
            "error": "InvalidInput",
            "field": self.field,
            "message": self.message,
            "value": self.value,
        }
