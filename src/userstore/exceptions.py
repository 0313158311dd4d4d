"""Exceptions raised inside the user store."""


class UserStoreError(Exception):
    """Base class for user store errors."""


class InvalidFieldError(UserStoreError):
    """Raised when a filter or update names a field the model cannot accept."""

    def __init__(self, field: str, reason: str = "unknown field") -> None:
        self.field = field
        super().__init__(f"{reason}: {field}")
