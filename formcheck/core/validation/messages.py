"""Fixed user-facing messages for field errors."""

REQUIRED = "This field is required"
INVALID_VALUE = "The value entered is not valid"
EMAIL_MISMATCH = "The email confirmation does not match"
VALUES_MISMATCH = "The values do not match"
ALREADY_TAKEN = "The value entered is already taken"


def too_short(size: int) -> str:
    return f"The value entered is too short: minimum {size} character(s)"


def too_long(size: int) -> str:
    return f"The value entered is too long: maximum {size} character(s)"


def bulleted(message: str) -> str:
    """Format a message the way it is persisted for display."""
    return f" * {message}"
