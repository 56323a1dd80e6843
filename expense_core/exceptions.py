"""Domain-specific exceptions for the expense tracker core."""

class ValidationError(ValueError):
    """Raised when provided data does not meet validation requirements."""


class NotFoundError(LookupError):
    """Raised when an expense cannot be located by its id."""


class ConflictError(ValueError):
    """Raised when a category with the same name (ignoring case) already exists."""
