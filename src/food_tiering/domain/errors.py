"""Domain errors."""


class InvalidInputError(ValueError):
    """Raised when a value violates the engine's input contract."""
