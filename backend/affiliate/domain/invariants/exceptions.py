class InvariantViolation(Exception):
    """Raised when a write would leave the data model in an invalid state."""
