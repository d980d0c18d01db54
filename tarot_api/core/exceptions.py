# tarot_api/core/exceptions.py


class InvalidArgument(ValueError):
    """Bad spread kind, out-of-range draw count or malformed query."""


class NotFound(LookupError):
    """Missing card, reading or user."""
