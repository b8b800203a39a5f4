"""Domain errors raised by the service layer.

The API layer maps them onto HTTP responses (see ``motivatr.main``):
ValidationError -> 422, NotFoundError -> 404. TransientIOError is never
surfaced to clients; callers log it and carry on.
"""


class MotivatrError(Exception):
    pass


class ValidationError(MotivatrError):
    """Bad enum value, empty title or missing required field."""


class NotFoundError(MotivatrError):
    """Unknown task id or user email."""


class TransientIOError(MotivatrError):
    """Network or storage hiccup while syncing a streak or sending a reminder."""
