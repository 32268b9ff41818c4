# app/exceptions.py
"""
Application error taxonomy.
ValidationError → HTTP 400, PersistenceError → HTTP 500 (see handlers in app/main.py).
"""


class LeasingError(Exception):
    """Base class for errors the API turns into an {"error": ...} payload."""

    status_code = 500
    public_message = "Internal server error"

    def __init__(self, message: str = None):
        super().__init__(message or self.public_message)
        self.message = message or self.public_message


class ValidationError(LeasingError):
    """Missing or malformed required input. Never retried."""

    status_code = 400
    public_message = "Missing required fields"


class PersistenceError(LeasingError):
    """A write to the database failed. The whole unit of work was rolled back."""

    status_code = 500
    public_message = "Failed to persist data."
