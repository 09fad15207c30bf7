# server/core/errors.py


class ExpenseTrackerError(Exception):
    """Base class for errors raised by the expense tracker."""

    message = "Internal Server Error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class InvalidInput(ExpenseTrackerError):
    message = "Missing required fields"


class MissingField(InvalidInput):
    pass


class InvalidCredentials(ExpenseTrackerError):
    message = "Invalid Credentials"


class Unauthorized(ExpenseTrackerError):
    message = "Unauthorized"

    def __init__(self, json_body: bool = False):
        super().__init__()
        self.json_body = json_body


class DuplicateUsername(ExpenseTrackerError):

    def __init__(self, username: str):
        super().__init__(f"Username already exists: {username}")
        self.username = username
