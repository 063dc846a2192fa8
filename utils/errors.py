# utils/errors.py
"""Signup error taxonomy and the mapping from failures to client responses."""

from typing import List, Optional, Tuple

HTTP_400 = 400
HTTP_500 = 500

UNEXPECTED_MESSAGE = "An unexpected error occurred"


class SignupError(Exception):
    """Base class for every failure the signup flow knows how to report."""

    kind = "SignupError"
    status_code = HTTP_400
    field: Optional[str] = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# Client input faults


class MalformedInput(SignupError):
    kind = "MalformedInput"

    def __init__(self, message: str = "Invalid JSON payload"):
        super().__init__(message)


class MissingField(SignupError):
    kind = "MissingField"

    def __init__(self, message: str = "Name, email, and password are required"):
        super().__init__(message)


class InvalidEmail(SignupError):
    kind = "InvalidEmail"
    field = "email"

    def __init__(self, message: str = "Please enter a valid email address"):
        super().__init__(message)


class WeakPassword(SignupError):
    kind = "WeakPassword"
    field = "password"

    def __init__(self, message: str = "Password must be at least 6 characters long"):
        super().__init__(message)


class RoleNotAllowed(SignupError):
    kind = "RoleNotAllowed"
    field = "role"

    def __init__(self, role: str):
        super().__init__("Role not allowed at signup")
        self.role = role


# Persistence-rejected input


class UserExists(SignupError):
    kind = "UserExists"
    field = "email"

    def __init__(self):
        super().__init__("User with this email already exists")


class DuplicateKey(SignupError):
    kind = "DuplicateKey"

    def __init__(self, field: str):
        super().__init__(f"{field} already exists")
        self.field = field


class SchemaValidation(SignupError):
    kind = "SchemaValidation"

    def __init__(self, messages: List[str]):
        super().__init__(", ".join(messages))
        self.messages = list(messages)


# Operational faults


class ConnectionFailure(SignupError):
    kind = "ConnectionFailure"
    status_code = HTTP_500

    def __init__(self, detail: str):
        super().__init__(f"Database operation failed: {detail}")
        self.detail = detail


def map_error(exc: Exception) -> Tuple[int, str]:
    """Return the (status, message) pair the client should see for ``exc``."""
    if isinstance(exc, SignupError):
        return exc.status_code, exc.message
    return HTTP_500, UNEXPECTED_MESSAGE


def error_kind(exc: Exception) -> str:
    if isinstance(exc, SignupError):
        return exc.kind
    return "UnknownFailure"
