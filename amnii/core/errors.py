"""
Domain exceptions for account and token handling.

Services raise these; the API layer translates them into HTTP responses.
Messages are safe to show to clients and never include secrets.
"""

from collections.abc import Sequence
from typing import Any


class AmniiError(Exception):
    """Base exception for all Amnii domain errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(AmniiError):
    """Input failed validation; message names the first violated field."""

    pass


class ConflictError(AmniiError):
    """An account with the same identity already exists."""

    def __init__(self, message: str = "User already registered"):
        super().__init__(message)


class DuplicateEmailError(AmniiError):
    """Raised by the user store when the unique email constraint rejects an insert."""

    def __init__(self, email: str):
        super().__init__("A user with this email already exists")
        self.email = email


class UnauthenticatedError(AmniiError):
    """Caller identity could not be established."""

    pass


class MissingCredentialError(UnauthenticatedError):
    def __init__(self, message: str = "Access denied. No token provided."):
        super().__init__(message)


class MalformedCredentialError(UnauthenticatedError):
    def __init__(self, message: str = "Access denied. Invalid token format."):
        super().__init__(message)


class InvalidCredentialError(UnauthenticatedError):
    """Token signature, structure, expiry or claims are not acceptable."""

    def __init__(self, message: str = "Invalid token."):
        super().__init__(message)


class InvalidCredentialsError(UnauthenticatedError):
    """Login failed. Same message whether the email or the password was wrong."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class ForbiddenError(AmniiError):
    """Authenticated, but lacking the required privilege."""

    def __init__(self, message: str = "Access denied."):
        super().__init__(message)


def first_violation_message(errors: Sequence[dict[str, Any]]) -> str:
    """
    Format the first pydantic validation error as '"<field>" <reason>'.

    The leading "body" location segment added by FastAPI is dropped.
    """
    if not errors:
        return "Invalid input"
    first = errors[0]
    parts = [str(p) for p in first.get("loc", ()) if p != "body"]
    field = ".".join(parts) or "body"
    return f'"{field}" {first.get("msg", "is invalid")}'
