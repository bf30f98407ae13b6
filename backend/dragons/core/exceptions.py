"""
Application error taxonomy.

Handlers and repositories raise these; the exception handlers registered in
``dragons.main`` turn them into ``{"msg": ...}`` JSON responses.
"""

from typing import Any, Dict, List

# pydantic prefixes messages of ValueErrors raised in validators
VALUE_ERROR_PREFIX = "Value error, "


class AppError(Exception):
    """Base class for errors that map to a client-facing HTTP status."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthenticationError(AppError):
    """Missing, invalid or expired credentials."""

    status_code = 401


class AuthorizationError(AppError):
    """Authenticated, but not allowed to perform the operation."""

    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ValidationError(AppError):
    """Schema or business precondition violation."""

    status_code = 400


def first_error_message(errors: List[Dict[str, Any]]) -> str:
    """
    Human readable message for the first entry of a pydantic error list.

    Messages raised by our own validators are returned as written; built-in
    type errors are prefixed with the offending field.
    """
    if not errors:
        return "Invalid request"
    error = errors[0]
    message = str(error.get("msg", "Invalid request"))
    if message.startswith(VALUE_ERROR_PREFIX):
        return message[len(VALUE_ERROR_PREFIX):]
    fields = [str(part) for part in error.get("loc", ()) if part != "body"]
    if fields:
        return f"{fields[-1]}: {message}"
    return message
