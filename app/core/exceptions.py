"""
Domain errors raised by the repository layer.

Each error carries the HTTP status code the API answers with; the handler
registered in main.py renders any of them as {"detail": message}.
Store-level failures (IntegrityError, OperationalError, ...) are not part
of this hierarchy and propagate untouched.
"""

from fastapi import status


class AppError(Exception):
    """Base class for caller-correctable failures."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(AppError):
    """Input is structurally invalid for the operation."""
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(AppError):
    """Missing or invalid credentials."""
    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(AppError):
    """Referenced entity does not exist."""
    status_code = status.HTTP_404_NOT_FOUND
