"""
Custom exceptions for the application.
Following SOLID principles - centralized error handling.
"""

from typing import Optional


class UserAccountsError(Exception):
    """Base class for errors surfaced by the user accounts service."""

    error_code: Optional[int] = None


class EmailAlreadyExistsException(UserAccountsError):
    """
    Exception raised when a user is created with an email that is already
    registered. The message format is consumed by existing clients.
    """

    error_code = 419

    def __init__(self, email: Optional[str] = None) -> None:
        self.email = email
        super().__init__(f"Email already exists:{self.error_code}")


class UserIdAlreadyExistsException(UserAccountsError):
    """Exception raised when a new user reuses the user id of a stored user."""

    error_code = 409

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(f"User id already exists:{user_id}")


class UserNotFoundException(UserAccountsError):
    """Exception raised when no user matches the requested user id."""

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(f"User not found:{user_id}")
