"""
Abstract interfaces for collaborators following Interface Segregation Principle.

These interfaces define contracts without implementation details,
enabling dependency injection and easier testing.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

from .entities import User
from .pagination import Page, PageRequest

if TYPE_CHECKING:
    from user_accounts.schemas.dtos import UserDto


class IUserReader(ABC):
    """Interface for user read operations - Interface Segregation Principle."""

    @abstractmethod
    def exists_by_email(self, email: str) -> bool:
        """Check whether a user with this email is stored."""
        pass

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        pass

    @abstractmethod
    def find_by_user_id_with_communities(self, user_id: str) -> Optional[User]:
        """Get user by public id with its community memberships loaded."""
        pass

    @abstractmethod
    def find_all(self, page_request: PageRequest) -> Page:
        """Get one page of users."""
        pass


class IUserWriter(ABC):
    """Interface for user write operations - Interface Segregation Principle."""

    @abstractmethod
    def save(self, user: User) -> User:
        """Persist a user and return the stored state."""
        pass


class IUserRepository(IUserReader, IUserWriter):
    """Complete user repository interface combining read/write operations."""

    pass


class IPasswordEncoder(ABC):
    """Interface for one-way password hashing."""

    @abstractmethod
    def encode(self, raw_password: str) -> str:
        """Hash a plain text password."""
        pass

    @abstractmethod
    def matches(self, raw_password: str, encoded_password: str) -> bool:
        """Check a plain text password against a stored hash."""
        pass


class IUserMapper(ABC):
    """Interface for mapping between transport and domain representations."""

    @abstractmethod
    def user_dto_to_user(self, user_dto: "UserDto") -> User:
        """Map a transport DTO to a domain user."""
        pass

    @abstractmethod
    def user_to_user_dto(self, user: User) -> "UserDto":
        """Map a domain user to a transport DTO."""
        pass
