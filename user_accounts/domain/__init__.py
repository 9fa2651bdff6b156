"""
Domain package - Pure business logic layer.

This package contains:
- entities.py: Domain entities (User, Community)
- pagination.py: Page requests and result pages
- interfaces.py: Repository, password encoder and mapper contracts
"""

from .entities import Community, User
from .interfaces import (
    IPasswordEncoder,
    IUserMapper,
    IUserReader,
    IUserRepository,
    IUserWriter,
)
from .pagination import Page, PageRequest

__all__ = [
    # Domain entities
    "User",
    "Community",
    # Pagination
    "Page",
    "PageRequest",
    # Collaborator interfaces
    "IUserRepository",
    "IPasswordEncoder",
    "IUserMapper",
    # Segregated interfaces
    "IUserReader",
    "IUserWriter",
]
