"""
Schemas package - Data Transfer Objects and mapping.

This package contains the DTO that defines the transport contract and the
mapper converting it to and from domain entities.
"""

from .dtos import UserDto
from .mappers import UserMapper

__all__ = [
    "UserDto",
    "UserMapper",
]
