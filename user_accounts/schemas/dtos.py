"""
Data Transfer Objects (DTOs) for the user accounts service.

Following SOLID principles:
- Single Responsibility: Each DTO describes one data contract
- Open/Closed: DTOs can be extended without modification
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Set

from user_accounts.domain.entities import MAX_IDENTIFIER_LENGTH


@dataclass
class UserDto:
    """Transport form of a user.

    ``password`` is only populated on creation requests. ``community_ids`` is
    derived from the user's communities when mapping and is never stored.
    """

    id: Optional[int] = None
    user_id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    encrypted_password: Optional[str] = None
    community_ids: Set[str] = field(default_factory=set)

    def validate(self) -> None:
        """Validate a creation request."""
        if not self.name or not self.name.strip():
            raise ValueError("Name is required")
        if not self.email or not self.email.strip():
            raise ValueError("Email is required")
        if not self.password:
            raise ValueError("Password is required")
        if self.user_id and len(self.user_id) > MAX_IDENTIFIER_LENGTH:
            raise ValueError(
                f"User id must be at most {MAX_IDENTIFIER_LENGTH} characters"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Public representation; password material is left out."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "email": self.email,
            "community_ids": sorted(self.community_ids),
        }
