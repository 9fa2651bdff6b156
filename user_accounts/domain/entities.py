"""
Domain entities - Pure business logic, no framework dependencies.

Following SOLID principles:
- Single Responsibility: Each entity represents one business concept
- Open/Closed: Entities can be extended without modification
"""

from dataclasses import dataclass, field
from typing import Optional, Set

# Width of the user_id and community_id columns
MAX_IDENTIFIER_LENGTH = 64


@dataclass
class Community:
    """Domain entity for a community users can be members of.

    Only the identifier matters to the user accounts service; name and
    district are carried along for display. Two communities with the same
    ``community_id`` are the same community.
    """

    community_id: str = ""
    name: Optional[str] = field(default=None, compare=False)
    district: Optional[str] = field(default=None, compare=False)
    id: Optional[int] = field(default=None, compare=False)

    def __post_init__(self):
        """Validate domain rules."""
        if not self.community_id:
            raise ValueError("Community id is required")
        if len(self.community_id) > MAX_IDENTIFIER_LENGTH:
            raise ValueError(
                f"Community id must be at most {MAX_IDENTIFIER_LENGTH} characters"
            )

    def __hash__(self) -> int:
        return hash(self.community_id)


@dataclass
class User:
    """Domain entity representing a User in the system.

    This is the pure business representation, independent of:
    - Database implementation (SQLAlchemy)
    - Transport representation (UserDto)

    ``encrypted_password`` always holds the encoder output, never the
    plaintext. Users hash by ``user_id`` so pages can be returned as sets.
    """

    name: str = ""
    user_id: str = ""
    email: str = ""
    encrypted_password: Optional[str] = None
    communities: Set[Community] = field(default_factory=set)
    id: Optional[int] = None

    def __post_init__(self):
        """Validate domain rules."""
        if self.user_id and len(self.user_id) > MAX_IDENTIFIER_LENGTH:
            raise ValueError(
                f"User id must be at most {MAX_IDENTIFIER_LENGTH} characters"
            )
        if self.communities is None:
            self.communities = set()
        else:
            self.communities = set(self.communities)

    def __hash__(self) -> int:
        return hash(self.user_id)

    @property
    def community_ids(self) -> Set[str]:
        """Identifiers of every community the user belongs to."""
        return {community.community_id for community in self.communities}

    def add_community(self, community: Community) -> None:
        self.communities.add(community)
