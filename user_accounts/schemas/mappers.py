"""Mapping between UserDto and the User domain entity."""

from user_accounts.domain.entities import User
from user_accounts.domain.interfaces import IUserMapper

from .dtos import UserDto


class UserMapper(IUserMapper):
    """Maps users between their transport and domain forms.

    Community membership only travels outward: ``user_to_user_dto`` derives
    ``community_ids`` from the user's communities, while ``user_dto_to_user``
    leaves communities empty since a DTO carries no community details.
    """

    def user_dto_to_user(self, user_dto: UserDto) -> User:
        return User(
            id=user_dto.id,
            name=user_dto.name or "",
            user_id=user_dto.user_id or "",
            email=user_dto.email or "",
            encrypted_password=user_dto.encrypted_password,
            communities=set(),
        )

    def user_to_user_dto(self, user: User) -> UserDto:
        return UserDto(
            id=user.id,
            user_id=user.user_id,
            name=user.name,
            email=user.email,
            encrypted_password=user.encrypted_password,
            community_ids=user.community_ids,
        )
