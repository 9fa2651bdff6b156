import logging
import uuid
from typing import Optional, Set

from user_accounts.core.exceptions import (
    EmailAlreadyExistsException,
    UserNotFoundException,
)
from user_accounts.domain.entities import MAX_IDENTIFIER_LENGTH
from user_accounts.domain.entities import User as DomainUser
from user_accounts.domain.interfaces import (
    IPasswordEncoder,
    IUserMapper,
    IUserRepository,
)
from user_accounts.domain.pagination import PageRequest
from user_accounts.schemas.dtos import UserDto

logger = logging.getLogger(__name__)

DEFAULT_PAGE_REQUEST = PageRequest(0, 200)


class UserService:
    """Application service for user-related use-cases following SOLID principles.

    This service:
    - Keeps business rules separate from transport and repositories (Single Responsibility)
    - Depends on abstractions (IUserRepository, IPasswordEncoder, IUserMapper)
      not concrete implementations (Dependency Inversion)
    - Owns no state of its own; every call is a sequence of collaborator calls
    """

    def __init__(
        self,
        repo: IUserRepository,
        password_encoder: IPasswordEncoder,
        mapper: IUserMapper,
    ) -> None:
        self.repo = repo
        self.password_encoder = password_encoder
        self.mapper = mapper

    def create_user(self, request: UserDto) -> UserDto:
        """Register a new user.

        Business Rules:
        - Email must not be registered yet; checked before any side effect
        - A user id is generated when the request carries none; a supplied
          id must not belong to a stored user
        - Only the encoded password is stored
        - A new user belongs to no communities and is always inserted

        Raises:
            EmailAlreadyExistsException: If the email is already registered
            UserIdAlreadyExistsException: If the user id is already taken
            ValueError: If the user id is longer than the stored column
        """
        if self.repo.exists_by_email(request.email):
            logger.warning(
                "User creation rejected, email already registered",
                extra={"context": {"user_id": request.user_id}},
            )
            raise EmailAlreadyExistsException(request.email)

        if not request.user_id:
            request.user_id = str(uuid.uuid4())
        elif len(request.user_id) > MAX_IDENTIFIER_LENGTH:
            raise ValueError(
                f"User id must be at most {MAX_IDENTIFIER_LENGTH} characters"
            )

        request.encrypted_password = self.password_encoder.encode(request.password)

        user = self.mapper.user_dto_to_user(request)
        user.id = None
        user.communities = set()
        saved_user = self.repo.save(user)

        logger.info("User created", extra={"context": {"user_id": saved_user.user_id}})
        return self.mapper.user_to_user_dto(saved_user)

    def get_user_details(self, user_id: str) -> UserDto:
        """Get a user together with the ids of its communities.

        Raises:
            UserNotFoundException: If no user has this id
        """
        user = self.repo.find_by_user_id_with_communities(user_id)
        if user is None:
            logger.warning("User not found", extra={"context": {"user_id": user_id}})
            raise UserNotFoundException(user_id)
        return self.mapper.user_to_user_dto(user)

    def find_user_by_email(self, email: str) -> Optional[UserDto]:
        """Get user by email - simple delegation to repository."""
        user = self.repo.find_by_email(email)
        return self.mapper.user_to_user_dto(user) if user else None

    def list_all(self, page_request: Optional[PageRequest] = None) -> Set[DomainUser]:
        """List one page of users.

        Without a page request the first page of 200 users is returned.
        """
        if page_request is None:
            page_request = DEFAULT_PAGE_REQUEST
        return set(self.repo.find_all(page_request).content)
