import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from user_accounts.core.exceptions import (
    EmailAlreadyExistsException,
    UserIdAlreadyExistsException,
)
from user_accounts.db.base import Community as DbCommunity
from user_accounts.db.base import User as DbUser
from user_accounts.domain.entities import Community as DomainCommunity
from user_accounts.domain.entities import User as DomainUser
from user_accounts.domain.interfaces import IUserRepository
from user_accounts.domain.pagination import Page, PageRequest

logger = logging.getLogger(__name__)


class UserRepository(IUserRepository):
    """Repository for User persistence operations following SOLID principles.

    This implementation:
    - Implements IUserRepository interface (Dependency Inversion)
    - Handles data access only (Single Responsibility)
    - Maps between domain entities and database models

    Email and user id uniqueness are enforced by UNIQUE constraints; a
    violation on save is reported as EmailAlreadyExistsException or
    UserIdAlreadyExistsException.
    """

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def exists_by_email(self, email: str) -> bool:
        """Check whether any user is registered with this email."""
        return self.db.query(DbUser.id).filter_by(email=email).first() is not None

    def find_by_email(self, email: str) -> Optional[DomainUser]:
        """Get user by email, returning domain entity."""
        db_user = (
            self.db.query(DbUser)
            .options(selectinload(DbUser.communities))
            .filter_by(email=email)
            .first()
        )
        return self._to_domain(db_user) if db_user else None

    def find_by_user_id_with_communities(self, user_id: str) -> Optional[DomainUser]:
        """Get user by public id with community memberships eagerly loaded."""
        db_user = (
            self.db.query(DbUser)
            .options(selectinload(DbUser.communities))
            .filter_by(user_id=user_id)
            .first()
        )
        return self._to_domain(db_user) if db_user else None

    def find_all(self, page_request: PageRequest) -> Page:
        """Get one page of users ordered by insertion."""
        total = self.db.query(func.count(DbUser.id)).scalar() or 0
        db_users = (
            self.db.query(DbUser)
            .options(selectinload(DbUser.communities))
            .order_by(DbUser.id)
            .offset(page_request.offset)
            .limit(page_request.size)
            .all()
        )
        return Page(
            content=[self._to_domain(db_user) for db_user in db_users],
            page=page_request.page,
            size=page_request.size,
            total_elements=total,
        )

    def save(self, user: DomainUser) -> DomainUser:
        """Persist a user and return the stored state.

        A user without a surrogate ``id`` is always inserted, so it can never
        overwrite a stored user; one with an ``id`` updates that row.
        """
        if not user.user_id:
            raise ValueError("User ID is required for save")

        if user.id is None:
            db_user = DbUser(user_id=user.user_id)
            self.db.add(db_user)
        else:
            db_user = self.db.query(DbUser).filter_by(id=user.id).first()
            if not db_user:
                raise ValueError(f"User with ID {user.id} not found")
            if db_user.user_id != user.user_id:
                raise ValueError("User ID cannot be changed")

        db_user.name = user.name
        db_user.email = user.email
        db_user.encrypted_password = user.encrypted_password
        db_user.communities = {
            self._get_or_create_community(community) for community in user.communities
        }

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            self._raise_conflict(user)
            raise

        self.db.refresh(db_user)
        return self._to_domain(db_user)

    def _raise_conflict(self, user: DomainUser) -> None:
        """Translate a unique constraint violation into a domain error."""
        existing = self.db.query(DbUser).filter_by(email=user.email).first()
        if existing is not None and existing.id != user.id:
            logger.warning(
                "Unique email constraint rejected save",
                extra={"context": {"user_id": user.user_id}},
            )
            raise EmailAlreadyExistsException(user.email)

        if user.id is None:
            existing = self.db.query(DbUser).filter_by(user_id=user.user_id).first()
            if existing is not None:
                logger.warning(
                    "Unique user id constraint rejected save",
                    extra={"context": {"user_id": user.user_id}},
                )
                raise UserIdAlreadyExistsException(user.user_id)

    def _get_or_create_community(self, community: DomainCommunity) -> DbCommunity:
        db_community = (
            self.db.query(DbCommunity)
            .filter_by(community_id=community.community_id)
            .first()
        )
        if db_community is None:
            db_community = DbCommunity(
                community_id=community.community_id,
                name=community.name,
                district=community.district,
            )
            self.db.add(db_community)
        return db_community

    def _to_domain(self, db_user: DbUser) -> DomainUser:
        """Convert database model to domain entity."""
        return DomainUser(
            id=db_user.id,
            name=db_user.name,
            user_id=db_user.user_id,
            email=db_user.email,
            encrypted_password=db_user.encrypted_password,
            communities={
                DomainCommunity(
                    id=db_community.id,
                    community_id=db_community.community_id,
                    name=db_community.name,
                    district=db_community.district,
                )
                for db_community in db_user.communities
            },
        )
