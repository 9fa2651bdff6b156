from __future__ import annotations

from typing import Optional, Set

from sqlalchemy import Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from user_accounts.domain.entities import MAX_IDENTIFIER_LENGTH

from .session import Base

# Many-to-many link between users and the communities they belong to
community_users = Table(
    "community_users",
    Base.metadata,
    Column(
        "community_id",
        Integer,
        ForeignKey("communities.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "user_id",
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class User(Base):
    """User account model"""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(
        String(MAX_IDENTIFIER_LENGTH), unique=True, nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    encrypted_password: Mapped[Optional[str]] = mapped_column(
        String(255), nullable=True
    )

    communities: Mapped[Set["Community"]] = relationship(
        secondary=community_users,
        back_populates="users",
        collection_class=set,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, user_id='{self.user_id}')>"


class Community(Base):
    """Community model; users join communities as members"""

    __tablename__ = "communities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    community_id: Mapped[str] = mapped_column(
        String(MAX_IDENTIFIER_LENGTH), unique=True, nullable=False, index=True
    )
    name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    district: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    users: Mapped[Set[User]] = relationship(
        secondary=community_users,
        back_populates="communities",
        collection_class=set,
    )

    def __repr__(self) -> str:
        return f"<Community(id={self.id}, community_id='{self.community_id}')>"
