"""
Central pytest configuration for the user accounts tests.

This file provides common fixtures for both unit and integration tests:
an isolated in-memory SQLite database per test, a fast password encoder
and a guard that restores logging handlers touched by setup_logging.
"""

import logging

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from user_accounts.core.security import PasswordEncoder
from user_accounts.db.session import create_tables, reset_engine
from user_accounts.repositories.user_repo import UserRepository
from user_accounts.schemas.mappers import UserMapper
from user_accounts.services.user_service import UserService


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep host configuration out of the tests."""
    for name in (
        "DATABASE_URL",
        "DEFAULT_PAGE_SIZE",
        "PASSWORD_SCHEMES",
        "LOG_LEVEL",
        "LOG_JSON",
        "LOG_TO_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
    reset_engine()


@pytest.fixture
def db_engine():
    """Fresh in-memory SQLite engine with all tables created."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    """Provide a database session bound to the test engine."""
    TestSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, expire_on_commit=False, bind=db_engine
    )
    session = TestSessionLocal()
    yield session
    session.close()


@pytest.fixture
def user_repo(db_session) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def password_encoder() -> PasswordEncoder:
    """Encoder using a fast scheme so tests don't pay bcrypt's cost."""
    return PasswordEncoder(["pbkdf2_sha256"])


@pytest.fixture
def user_service(user_repo, password_encoder) -> UserService:
    """UserService wired to real collaborators over SQLite."""
    return UserService(user_repo, password_encoder, UserMapper())


@pytest.fixture
def clean_logging():
    """Clean up logging handlers before and after each test."""
    root_logger = logging.getLogger()
    app_logger = logging.getLogger("user_accounts")
    sql_logger = logging.getLogger("sqlalchemy.engine")

    original_handlers = root_logger.handlers[:]
    original_level = root_logger.level
    original_app_level = app_logger.level
    original_sql_level = sql_logger.level

    yield

    for handler in root_logger.handlers[:]:
        if handler not in original_handlers:
            handler.close()
        root_logger.removeHandler(handler)

    for handler in original_handlers:
        root_logger.addHandler(handler)

    root_logger.setLevel(original_level)
    app_logger.setLevel(original_app_level)
    sql_logger.setLevel(original_sql_level)
