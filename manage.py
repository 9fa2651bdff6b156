"""Management commands for the user accounts service."""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import click
from dotenv import load_dotenv

from user_accounts.core import config
from user_accounts.core.exceptions import UserAccountsError
from user_accounts.core.logging_config import setup_logging
from user_accounts.core.security import get_password_encoder
from user_accounts.db.session import create_tables, session_scope
from user_accounts.domain.pagination import PageRequest
from user_accounts.repositories.user_repo import UserRepository
from user_accounts.schemas.dtos import UserDto
from user_accounts.schemas.mappers import UserMapper
from user_accounts.services.user_service import UserService

logger = logging.getLogger("user_accounts.manage")


@contextmanager
def user_service_scope() -> Iterator[UserService]:
    """Yield a UserService wired to a fresh transactional session."""
    with session_scope() as session:
        yield UserService(UserRepository(session), get_password_encoder(), UserMapper())


@click.group()
@click.option("--env-file", default=None, help="Path of a .env file to load.")
def cli(env_file: Optional[str]) -> None:
    """Entry point for management commands."""
    load_dotenv(env_file)
    setup_logging(
        log_level=config.get_log_level(),
        log_to_file=config.get_log_to_file(),
        use_json_format=config.get_log_json(),
    )
    config.log_config()


@cli.command("init-db")
def init_db() -> None:
    """Create database tables."""
    create_tables()
    logging.info("Database tables created.")


@cli.command("create-user")
@click.option("--name", required=True)
@click.option("--email", required=True)
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
@click.option("--user-id", default=None, help="Public user id; generated if omitted.")
def create_user(name: str, email: str, password: str, user_id: Optional[str]) -> None:
    """Register a new user."""
    request = UserDto(user_id=user_id, name=name, email=email, password=password)
    try:
        request.validate()
    except ValueError as e:
        raise click.BadParameter(str(e))

    try:
        with user_service_scope() as service:
            created = service.create_user(request)
    except UserAccountsError as e:
        raise click.ClickException(str(e))

    click.echo(created.user_id)


@cli.command("user-details")
@click.argument("user_id")
def user_details(user_id: str) -> None:
    """Show a user and the ids of its communities."""
    try:
        with user_service_scope() as service:
            user_dto = service.get_user_details(user_id)
    except UserAccountsError as e:
        raise click.ClickException(str(e))

    click.echo(json.dumps(user_dto.to_dict(), indent=2))


@cli.command("list-users")
@click.option("--page", default=0, show_default=True, type=click.IntRange(min=0))
@click.option("--size", default=None, type=click.IntRange(min=1))
def list_users(page: int, size: Optional[int]) -> None:
    """List one page of users."""
    page_request = PageRequest(page, size or config.get_default_page_size())
    with user_service_scope() as service:
        users = service.list_all(page_request)

    for user in sorted(users, key=lambda u: u.id or 0):
        click.echo(f"{user.user_id}\t{user.name}\t{user.email}")


if __name__ == "__main__":
    cli()
