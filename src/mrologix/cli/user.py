"""Command-line helpers for provisioning MRO Logix user accounts."""

from __future__ import annotations

import secrets
from dataclasses import dataclass

from rich.console import Console
from rich.table import Table
from sqlalchemy.orm import Session

from mrologix.api.security import hash_password
from mrologix.db.connect import get_session
from mrologix.db.models import AuthUser, UserRole
from mrologix.logging import get_logger

logger = get_logger(__name__)

_ROLE_CHOICES = tuple(role.value for role in UserRole)

_PASSWORD_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz23456789"


@dataclass(frozen=True)
class ProvisionedUser:
    user_id: int
    username: str
    password: str
    role: str
    generated: bool


def _generate_password(length: int) -> str:
    if length < 8:
        raise ValueError("password length must be at least 8 characters")
    return "".join(secrets.choice(_PASSWORD_ALPHABET) for _ in range(length))


def create_user(
    db: Session,
    *,
    username: str,
    password: str | None = None,
    first_name: str | None = None,
    last_name: str | None = None,
    email: str | None = None,
    role: str = UserRole.editor.value,
    password_length: int = 16,
) -> ProvisionedUser:
    """Create an account; a random password is generated when none is given."""

    username = (username or "").strip()
    if not username:
        raise ValueError("username is required")
    if db.query(AuthUser).filter(AuthUser.username == username).first() is not None:
        raise ValueError(f"user already exists: {username}")

    generated = password is None
    if password is None:
        password = _generate_password(password_length)
    elif len(password) < 8:
        raise ValueError("password must be at least 8 characters")

    salt_b64, hash_b64, iterations = hash_password(password)
    user = AuthUser(
        username=username,
        first_name=first_name,
        last_name=last_name,
        email=email,
        password_hash=hash_b64,
        password_salt=salt_b64,
        password_iterations=iterations,
        role=UserRole(role),
        is_active=True,
    )
    db.add(user)
    db.flush()
    logger.info("Created user %s (%s)", username, role)
    return ProvisionedUser(
        user_id=user.id,
        username=username,
        password=password,
        role=role,
        generated=generated,
    )


def register_subcommands(subparsers):
    create_parser = subparsers.add_parser("create", help="Create a user account")
    create_parser.add_argument("username")
    create_parser.add_argument("--password", default=None, help="Password (generated when omitted)")
    create_parser.add_argument("--first-name", dest="first_name", default=None)
    create_parser.add_argument("--last-name", dest="last_name", default=None)
    create_parser.add_argument("--email", default=None)
    create_parser.add_argument("--role", choices=_ROLE_CHOICES, default=UserRole.editor.value)
    create_parser.add_argument("--file", default=None, help="Database file")


def _render_user(created: ProvisionedUser, console: Console | None = None) -> None:
    if console is None:
        console = Console()
    table = Table(title="Created user")
    table.add_column("ID", style="bold cyan")
    table.add_column("Username", style="magenta")
    table.add_column("Role", style="green")
    table.add_column("Password", style="yellow")
    table.add_row(
        str(created.user_id),
        created.username,
        created.role,
        created.password if created.generated else "[dim](as provided)[/dim]",
    )
    console.print(table)


def dispatch(args):
    if args.subcommand == "create":
        with get_session(args.file) as db:
            created = create_user(
                db,
                username=args.username,
                password=args.password,
                first_name=args.first_name,
                last_name=args.last_name,
                email=args.email,
                role=args.role,
            )
        _render_user(created)
    else:
        logger.error("No handler for subcommand: %s", args.subcommand)
