"""Operator commands.

    python -m app.cli create-admin --username root --email root@example.com

The password is prompted for when ``--password`` is omitted. The command uses
the same ``DARULABROR_*`` settings as the API.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from getpass import getpass
import sys

from pydantic import ValidationError

from app.core.config import get_settings
from app.core.logging_safety import configure_logging
from app.db.session import create_db_engine, create_session_factory, init_db
from app.errors import ApiError, format_validation_errors
from app.repositories.admins import AdminRepository
from app.schemas.admin import AdminCreateRequest, Role
from app.services.admins import AdminService


def _read_password() -> str | None:
    password = getpass("Password: ")
    if password != getpass("Repeat password: "):
        print("Passwords do not match; admin not created.", file=sys.stderr)
        return None
    return password


def create_admin(args: argparse.Namespace) -> int:
    password = args.password if args.password is not None else _read_password()
    if password is None:
        return 1

    try:
        request = AdminCreateRequest(
            username=args.username.strip(),
            email=args.email.strip(),
            password=password,
            role=args.role,
            is_active=True,
        )
    except ValidationError as exc:
        print(f"Invalid admin: {format_validation_errors(exc.errors())}", file=sys.stderr)
        return 1

    settings = get_settings()
    configure_logging(settings.log_level)
    engine = create_db_engine(settings.database_url)
    init_db(engine)
    session = create_session_factory(engine)()
    try:
        admin = AdminService(AdminRepository(session)).create_admin(request)
    except ApiError as exc:
        print(f"Admin not created: {exc.payload.message}", file=sys.stderr)
        return 1
    finally:
        session.close()
        engine.dispose()

    print(f"Admin created: id={admin.id} username={admin.username} role={admin.role.value}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="python -m app.cli", description="Darul Abror API operator commands.")
    subcommands = parser.add_subparsers(dest="command", required=True)

    create = subcommands.add_parser("create-admin", help="Create an administrator account.")
    create.add_argument("--username", required=True)
    create.add_argument("--email", required=True)
    create.add_argument("--password", help="Prompted for when omitted.")
    create.add_argument(
        "--role",
        choices=[role.value for role in Role],
        default=Role.SUPERADMIN.value,
    )
    create.set_defaults(handler=create_admin)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
