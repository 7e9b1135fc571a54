"""Teacher account administration.

Usage::

    python -m checkin.manage_teachers create alice
    python -m checkin.manage_teachers update alice
    python -m checkin.manage_teachers delete alice
    python -m checkin.manage_teachers list

Passwords are prompted for unless ``--password`` is given.
"""

import argparse
import asyncio
import getpass
import logging
import sys

from sqlalchemy.ext.asyncio import AsyncSession

from checkin.core.exceptions import CheckinError
from checkin.services.teacher_service import (
    create_teacher,
    delete_teacher,
    list_teachers,
    update_teacher_password,
)

log = logging.getLogger("checkin.manage_teachers")


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage teacher accounts")
    parser.add_argument(
        "action", choices=["create", "update", "delete", "list"],
        help="What to do with the account.",
    )
    parser.add_argument("username", nargs="?", help="Teacher username.")
    parser.add_argument(
        "--password",
        help="Password for create/update (prompted when omitted).",
    )
    return parser


async def run_command(
    db: AsyncSession,
    action: str,
    username: str | None = None,
    password: str | None = None,
) -> str:
    """Run one administrative action and return a message for the operator."""
    if action == "list":
        teachers = await list_teachers(db)
        return "\n".join(t.username for t in teachers) or "No teachers."

    if not username:
        raise CheckinError("A username is required")

    if action == "create":
        await create_teacher(db, username, password or "")
        return f"Teacher {username} created successfully."
    if action == "update":
        await update_teacher_password(db, username, password or "")
        return f"Password for {username} updated successfully."
    if action == "delete":
        await delete_teacher(db, username)
        return f"Teacher {username} deleted successfully."

    raise CheckinError(f"Invalid action {action!r}. Use create, update, delete or list.")


async def _main(args: argparse.Namespace) -> int:
    from checkin.database import async_session, create_schema, engine

    await create_schema()
    try:
        async with async_session() as db:
            try:
                message = await run_command(db, args.action, args.username, args.password)
            except CheckinError as exc:
                await db.rollback()
                log.error("%s", exc.detail)
                return 1
            await db.commit()
    finally:
        await engine.dispose()

    print(message)
    return 0


def main(argv: list[str] | None = None) -> int:
    from checkin.config import settings

    args = build_parser().parse_args(argv)
    _setup_logging(settings.LOG_LEVEL)

    if args.action in ("create", "update") and args.password is None:
        args.password = getpass.getpass("Enter password: ")

    return asyncio.run(_main(args))


if __name__ == "__main__":
    sys.exit(main())
