"""Seed a fresh BandMate database with its first administrator.

Optionally also opens the band's first project so the activity feed is not
empty on the first sign-in.
"""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from app.application.errors import ApplicationError
from app.application.use_cases.projects import create_project
from app.application.use_cases.users.create_user import create_user
from app.domain.entities import Role
from app.infrastructure.database import SessionLocal, initialize_database


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create the first BandMate administrator.")
    parser.add_argument("--name", default="Administrator", help="display name")
    parser.add_argument("--email", default="admin@example.com", help="sign-in e-mail")
    parser.add_argument("--password", help="prompted for when omitted")
    parser.add_argument("--member", action="store_true", help="create a regular member")
    parser.add_argument("--project", metavar="NAME", help="also create a first project")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    password = args.password or getpass("Password: ")
    if not password:
        raise SystemExit("A password is required.")

    initialize_database()
    with SessionLocal() as session:
        try:
            user = create_user(
                session,
                name=args.name,
                email=args.email,
                password=password,
                role=Role.MEMBER if args.member else Role.ADMIN,
            )
            project = create_project(session, user, name=args.project) if args.project else None
        except ApplicationError as exc:
            session.rollback()
            raise SystemExit(f"Seeding failed: {exc.message}") from exc
        except SQLAlchemyError as exc:
            session.rollback()
            raise SystemExit(f"Could not write to the database: {exc}") from exc

    print(f"{user.role.value} #{user.id}: {user.name} <{user.email}>")
    if project is not None:
        print(f"project #{project.id}: {project.name}")


if __name__ == "__main__":
    main()
