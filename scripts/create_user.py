"""Utility script to register a patient or therapist from the command line."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from mindmend.application.use_cases.users import create_user
from mindmend.domain.entities import USER_ROLES
from mindmend.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a MindMend user account.")
    parser.add_argument("--name", required=True, help="Display name of the user")
    parser.add_argument("--email", required=True, help="Login email address")
    parser.add_argument("--role", choices=USER_ROLES, default="therapist")
    parser.add_argument(
        "--password",
        default=None,
        help="Password; prompted interactively when omitted.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    password = args.password or getpass("Password: ")
    if not password:
        raise SystemExit("A password is required.")

    initialize_database()

    session = SessionLocal()
    try:
        user = create_user(
            session,
            name=args.name,
            email=args.email,
            password=password,
            role=args.role,
        )
    except ValueError as exc:
        raise SystemExit(f"Could not create the user: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Database error while creating the user: {exc}") from exc
    finally:
        session.close()

    print(f"Created {user.role} {user.email} with id {user.id}")


if __name__ == "__main__":
    main()
