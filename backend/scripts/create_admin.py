from __future__ import annotations

import argparse
import secrets
import string

from sqlalchemy.orm import Session

from ats.bootstrap import create_tables, ensure_admin
from ats.database import engine


def _generate_password(length: int = 20) -> str:
    alphabet = string.ascii_letters + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(length))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Create an admin account, or promote an existing account to admin and reset its password."
    )
    parser.add_argument("--email", required=True, help="Admin email")
    parser.add_argument("--password", default=None, help="Admin password (generated if omitted)")
    parser.add_argument("--name", default="Administrator", help="Display name for a new account")
    args = parser.parse_args(argv)

    create_tables(engine)
    password = args.password or _generate_password()

    with Session(engine) as db:
        user, outcome = ensure_admin(db, args.email, password, args.name)

    if outcome == "unchanged":
        print(f"admin already exists email={user.email} (password not changed)")
        return 0

    print(f"{outcome} admin id={user.id} email={user.email}")
    if args.password is None:
        print(f"generated password: {password}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
