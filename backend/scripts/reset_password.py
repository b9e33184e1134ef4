from __future__ import annotations

import argparse
import sys

from sqlalchemy.orm import Session

from ats.bootstrap import reset_password
from ats.database import engine


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Reset the password of an existing account.")
    parser.add_argument("--email", required=True, help="Account email")
    parser.add_argument("--password", required=True, help="New password (at least 6 characters)")
    args = parser.parse_args(argv)

    if len(args.password) < 6:
        sys.stderr.write("password must be at least 6 characters\n")
        return 2

    with Session(engine) as db:
        user = reset_password(db, args.email, args.password)

    if user is None:
        sys.stderr.write(f"user not found: {args.email}\n")
        return 1
    print(f"password reset for {user.email}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
