"""
Create a user (e.g. first admin). Run from project root:
  python -m app.scripts.create_user EMAIL DISPLAY_NAME PASSWORD [role]
Example:
  python -m app.scripts.create_user admin@conspira.local "Site Admin" your-secure-password admin
"""
import argparse
import sys

from pydantic import ValidationError

from app.core.database import SessionLocal
from app.core.security import hash_password
from app.models import User
from app.schemas.auth import UserCreate


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a ConspiraLab user (no registration UI).")
    parser.add_argument("email", help="Login email (5-255 chars, stored lower-case)")
    parser.add_argument("display_name", help="Name shown on pages and comments (2-255 chars)")
    parser.add_argument("password", help="Password (6-128 chars)")
    parser.add_argument("role", nargs="?", default="user", choices=["user", "admin"])
    args = parser.parse_args(argv)

    try:
        body = UserCreate(
            email=args.email,
            display_name=args.display_name,
            password=args.password,
            role=args.role,
        )
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"])
            print(f"Invalid {field}: {err['msg']}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        existing = db.query(User).filter(User.email == body.email).first()
        if existing:
            print(f"User '{body.email}' already exists.", file=sys.stderr)
            return 1
        user = User(
            email=body.email,
            display_name=body.display_name,
            password_hash=hash_password(body.password),
            role=body.role,
        )
        db.add(user)
        db.commit()
        print(f"Created user '{body.email}' with role '{body.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
