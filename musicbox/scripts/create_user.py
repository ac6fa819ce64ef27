"""
Create a user from the command line. Run from project root:
  python -m musicbox.scripts.create_user USERNAME PASSWORD [--admin]
Example:
  python -m musicbox.scripts.create_user curator a-secure-password --admin
"""
import argparse
import sys

from musicbox.core.config import get_settings
from musicbox.core.database import SessionLocal, engine
from musicbox.core.security import PASSWORD_MAX_LEN, USERNAME_MAX_LEN, hash_password
from musicbox.models.user import User
from musicbox.services.bootstrap import ensure_directories, ensure_schema


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Musicbox user.")
    parser.add_argument("username", help=f"Username (1-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("password", help=f"Password (1-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("--admin", action="store_true", help="Grant upload rights")
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not username or len(username) > USERNAME_MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not args.password or len(args.password) > PASSWORD_MAX_LEN:
        print(f"Password must be 1-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    settings = get_settings()
    ensure_directories(settings)
    ensure_schema(engine)
    db = SessionLocal()
    try:
        existing = db.query(User).filter(User.username == username).first()
        if existing:
            print(f"User '{username}' already exists.", file=sys.stderr)
            return 1
        user = User(
            username=username,
            password_hash=hash_password(args.password, settings.BCRYPT_ROUNDS),
            is_admin=args.admin,
        )
        db.add(user)
        db.commit()
        role = "admin" if args.admin else "user"
        print(f"Created user '{username}' ({role}).")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
