"""
Create a user without going through the HTTP API. Run from project root:
  python -m questlog.scripts.create_user USERNAME EMAIL PASSWORD
Example:
  python -m questlog.scripts.create_user gm gm@example.com your-secure-password
"""
import argparse
import sys

from questlog.core.config import get_settings
from questlog.core.database import SessionLocal
from questlog.core.errors import ConflictError, ValidationError
from questlog.core.security import EMAIL_MAX_LEN, PASSWORD_MAX_LEN, USERNAME_MAX_LEN
from questlog.services.auth import AuthService
from questlog.services.token_store import InMemoryRefreshTokenStore


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Questlog user.")
    parser.add_argument("username", help=f"Username (1-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("email", help=f"Email address (1-{EMAIL_MAX_LEN} chars)")
    parser.add_argument("password", help=f"Password (1-{PASSWORD_MAX_LEN} chars)")
    args = parser.parse_args(argv)

    if len(args.username.strip()) > USERNAME_MAX_LEN or len(args.email.strip()) > EMAIL_MAX_LEN:
        print("Username and email must be at most 255 characters.", file=sys.stderr)
        return 1
    if len(args.password) > PASSWORD_MAX_LEN:
        print(f"Password must be at most {PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        # Registration issues no tokens, so the registry is never touched here.
        service = AuthService(db, InMemoryRefreshTokenStore(), get_settings())
        try:
            user = service.register(args.username, args.email, args.password)
        except (ConflictError, ValidationError) as e:
            print(e.message, file=sys.stderr)
            return 1
        print(f"Created user '{user.username}' (id={user.id}).")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
