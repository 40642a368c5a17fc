"""
Create a user (e.g. the first admin). Registration never grants admin, so this is
the way to create one. Run from project root:
  python -m amnii.scripts.create_user NAME EMAIL PASSWORD [--admin]
Example:
  python -m amnii.scripts.create_user "Site Admin" admin@example.com your-secure-password --admin
"""
import argparse
import logging
import sys

from dotenv import load_dotenv
from pydantic import ValidationError

from amnii.core.config import get_settings
from amnii.core.database import build_session_factory
from amnii.core.errors import ConflictError, InvalidInputError
from amnii.repositories.users import SqlUserStore
from amnii.services.accounts import create_account, validate_registration

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an Amnii user.")
    parser.add_argument("name", help="Display name (5-50 chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (5-255 chars)")
    parser.add_argument("--admin", action="store_true", help="Grant admin privilege")
    args = parser.parse_args(argv)

    try:
        payload = validate_registration(
            {"name": args.name.strip(), "email": args.email.strip(), "password": args.password}
        )
    except InvalidInputError as e:
        print(e.message, file=sys.stderr)
        return 1

    load_dotenv()
    try:
        settings = get_settings()
    except ValidationError as e:
        invalid = {str(err["loc"][0]) for err in e.errors() if err.get("loc")}
        if "JWT_PRIVATE_KEY" in invalid:
            print("Fatal error: JWT_PRIVATE_KEY is not defined", file=sys.stderr)
        else:
            print(f"Fatal error: invalid configuration for {', '.join(sorted(invalid))}", file=sys.stderr)
        return 1
    db = build_session_factory(settings.DATABASE_URL)()
    try:
        user = create_account(
            SqlUserStore(db),
            name=payload.name,
            email=payload.email,
            password=payload.password,
            is_admin=args.admin,
            bcrypt_rounds=settings.BCRYPT_ROUNDS,
        )
    except ConflictError:
        print(f"User '{payload.email}' already exists.", file=sys.stderr)
        return 1
    finally:
        db.close()
    role = "admin" if user.is_admin else "user"
    print(f"Created {role} '{user.email}' with id {user.id}.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
