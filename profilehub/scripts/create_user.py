"""
Create a user (e.g. first admin), or change an existing user's role. Run from project root:
  python -m profilehub.scripts.create_user NAME EMAIL PASSWORD [--role admin]
  python -m profilehub.scripts.create_user --set-role EMAIL ROLE
Example:
  python -m profilehub.scripts.create_user Admin admin@example.org your-secure-password --role admin
"""
import argparse
import asyncio
import sys

from profilehub.core.database import dispose_engine, get_sessionmaker
from profilehub.core.roles import ROLE_VALUES, Role
from profilehub.core.security import (
    EMAIL_MAX_LEN,
    NAME_MAX_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    hash_password,
)
from profilehub.repositories import EmailAlreadyExistsError, SqlUserRepository, UserRepository


async def create_user(users: UserRepository, name: str, email: str, password: str, role: str) -> int:
    name = name.strip()
    email = email.strip().lower()
    if not name or len(name) > NAME_MAX_LEN:
        print(f"Name must be 1-{NAME_MAX_LEN} characters.", file=sys.stderr)
        return 1
    if "@" not in email or len(email) > EMAIL_MAX_LEN:
        print("Invalid email.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN):
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1
    try:
        await users.create(
            name=name, email=email, password_hash=hash_password(password), role=Role(role)
        )
    except EmailAlreadyExistsError:
        print(f"User '{email}' already exists.", file=sys.stderr)
        return 1
    print(f"Created user '{email}' with role '{role}'.")
    return 0


async def set_role(users: UserRepository, email: str, role: str) -> int:
    user = await users.get_by_email(email)
    if user is None or not await users.set_role(user.id, Role(role)):
        print(f"User '{email}' not found.", file=sys.stderr)
        return 1
    print(f"User '{user.email}' now has role '{role}'.")
    return 0


async def _run(args: argparse.Namespace) -> int:
    try:
        async with get_sessionmaker()() as db:
            users = SqlUserRepository(db)
            if args.set_role:
                return await set_role(users, args.set_role[0], args.set_role[1])
            if len(args.values) != 3:
                print("Expected NAME EMAIL PASSWORD.", file=sys.stderr)
                return 2
            name, email, password = args.values
            return await create_user(users, name, email, password, args.role)
    finally:
        await dispose_engine()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a profilehub user or change a role.")
    parser.add_argument("values", nargs="*", metavar="NAME EMAIL PASSWORD")
    parser.add_argument("--role", default="user", choices=sorted(ROLE_VALUES))
    parser.add_argument(
        "--set-role",
        nargs=2,
        metavar=("EMAIL", "ROLE"),
        help="Change the role of an existing user instead of creating one",
    )
    args = parser.parse_args(argv)
    if args.set_role and args.set_role[1] not in ROLE_VALUES:
        parser.error(f"ROLE must be one of: {', '.join(sorted(ROLE_VALUES))}")
    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())
