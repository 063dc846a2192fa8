# seed.py
"""Create the initial admin account.

Usage: SEED_ADMIN_EMAIL=... SEED_ADMIN_PASSWORD=... python seed.py
"""
import json
import os
import sys

from pymongo.errors import PyMongoError

from config import BCRYPT_ROUNDS, LOG_LEVEL
from database import client, users
from repositories.user import UserRepository, make_pwd_context
from utils.errors import SignupError, UserExists
from utils.logger import configure_logging
from utils.validation import validate_signup


def seed_admin(repo: UserRepository, name: str, email: str, password: str) -> dict:
    payload = json.dumps({"name": name, "email": email, "password": password, "role": "admin"})
    signup_in = validate_signup(payload.encode())
    if repo.exists(signup_in.email):
        raise UserExists()
    return repo.create(signup_in)


def main() -> int:
    configure_logging(LOG_LEVEL)
    repo = UserRepository(users, make_pwd_context(BCRYPT_ROUNDS))
    try:
        repo.ensure_indexes()
        admin = seed_admin(
            repo,
            os.getenv("SEED_ADMIN_NAME", "Administrator"),
            os.getenv("SEED_ADMIN_EMAIL", ""),
            os.getenv("SEED_ADMIN_PASSWORD", ""),
        )
    except SignupError as exc:
        print(f"Seed failed: {exc.message}")
        return 1
    except PyMongoError as exc:
        print(f"Seed failed: {exc}")
        return 1
    finally:
        client.close()
    print(f"Admin created: {admin['email']} ({admin['_id']})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
