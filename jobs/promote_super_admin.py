# jobs/promote_super_admin.py

"""
Bootstrap command: grant super_admin to an existing account by email.

The API never lets anyone grant the first super_admin, so the first one is
created out-of-band with service-role rights:

    python -m jobs.promote_super_admin owner@example.com
"""

import argparse
import sys

from core.backends import get_backend
from core.errors import AppError, RecordNotFound
from core.logging_config import logger
from models.enums import AppRole


def promote_super_admin(backend, email: str) -> dict:
    email = email.strip().lower()
    profiles = backend.select("profiles", {"email": email})
    if not profiles:
        raise RecordNotFound(f"No profile for {email}; the account must sign up first")

    user_id = profiles[0]["id"]
    existing = backend.select(
        "user_roles", {"user_id": user_id, "role": AppRole.super_admin.value}
    )
    if existing:
        logger.info(f"{email} already holds super_admin")
        return {"user_id": user_id, "email": email, "created": False}

    backend.insert("user_roles", {"user_id": user_id, "role": AppRole.super_admin.value})
    logger.info(f"Granted super_admin to {email} ({user_id})")
    return {"user_id": user_id, "email": email, "created": True}


def run(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Grant super_admin to an account by email.")
    parser.add_argument("email")
    args = parser.parse_args(argv)

    try:
        result = promote_super_admin(get_backend(), args.email)
    except AppError as e:
        logger.error(f"Promotion failed: {e.detail}")
        return 1

    state = "granted" if result["created"] else "already present"
    print(f"super_admin {state} for {result['email']} ({result['user_id']})")
    return 0


if __name__ == "__main__":
    sys.exit(run())
