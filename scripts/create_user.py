#!/usr/bin/env python3
"""
Create a dashboard user.

The dashboard has no sign-up flow; operators add users with this script. The
password is hashed with bcrypt before it leaves the process.

Usage:
    python scripts/create_user.py --name "User" --email user@nextmail.com --password 123456
    python scripts/create_user.py --email user@nextmail.com   # prompts for the password
"""

import argparse
import asyncio
import getpass
import logging
import os
import sys

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from backend.db.client import get_supabase_client
from backend.services.user_service import create_user
from backend.services.validation import MIN_PASSWORD_LENGTH, validate_credentials


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


async def run(name: str, email: str, password: str) -> int:
    if validate_credentials({"email": email, "password": password}) is None:
        logger.error(
            f"Invalid input: email must be valid and password at least "
            f"{MIN_PASSWORD_LENGTH} characters"
        )
        return 1

    principal = await create_user(
        get_supabase_client(),
        name=name,
        email=email,
        password=password,
    )
    print(f"Created user {principal.email} (id={principal.id})")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Create an invoice dashboard user")
    parser.add_argument(
        "--name", "-n",
        type=str,
        default="",
        help="Display name"
    )
    parser.add_argument(
        "--email", "-e",
        type=str,
        required=True,
        help="Login email (matched case-sensitively)"
    )
    parser.add_argument(
        "--password", "-p",
        type=str,
        help="Password (prompted when omitted)"
    )

    args = parser.parse_args()
    password = args.password or getpass.getpass("Password: ")

    sys.exit(asyncio.run(run(args.name or args.email, args.email, password)))


if __name__ == "__main__":
    main()
