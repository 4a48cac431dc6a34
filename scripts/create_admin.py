"""Create the admin account, or reset its password and role if it exists.

Usage:
    python scripts/create_admin.py admin@example.com 'S3cret!' [First] [Last]
"""
from __future__ import annotations

import importlib
import sys

from dotenv import load_dotenv

from travel_desk.core.constants import MIN_PASSWORD_LENGTH
from travel_desk.database.bootstrap import ensure_admin_user
from travel_desk.settings import get_settings_module


def main(argv: list[str]) -> int:
    if len(argv) < 2:
        print(__doc__.strip())
        return 2

    email, password = argv[0], argv[1]
    if len(password) < MIN_PASSWORD_LENGTH:
        print(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        return 2

    first_name = argv[2] if len(argv) > 2 else "Admin"
    last_name = argv[3] if len(argv) > 3 else "User"

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    user_id = ensure_admin_user(
        dict(settings.DB_CONFIG),
        email=email,
        password=password,
        first_name=first_name,
        last_name=last_name,
    )
    print(f"OK: admin {email.strip().lower()} ready (id={user_id})")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
