#!/usr/bin/env python3
"""
Create a user with roles and print a bearer token for it.

    python scripts/create_user.py alice alice@example.com --roles REVIEWEE REVIEWER
"""
import os
import sys
import argparse
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from config.database import SessionLocal
from models.index import init_db
from api.roles.roles_model import RoleName
from api.user.user_service import create_user
from helpers.token_helper import create_user_token


def main(argv=None):
    parser = argparse.ArgumentParser(description="Create a user and mint an access token")
    parser.add_argument("username")
    parser.add_argument("email")
    parser.add_argument(
        "--roles",
        nargs="+",
        choices=[r.value for r in RoleName],
        default=[RoleName.REVIEWEE.value, RoleName.REVIEWER.value],
    )
    parser.add_argument("--expires-minutes", type=int, default=None)
    args = parser.parse_args(argv)

    init_db()
    db = SessionLocal()
    try:
        user = create_user(db, args.username, args.email, [RoleName(r) for r in args.roles])
        print(f"user id: {user.id}")
        print(f"roles:   {', '.join(user.role_names)}")
        print(f"token:   {create_user_token(user, args.expires_minutes)}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
