#!/usr/bin/env python3
"""Issue a bearer token for local development.

Users are managed by an external identity provider; this script signs a
token with the configured ``JWT_SECRET_KEY`` so the API can be exercised
by hand. ``--generate-secret`` creates a random signing key and stores it
in the keychain first.

Usage:
    python -m scripts.issue_token alice
    python -m scripts.issue_token alice --minutes 1440
    python -m scripts.issue_token --generate-secret
"""

import argparse
import secrets
import sys
from datetime import timedelta
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from services.credential_manager import set_credential
from utils.security import create_access_token


def generate_secret() -> bool:
    """Store a fresh random signing key in the keychain."""
    if set_credential("JWT_SECRET_KEY", secrets.token_urlsafe(48)):
        print("Stored a new JWT_SECRET_KEY in keychain.")
        print("Tokens issued with the previous key are no longer valid.")
        return True
    print("Error: could not store JWT_SECRET_KEY in keychain")
    return False


def issue(user_id: str, minutes: int | None = None) -> str:
    """Sign a token for ``user_id``, valid for ``minutes`` if given."""
    expires = timedelta(minutes=minutes) if minutes else None
    return create_access_token(user_id, expires_delta=expires)


def main():
    parser = argparse.ArgumentParser(description="Issue a development bearer token")
    parser.add_argument("user_id", nargs="?", help="User id to put in the sub claim")
    parser.add_argument(
        "--minutes",
        type=int,
        default=None,
        help="Token lifetime in minutes (default: ACCESS_TOKEN_EXPIRE_MINUTES)",
    )
    parser.add_argument(
        "--generate-secret",
        action="store_true",
        help="Generate and store a new signing key instead of issuing a token",
    )

    args = parser.parse_args()
    if args.generate_secret:
        sys.exit(0 if generate_secret() else 1)
    if not args.user_id:
        parser.error("user_id is required")

    print(issue(args.user_id, args.minutes))


if __name__ == "__main__":
    main()
