#!/usr/bin/env python3
"""Move the token-signing secret from .env to the OS keychain.

Reads the backend ``.env`` file, stores each non-empty secret listed in
``CREDENTIAL_KEYS`` via ``keyring``, and prints a summary. ``--clean``
removes the migrated lines from ``.env`` and keeps everything else.

Usage:
    python -m scripts.migrate_env_to_keychain           # migrate only
    python -m scripts.migrate_env_to_keychain --clean    # migrate & remove from .env
"""

import argparse
import re
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import dotenv_values

from services.credential_manager import CREDENTIAL_KEYS, get_credential, set_credential


def migrate(env_path: Path, *, clean: bool = False) -> None:
    """Copy secrets from ``env_path`` into the keychain.

    Args:
        env_path: Path to the ``.env`` file.
        clean: If ``True``, drop the migrated lines from the file afterwards.
    """
    if not env_path.exists():
        print(f"No .env file found at {env_path}")
        sys.exit(1)

    values = dotenv_values(env_path)
    outcome: dict[str, list[str]] = {"stored": [], "existing": [], "empty": [], "failed": []}

    for key in sorted(CREDENTIAL_KEYS):
        value = values.get(key)
        if not value:
            outcome["empty"].append(key)
        elif get_credential(key) == value:
            outcome["existing"].append(key)
        elif set_credential(key, value):
            outcome["stored"].append(key)
        else:
            outcome["failed"].append(key)

    _print_summary(outcome)

    moved = outcome["stored"] + outcome["existing"]
    if clean and moved:
        _clean_env_file(env_path, moved)
    elif clean:
        print("Nothing to clean from .env.")


def _print_summary(outcome: dict[str, list[str]]) -> None:
    headings = [
        ("stored", "Stored in keychain", "+"),
        ("existing", "Already in keychain", "="),
        ("empty", "Skipped (empty/missing in .env)", "-"),
        ("failed", "Failed", "!"),
    ]
    print()
    print("=" * 60)
    print("Migration Summary")
    print("=" * 60)
    for bucket, title, marker in headings:
        keys = outcome[bucket]
        if not keys:
            continue
        print(f"\n  {title} ({len(keys)}):")
        for key in keys:
            print(f"    {marker} {key}")
    print()


def _clean_env_file(env_path: Path, keys_to_remove: list[str]) -> None:
    """Remove secret lines from .env, preserving everything else."""
    lines = env_path.read_text().splitlines(keepends=True)
    pattern = re.compile(
        r"^(" + "|".join(re.escape(k) for k in keys_to_remove) + r")\s*="
    )
    kept = [line for line in lines if not pattern.match(line)]
    env_path.write_text("".join(kept))
    print(f"Removed {len(keys_to_remove)} secret(s) from {env_path}")


def main():
    parser = argparse.ArgumentParser(
        description="Move the token-signing secret from .env to the OS keychain"
    )
    parser.add_argument(
        "--clean",
        action="store_true",
        help="Remove migrated secrets from .env after storing in keychain",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=Path(__file__).parent.parent / ".env",
        help="Path to .env file (default: backend/.env)",
    )

    args = parser.parse_args()
    migrate(args.env_file, clean=args.clean)


if __name__ == "__main__":
    main()
