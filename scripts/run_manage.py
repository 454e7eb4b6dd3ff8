#!/usr/bin/env python
"""
Run Django management commands with .env values taking precedence.

A DATABASE_URL exported in the shell would otherwise win over the project's
.env file, and load_fixtures purges whatever database it points at.

Usage:
    python scripts/run_manage.py <command> [args...]

Examples:
    python scripts/run_manage.py migrate
    python scripts/run_manage.py load_fixtures --group users
    python scripts/run_manage.py load_fixtures --append --no-input
"""

import os
import sys
from pathlib import Path

from dotenv import dotenv_values

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# Keys whose .env value must override the shell environment
OVERRIDE_KEYS = ("DATABASE_URL", "SEEDBED_DATABASE")


def load_env_with_override():
    env_path = PROJECT_ROOT / ".env"
    if not env_path.exists():
        return

    values = dotenv_values(env_path)
    for key in OVERRIDE_KEYS:
        env_value = values.get(key)
        if not env_value:
            continue

        current = os.environ.get(key, "")
        if current and current != env_value:
            print(
                f"\033[93mOverriding {key} from shell with the value in .env\033[0m",
                file=sys.stderr,
            )
        os.environ[key] = env_value


def main():
    load_env_with_override()

    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "seedbed.settings")

    from django.core.management import execute_from_command_line

    execute_from_command_line(["manage.py"] + sys.argv[1:])


if __name__ == "__main__":
    main()
