"""Create the first admin account.

Usage: python scripts/seed_db.py [ADMIN_ID] [ADMIN_NAME]
The password is read from SEED_ADMIN_PASSWORD.
"""

from __future__ import annotations

import importlib
import logging
import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.field_attendance.field_attendance.common.logging_utils import setup_logging
from src.field_attendance.field_attendance.database.bootstrap import ensure_seed_admin


def main() -> None:
    load_dotenv(override=False)
    setup_logging(logging.INFO)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    admin_id = sys.argv[1] if len(sys.argv) > 1 else getattr(settings, "SEED_ADMIN_ID", "admin")
    admin_name = sys.argv[2] if len(sys.argv) > 2 else getattr(settings, "SEED_ADMIN_NAME", "Administrator")
    password = os.getenv("SEED_ADMIN_PASSWORD") or getattr(settings, "SEED_ADMIN_PASSWORD", "")
    if not password:
        raise SystemExit("SEED_ADMIN_PASSWORD belum diisi.")

    created = ensure_seed_admin(db_config, user_id=admin_id, name=admin_name, password=password)
    print(f"OK: admin {admin_id} {'created' if created else 'already exists'}")


if __name__ == "__main__":
    main()
