"""
Seed the configured database with realm fixtures for local development.

Usage::

    BOBA_DATABASE_URL=sqlite:///boba.db python scripts/seed_local_realm.py fixture.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from boba_backend.db import InMemoryDbClient
from boba_backend.dependencies import get_db_client
from boba_backend.seed import load_fixture


logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Load realms, boards and user settings from a JSON fixture."
    )
    parser.add_argument("fixture", type=Path, help="Path to the JSON fixture")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(message)s")
    db = get_db_client()
    if isinstance(db, InMemoryDbClient):
        logger.error("No BOBA_DATABASE_URL configured; refusing to seed in-memory DB")
        return 1

    with args.fixture.open(encoding="utf-8") as handle:
        fixture = json.load(handle)

    counts = load_fixture(db, fixture)
    logger.info(
        "Seeded %d realms, %d boards, %d users",
        counts["realms"],
        counts["boards"],
        counts["users"],
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
