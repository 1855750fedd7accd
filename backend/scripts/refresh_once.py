#!/usr/bin/env python3
"""
Run one parking fetch cycle (fetch, persist snapshot, badge, history sample) and print the result.
Run: cd backend && poetry run python scripts/refresh_once.py
"""
import json
import logging
import sys
from pathlib import Path

# backend/scripts/ -> backend/
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from parkwatch.db.session import init_db
from parkwatch.scheduler.refresh_job import STATUS_OK, refresh


def main() -> int:
    logging.basicConfig(level=logging.INFO)
    init_db()
    result = refresh()
    print(json.dumps(result.to_dict(), indent=2))
    return 0 if result.status == STATUS_OK else 1


if __name__ == "__main__":
    sys.exit(main())
