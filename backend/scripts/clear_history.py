#!/usr/bin/env python3
"""
Delete stored history (historyStats0..6 and lastSavedHistory). Snapshot and selection are kept.
Run: cd backend && poetry run python scripts/clear_history.py
"""
import sys
from pathlib import Path

# backend/scripts/ -> backend/
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from parkwatch.core.constants import DAYS_PER_WEEK, KEY_LAST_SAVED_HISTORY, history_key
from parkwatch.db.session import SessionLocal
from parkwatch.services.store import KeyValueStore


def main():
    keys = [history_key(d) for d in range(DAYS_PER_WEEK)] + [KEY_LAST_SAVED_HISTORY]
    print(f"Deleting {', '.join(keys)} ...")
    db = SessionLocal()
    try:
        store = KeyValueStore(db)
        for key in keys:
            store.delete(key)
    finally:
        db.close()
    print("Done. Next admitted sample starts a fresh history.")


if __name__ == "__main__":
    main()
