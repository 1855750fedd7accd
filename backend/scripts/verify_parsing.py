#!/usr/bin/env python3
"""
Run the stream extractor over a saved parking page response and report what it found.
Save a response first (e.g. from the browser network tab) then:
  cd backend && poetry run python scripts/verify_parsing.py ../res.txt
"""
import argparse
import sys
from pathlib import Path

# backend/scripts/ -> backend/
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from parkwatch.services.parking import extract_parking_lots, normalize_lots


def main() -> int:
    parser = argparse.ArgumentParser(description="Check that a saved response parses into parking lots.")
    parser.add_argument("path", type=Path, help="Saved response body")
    args = parser.parse_args()
    try:
        body = args.path.read_text(encoding="utf-8")
    except OSError as e:
        print(f"Error reading file: {e}", file=sys.stderr)
        return 2
    raw = extract_parking_lots(body)
    if not raw:
        print("FAILURE: Could not parse parking lots.", file=sys.stderr)
        return 1
    lots = normalize_lots(raw)
    print(f"SUCCESS: Parsed {len(lots)} parking lots.")
    print("First item:", lots[0].to_dict())
    return 0


if __name__ == "__main__":
    sys.exit(main())
