#!/usr/bin/env python3
"""
Replace the category keywords stored in the SQLite database.

Order matters: the first keyword found in an event wins.

Usage:
    uv run python src/scripts/set_categories.py ProjectX "Client A" Hiring
    uv run python src/scripts/set_categories.py --list
"""

import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import DB_PATH
from core.database import SqliteCategorySource, get_connection, set_categories


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Set report category keywords")
    parser.add_argument("keywords", nargs="*", help="Keywords in match order")
    parser.add_argument("--list", action="store_true", help="Show the current keywords")
    args = parser.parse_args(argv)

    if args.list or not args.keywords:
        for position, keyword in enumerate(SqliteCategorySource(DB_PATH).get_keywords(), start=1):
            print(f"{position:>3}. {keyword}")
        return 0

    keywords = [k.strip() for k in args.keywords if k.strip()]
    conn = get_connection(DB_PATH)
    try:
        set_categories(conn, keywords)
    finally:
        conn.close()
    print(f"Saved {len(keywords)} categories to {DB_PATH}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
