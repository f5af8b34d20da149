"""
Import memory links from a JSON export into the link database.

The file holds a list of link objects (the shape produced by
core.retention.schemas.dump_memory_link). Every entry is validated before
anything is written; one bad entry aborts the whole import.

Usage:
    python -m scripts.data.import_links_json path/to/links.json [--dry-run]
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from pydantic import ValidationError

from core.retention.database import SqlMemoryStore
from core.retention.schemas import parse_memory_link


def load_links(path: Path) -> list:
    """Read and validate every link in the file."""
    with open(path, 'r', encoding='utf-8') as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValueError(f"Expected a JSON list of links in {path}")

    links = []
    for idx, entry in enumerate(raw):
        try:
            links.append(parse_memory_link(entry))
        except ValidationError as e:
            raise ValueError(f"Entry {idx} in {path} is invalid:\n{e}") from e
    return links


def main():
    parser = argparse.ArgumentParser(description="Import memory links from JSON")
    parser.add_argument("path", type=Path, help="JSON file with a list of links")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate the file without writing to the database"
    )
    args = parser.parse_args()

    links = load_links(args.path)
    print(f"Validated {len(links)} links from {args.path}")

    if args.dry_run:
        print("Dry run - nothing written")
        return

    store = SqlMemoryStore.from_url()
    store.init_db()
    store.put_many(links)
    print(f"✓ Imported {len(links)} links")


if __name__ == "__main__":
    main()
