"""One-off migration script: JSON document (data.json) -> SQL document store."""
from __future__ import annotations

import argparse
import json
from pathlib import Path
import sys

# make the flowers_api package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from flowers_api.core.config import get_settings
from flowers_api.db.session import create_schema
from flowers_api.domain.collections import COLLECTIONS
from flowers_api.repositories.sql_repository import SQLRepository


def _load_json(path: Path) -> dict:
    if not path.exists():
        raise SystemExit(f"File not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise SystemExit(f"{path} does not contain a JSON object")
    for name in COLLECTIONS:
        data.setdefault(name, [])
    return data


def migrate(data_file: Path) -> int:
    create_schema()
    data = _load_json(data_file)
    SQLRepository().write_all(data)
    return sum(len(records or []) for records in data.values())


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--data-file", type=Path, default=get_settings().data_file)
    args = parser.parse_args()
    total = migrate(args.data_file)
    print(f"Migrated {total} record(s) from {args.data_file} to the SQL store.")
