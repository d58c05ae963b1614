from __future__ import annotations

import argparse
import json
from pathlib import Path

from packages.core.settings import configure_logging, load_settings
from packages.storage.kv import JsonFileKeyValueStore
from packages.storage.service import StorageService


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print clinic dashboard counts.")
    parser.add_argument("--store", type=Path, help="Path to the JSON store file.")
    parser.add_argument("--json", action="store_true", help="Emit JSON output.")
    args = parser.parse_args(argv)

    settings = load_settings()
    configure_logging(settings.log_level)
    service = StorageService(JsonFileKeyValueStore(args.store or settings.store_path))

    stats = service.get_stats()
    if args.json:
        print(json.dumps(stats.model_dump(by_alias=True)))
        return 0
    print(f"total patients: {stats.total_patients}")
    print(f"visits today: {stats.visits_today}")
    print(f"active prescriptions: {stats.active_prescriptions}")
    print(f"pending appointments: {stats.pending_appointments}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
