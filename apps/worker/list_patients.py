from __future__ import annotations

import argparse
from pathlib import Path

from packages.core.settings import configure_logging, load_settings
from packages.storage.kv import JsonFileKeyValueStore
from packages.storage.service import StorageService


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="List patients, optionally filtered.")
    parser.add_argument("--store", type=Path, help="Path to the JSON store file.")
    parser.add_argument("--query", default=None, help="Name or phone fragment to match.")
    args = parser.parse_args(argv)

    settings = load_settings()
    configure_logging(settings.log_level)
    service = StorageService(JsonFileKeyValueStore(args.store or settings.store_path))

    patients = service.search_patients(args.query)
    if not patients:
        print("no patients")
        return 0
    for patient in patients:
        visits = service.get_visits(patient.id)
        print(f"{patient.id} | {patient.full_name} | {patient.phone or '-'} | visits={len(visits)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
