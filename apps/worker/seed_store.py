from __future__ import annotations

import argparse
from pathlib import Path

from packages.core.settings import configure_logging, load_settings
from packages.storage.kv import JsonFileKeyValueStore
from packages.storage.service import StorageService


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Write the demo records into an empty store.")
    parser.add_argument("--store", type=Path, help="Path to the JSON store file.")
    args = parser.parse_args(argv)

    settings = load_settings()
    configure_logging(settings.log_level)
    store_path = args.store or settings.store_path

    service = StorageService(JsonFileKeyValueStore(store_path))
    if service.init():
        print(f"seeded: {store_path}")
    else:
        print(f"already initialized: {store_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
