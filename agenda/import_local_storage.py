"""Console utility to import a localStorage export of the original agenda app."""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from agenda.core.errors import InvalidDateKeyError, MalformedPartitionError
from agenda.core.settings import DATA_DIR, STORE
from agenda.helpers.datetime_utils import to_date_key
from agenda.models.task_record import decode_partition
from agenda.storage.db import init_db
from agenda.storage.partition_store import PartitionStore, SqlPartitionStore


LOG_PATH = DATA_DIR / "logs" / "import.log"


def _importable(key: str, value: Any) -> bool:
    for prefix in (STORE.task_prefix, STORE.log_prefix):
        if not key.startswith(prefix):
            continue
        suffix = key[len(prefix) :]
        try:
            if to_date_key(suffix) != suffix:
                return False
        except InvalidDateKeyError:
            return False
        if not isinstance(value, str):
            return False
        if prefix == STORE.task_prefix:
            try:
                decode_partition(key, value)
            except MalformedPartitionError as exc:
                logging.warning("Not importing %s", exc)
                return False
        return True
    return False


def import_local_storage(
    dump: Dict[str, Any],
    *,
    store: Optional[PartitionStore] = None,
    overwrite: bool = False,
) -> int:
    """Copy task and journal entries of ``dump`` into ``store``.

    Existing keys are kept unless ``overwrite`` is set. Returns the number of
    keys written.
    """

    if store is None:
        store = SqlPartitionStore()
    imported = 0
    for key in sorted(dump):
        value = dump[key]
        if not _importable(key, value):
            continue
        if not overwrite and store.get(key) is not None:
            logging.info("Keeping existing %s", key)
            continue
        store.set(key, value)
        imported += 1
        logging.info("Imported %s", key)

    logging.info("Import completed; %d keys written", imported)
    return imported


def _setup_logging(log_path: Path) -> None:
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=str(log_path),
        filemode="a",
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__ or "")
    parser.add_argument("dump", type=Path, help="JSON object of localStorage keys to values")
    parser.add_argument("--overwrite", action="store_true", help="Replace keys that already exist")
    parser.add_argument(
        "--log",
        type=Path,
        default=LOG_PATH,
        help="Path to a log file (default: %(default)s)",
    )
    args = parser.parse_args()

    _setup_logging(args.log)
    init_db()
    try:
        dump = json.loads(args.dump.read_text(encoding="utf-8"))
        if not isinstance(dump, dict):
            raise ValueError("Expected a JSON object of key/value pairs")
        count = import_local_storage(dump, overwrite=args.overwrite)
        print(f"Import complete: {count} entries written.")
    except Exception as exc:  # pragma: no cover - CLI entry point
        logging.exception("Import failed: %s", exc)
        raise


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()
