"""Named-blob storage for calculator inputs and bracket tables.

Each calculator keeps its whole form as one flat JSON object under a string
key, and the bracket tables are stored the same way.  Stores only know how to
read and write text; the helpers below handle JSON and fall back to defaults
when a stored blob is missing or unreadable.  Writes are last-write-wins.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Dict, Mapping, Optional, Protocol

from .brackets import BracketTable, table_from_json, table_to_json

logger = logging.getLogger("tax_dashboard")

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class BlobStore(Protocol):
    def load(self, key: str) -> Optional[str]:
        ...

    def save(self, key: str, text: str) -> None:
        ...


class MemoryStore:
    """In-process store, used for tests and for sessions without a data dir."""

    def __init__(self, blobs: Optional[Dict[str, str]] = None):
        self.blobs: Dict[str, str] = dict(blobs or {})

    def load(self, key: str) -> Optional[str]:
        return self.blobs.get(key)

    def save(self, key: str, text: str) -> None:
        self.blobs[key] = text


class JsonFileStore:
    """One ``<key>.json`` file per blob under ``root``."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid storage key {key!r}")
        return self.root / f"{key}.json"

    def load(self, key: str) -> Optional[str]:
        try:
            with open(self._path(key), "r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as exc:
            logger.warning("Ignoring unreadable blob %s: %s", key, exc)
            return None

    def save(self, key: str, text: str) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        with open(self._path(key), "w", encoding="utf-8") as f:
            f.write(text)


def _load_json(store: BlobStore, key: str):
    text = store.load(key)
    if not text:
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning("Ignoring malformed blob %s: %s", key, exc)
        return None


def load_state(store: BlobStore, key: str, defaults: Mapping) -> Dict:
    """Return the stored form state for ``key`` merged over ``defaults``.

    The merge is shallow: stored top-level fields win, fields missing from
    the blob keep their default.  Anything that is not a JSON object is
    ignored.
    """
    parsed = _load_json(store, key)
    if isinstance(parsed, dict):
        return {**defaults, **parsed}
    if parsed is not None:
        logger.warning("Ignoring blob %s: expected an object, got %s", key, type(parsed).__name__)
    return dict(defaults)


def save_state(store: BlobStore, key: str, state: Mapping) -> None:
    store.save(key, json.dumps(dict(state)))


def commit_state(store: BlobStore, key: str, previous: Mapping, current: Mapping) -> bool:
    """Persist ``current`` if it differs from ``previous``; True when written."""
    if dict(previous) == dict(current):
        return False
    save_state(store, key, current)
    logger.debug("Saved %s", key)
    return True


def load_table(store: BlobStore, key: str, default: BracketTable) -> BracketTable:
    parsed = _load_json(store, key)
    if parsed is None:
        return default
    try:
        return table_from_json(parsed)
    except (TypeError, KeyError, ValueError, AttributeError) as exc:
        logger.warning("Ignoring bracket blob %s: %s", key, exc)
        return default


def save_table(store: BlobStore, key: str, table: BracketTable) -> None:
    store.save(key, json.dumps(table_to_json(table)))


def load_tables(
    store: BlobStore,
    key: str,
    defaults: Mapping[str, BracketTable],
) -> Dict[str, BracketTable]:
    """Load a mapping of tables (e.g. federal tables keyed by filing status).

    Statuses present in the blob replace the defaults one by one; a status
    whose rows cannot be read keeps its default.
    """
    tables = dict(defaults)
    parsed = _load_json(store, key)
    if parsed is None:
        return tables
    if not isinstance(parsed, dict):
        logger.warning("Ignoring bracket blob %s: expected an object", key)
        return tables
    for status, rows in parsed.items():
        try:
            tables[status] = table_from_json(rows)
        except (TypeError, KeyError, ValueError, AttributeError) as exc:
            logger.warning("Ignoring %s brackets in blob %s: %s", status, key, exc)
    return tables


def save_tables(store: BlobStore, key: str, tables: Mapping[str, BracketTable]) -> None:
    store.save(key, json.dumps({status: table_to_json(t) for status, t in tables.items()}))


__all__ = [
    "BlobStore",
    "MemoryStore",
    "JsonFileStore",
    "load_state",
    "save_state",
    "commit_state",
    "load_table",
    "save_table",
    "load_tables",
    "save_tables",
]
