"""Whole-collection persistence for JSON-like records.

Each named collection lives in its own file as a single JSON array. Loads never
fail the caller: a missing or damaged file reads as an empty collection. Saves
rewrite the entire file.
"""
from __future__ import annotations

import copy
import json
import logging
import os
import re
import tempfile
import threading
from decimal import Decimal
from pathlib import Path
from typing import Iterable, Protocol

from pydantic import ValidationError as PydanticValidationError

from ledger_api.core.exceptions import StoreError

logger = logging.getLogger(__name__)

_COLLECTION_NAME_RE = re.compile(r"^[A-Za-z0-9_-]+$")


def _check_collection_name(name: str) -> str:
    if not isinstance(name, str) or not _COLLECTION_NAME_RE.match(name):
        raise StoreError(f"Invalid collection name: {name!r}")
    return name


def _json_default(value):
    if isinstance(value, Decimal):
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def decode_records(model, records: list[dict], collection: str) -> list:
    """Validate raw records into ``model`` instances.

    A record that does not fit is a storage fault rather than something to
    drop: the next save would otherwise erase it.
    """
    decoded = []
    for index, record in enumerate(records):
        try:
            decoded.append(model.from_record(record))
        except PydanticValidationError as exc:
            raise StoreError(f"Malformed record #{index} in collection {collection}") from exc
    return decoded


class RecordStore(Protocol):
    def load(self, collection: str) -> list[dict]: ...

    def save(self, collection: str, records: list[dict]) -> None: ...

    def initialize(self, collections: Iterable[str]) -> None: ...


class JsonFileRecordStore:
    def __init__(self, data_dir: str | Path, indent: int | None = 2):
        self.data_dir = Path(data_dir)
        self.indent = indent or None

    def path_for(self, collection: str) -> Path:
        return self.data_dir / f"{_check_collection_name(collection)}.json"

    def initialize(self, collections: Iterable[str]) -> None:
        for collection in collections:
            path = self.path_for(collection)
            if not path.exists():
                self.save(collection, [])
                logger.info("Initialized empty collection %s at %s", collection, path)

    def load(self, collection: str) -> list[dict]:
        path = self.path_for(collection)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as exc:
            logger.warning("Collection %s unreadable at %s: %s", collection, path, exc)
            return []

        try:
            data = json.loads(raw, parse_float=Decimal)
        except ValueError as exc:
            logger.warning("Collection %s is not valid JSON, reading as empty: %s", collection, exc)
            return []

        if not isinstance(data, list):
            logger.warning("Collection %s does not hold a JSON array, reading as empty", collection)
            return []
        return data

    def save(self, collection: str, records: list[dict]) -> None:
        path = self.path_for(collection)
        try:
            payload = json.dumps(
                list(records), indent=self.indent, ensure_ascii=False, allow_nan=False, default=_json_default
            )
        except (TypeError, ValueError) as exc:
            raise StoreError(f"Collection {collection} is not serializable: {exc}") from exc

        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{collection}.", suffix=".tmp", dir=str(path.parent))
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, path)
        except OSError as exc:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StoreError(f"Failed to write collection {collection} to {path}: {exc}") from exc
        logger.debug("Saved %d records to %s", len(records), path)


class InMemoryRecordStore:
    """Dict-backed store for tests and ephemeral runs."""

    def __init__(self, initial: dict[str, list[dict]] | None = None):
        self._data: dict[str, list[dict]] = {}
        self._lock = threading.Lock()
        self.save_calls: list[str] = []
        for collection, records in (initial or {}).items():
            self._data[_check_collection_name(collection)] = copy.deepcopy(list(records))

    def initialize(self, collections: Iterable[str]) -> None:
        with self._lock:
            for collection in collections:
                self._data.setdefault(_check_collection_name(collection), [])

    def load(self, collection: str) -> list[dict]:
        with self._lock:
            return copy.deepcopy(self._data.get(_check_collection_name(collection), []))

    def save(self, collection: str, records: list[dict]) -> None:
        with self._lock:
            self._data[_check_collection_name(collection)] = copy.deepcopy(list(records))
            self.save_calls.append(collection)
