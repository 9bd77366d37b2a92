# repository.py
"""
Submission storage: primary database when it is up, JSON files otherwise.

The two stores are separate silos. A record lands in exactly one of them,
chosen by the primary's connection state at write time, and reads come from
whichever store is authoritative at read time. Nothing copies records from
one side to the other, so records written during an outage are not visible
through the primary once it is back (and the reverse).

The file side is a read-modify-write of `<data_dir>/<collection>.json`
without locking. Concurrent writers can lose each other's records; the
rewrite goes through a temp file + rename so readers never see a torn file.
"""

import json
import logging
import os
import tempfile
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from db import PrimaryStore
from errors import PersistenceFailure

logger = logging.getLogger(__name__)


class StoredIn(str, Enum):
    PRIMARY = "primary"
    FALLBACK = "fallback"


# ---------- local JSON helpers ----------

def load_json_array(path: Path) -> List[Dict[str, Any]]:
    """Parse a JSON array file; a missing or empty file is an empty array."""
    if not path.exists():
        return []
    raw = path.read_text(encoding="utf-8") or "[]"
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError(f"{path} does not contain a JSON array")
    return data


def append_to_json(path: Path, record: Dict[str, Any]) -> None:
    items = load_json_array(path)
    items.append(record)

    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=str(path.parent), prefix=path.name, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(items, f, indent=2, ensure_ascii=False)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


# ---------- store ----------

class SubmissionStore:
    def __init__(self, data_dir: str, primary: Optional[PrimaryStore] = None):
        self.data_dir = Path(data_dir)
        self.primary = primary

    def fallback_path(self, collection: str) -> Path:
        return self.data_dir / f"{collection}.json"

    def is_primary_available(self) -> bool:
        """Last known primary connection state; does not probe."""
        return self.primary is not None and self.primary.connected

    def status(self) -> Dict[str, bool]:
        return {"dbConnected": self.is_primary_available()}

    def write(self, collection: str, record: Dict[str, Any]) -> StoredIn:
        """
        Store `record` once, in one place.

        If the primary is up the record goes there and any insert error is
        final: it raises PersistenceFailure("primary") and the file store is
        NOT tried. If the primary is down the record is appended to the
        collection's JSON file; I/O or parse errors raise
        PersistenceFailure("fallback").
        """
        if self.is_primary_available():
            try:
                self.primary.insert(collection, record)
            except SQLAlchemyError as e:
                raise PersistenceFailure("primary") from e
            return StoredIn.PRIMARY

        try:
            append_to_json(self.fallback_path(collection), record)
        except (OSError, ValueError) as e:
            raise PersistenceFailure("fallback") from e
        return StoredIn.FALLBACK

    def read_all(self, collection: str) -> List[Dict[str, Any]]:
        """
        All records of `collection` from the currently authoritative store:
        newest first from the primary, file order from the fallback.
        """
        if self.is_primary_available():
            return self.primary.find_all(collection)
        return load_json_array(self.fallback_path(collection))
