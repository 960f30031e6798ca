import logging
import threading
from typing import Callable, Dict, List, Optional

from fastapi import Request

from app.exceptions import Conflict, NotFound
from app.schemas.string import StringRecord

logger = logging.getLogger(__name__)

Predicate = Callable[[StringRecord], bool]


# ------------------------------------------------------------------------------
# IN-MEMORY STORE
# ------------------------------------------------------------------------------
class StringStore:
    """Content-addressed records keyed by the SHA-256 of their value.

    Sync endpoints run on a thread pool, so insert and delete hold a single
    lock across their check and mutation. Records are never modified in
    place; an update is a delete followed by an insert.
    """

    def __init__(self):
        self._records: Dict[str, StringRecord] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, string_id: str) -> bool:
        return string_id in self._records

    def insert(self, record: StringRecord) -> StringRecord:
        with self._lock:
            if record.id in self._records:
                logger.warning(f"Duplicate insert rejected for {record.id[:12]}")
                raise Conflict("String already exists in the system")
            self._records[record.id] = record
        logger.info(f"Stored string {record.id[:12]}")
        return record

    def get(self, string_id: str) -> StringRecord:
        record = self._records.get(string_id)
        if record is None:
            raise NotFound("String does not exist in the system")
        return record

    def delete(self, string_id: str) -> None:
        with self._lock:
            if string_id not in self._records:
                raise NotFound("String does not exist in the system")
            del self._records[string_id]
        logger.info(f"Deleted string {string_id[:12]}")

    def scan(self, predicate: Optional[Predicate] = None) -> List[StringRecord]:
        """Return records matching predicate, in insertion order"""
        with self._lock:
            records = list(self._records.values())
        if predicate is None:
            return records
        return [r for r in records if predicate(r)]


# ------------------------------------------------------------------------------
# STORE DEPENDENCY
# ------------------------------------------------------------------------------
def get_store(request: Request) -> StringStore:
    """Dependency to provide the application's store."""
    return request.app.state.store


def init_store(app) -> StringStore:
    """Attach a fresh, empty store to the app (runs on startup)."""
    app.state.store = StringStore()
    logger.info("✅ In-memory string store initialized.")
    return app.state.store
