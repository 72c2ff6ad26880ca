"""
In-process repository used by the mock backend and tests.
"""
import copy
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List, Optional
from uuid import uuid4

from .repository import Repository


class InMemoryRepository(Repository):
    """Dictionary-backed repository. Rows are copied in and out."""

    def __init__(self, name: str, rows: Optional[Iterable[Dict[str, Any]]] = None):
        self.name = name
        self._rows: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.RLock()
        for row in rows or []:
            self.insert(row)

    def get(self, record_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            row = self._rows.get(record_id)
            return copy.deepcopy(row) if row is not None else None

    def insert(self, row: Dict[str, Any]) -> Dict[str, Any]:
        with self._lock:
            stored = copy.deepcopy(row)
            stored["id"] = stored.get("id") or uuid4().hex
            if stored["id"] in self._rows:
                raise KeyError(f"Duplicate id {stored['id']} in {self.name}")
            self._rows[stored["id"]] = stored
            return copy.deepcopy(stored)

    def update(self, record_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with self._lock:
            row = self._rows.get(record_id)
            if row is None:
                return None
            row.update(copy.deepcopy({k: v for k, v in changes.items() if k != "id"}))
            return copy.deepcopy(row)

    def delete(self, record_id: str) -> bool:
        with self._lock:
            return self._rows.pop(record_id, None) is not None

    def list(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [copy.deepcopy(row) for row in self._rows.values()]

    @contextmanager
    def transaction(self) -> Iterator['InMemoryRepository']:
        # RLock: the repository's own methods can be called inside the block
        with self._lock:
            yield self

    def __len__(self) -> int:
        return len(self._rows)
