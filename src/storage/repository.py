"""
Repository interface the services persist records through.
"""
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional


class Repository(ABC):
    """Key-value style access to one collection of JSON-like rows keyed by ``id``."""

    name: str = ""

    @abstractmethod
    def get(self, record_id: str) -> Optional[Dict[str, Any]]:
        """Fetch one row, or None."""

    @abstractmethod
    def insert(self, row: Dict[str, Any]) -> Dict[str, Any]:
        """Store a new row and return it as stored (with ``id``)."""

    @abstractmethod
    def update(self, record_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Merge changes into a row; None when the row does not exist."""

    @abstractmethod
    def delete(self, record_id: str) -> bool:
        """Remove a row; False when the row does not exist."""

    @abstractmethod
    def list(self) -> List[Dict[str, Any]]:
        """All rows in insertion order."""

    def find(self, **equals: Any) -> List[Dict[str, Any]]:
        """Rows whose fields equal every given value."""
        return [
            row for row in self.list()
            if all(row.get(key) == value for key, value in equals.items())
        ]

    @contextmanager
    def transaction(self) -> Iterator['Repository']:
        """
        Scope for check-then-act sequences.

        Backends without isolation yield immediately; those must rely on a
        storage-side constraint to reject overlapping writes.
        """
        yield self
