"""
Supabase-backed repository for persistent marketplace data.
"""
from datetime import date, datetime
from typing import Any, Dict, List, Optional
from uuid import uuid4

from supabase import create_client

from .repository import Repository
from ..utils.logger import get_logger
from config.settings import supabase_config


class SupabaseRepository(Repository):
    """
    Repository over one Supabase table. Rows are keyed by ``id``.

    Supabase's REST API has no client-side transactions, so ``transaction()``
    gives no isolation here; an exclusion constraint on the bookings table
    over (listing_id, daterange(check_in, check_out)) must reject overlaps.
    """

    def __init__(self, table: str, client=None):
        self.name = table
        self.logger = get_logger("supabase_repository")
        self.client = client
        self.initialized = client is not None

    def initialize(self) -> bool:
        """Initialize Supabase client from environment configuration."""
        if self.initialized:
            return True

        auth_key = supabase_config.get_auth_key()
        if not supabase_config.url or not auth_key:
            self.logger.error("Supabase configuration missing", url=bool(supabase_config.url))
            return False

        self.client = create_client(supabase_config.url, auth_key)
        self.initialized = True
        self.logger.info("Supabase client initialized successfully", table=self.name)
        return True

    def _table(self):
        if not self.initialized and not self.initialize():
            raise RuntimeError("Supabase initialization failed")
        return self.client.table(self.name)

    def _serialize_payload(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively convert dates and datetimes to JSON-serializable values."""

        def serialize_value(value):
            if isinstance(value, (datetime, date)):
                return value.isoformat()
            if isinstance(value, dict):
                return {k: serialize_value(v) for k, v in value.items()}
            if isinstance(value, list):
                return [serialize_value(v) for v in value]
            return value

        return {k: serialize_value(v) for k, v in payload.items()}

    # CRUD operations
    def get(self, record_id: str) -> Optional[Dict[str, Any]]:
        result = self._table().select("*").eq("id", record_id).limit(1).execute()
        if result.data:
            return result.data[0]
        return None

    def insert(self, row: Dict[str, Any]) -> Dict[str, Any]:
        payload = self._serialize_payload({**row, "id": row.get("id") or uuid4().hex})
        result = self._table().insert(payload).execute()
        self.logger.debug("Inserted row", table=self.name, id=payload["id"])
        return result.data[0] if result.data else payload

    def update(self, record_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        payload = self._serialize_payload({k: v for k, v in changes.items() if k != "id"})
        result = self._table().update(payload).eq("id", record_id).execute()
        if result.data:
            return result.data[0]
        return None

    def delete(self, record_id: str) -> bool:
        result = self._table().delete().eq("id", record_id).execute()
        return bool(result.data)

    def list(self) -> List[Dict[str, Any]]:
        result = self._table().select("*").execute()
        return result.data or []

    def find(self, **equals: Any) -> List[Dict[str, Any]]:
        query = self._table().select("*")
        for key, value in self._serialize_payload(equals).items():
            query = query.eq(key, value)
        result = query.execute()
        return result.data or []

