"""
Unit tests for the storage backends.
"""
import pytest
from datetime import date
from unittest.mock import Mock, patch

from src.storage import InMemoryRepository, build_repositories
from src.storage.supabase_repository import SupabaseRepository
from config.settings import app_config
from dataclasses import replace


class TestInMemoryRepository:
    """Test cases for the in-memory repository."""

    @pytest.fixture
    def repo(self):
        return InMemoryRepository("things", [{"id": "a", "kind": "x"}, {"id": "b", "kind": "y"}])

    def test_get_and_list(self, repo):
        assert repo.get("a") == {"id": "a", "kind": "x"}
        assert repo.get("missing") is None
        assert [row["id"] for row in repo.list()] == ["a", "b"]
        assert len(repo) == 2

    def test_insert_assigns_id(self, repo):
        row = repo.insert({"kind": "z"})
        assert row["id"]
        assert repo.get(row["id"])["kind"] == "z"

    def test_insert_duplicate_id(self, repo):
        with pytest.raises(KeyError):
            repo.insert({"id": "a"})

    def test_rows_are_copies(self, repo):
        row = repo.get("a")
        row["kind"] = "mutated"
        assert repo.get("a")["kind"] == "x"

    def test_update(self, repo):
        updated = repo.update("a", {"kind": "w", "id": "ignored"})
        assert updated == {"id": "a", "kind": "w"}
        assert repo.update("missing", {"kind": "w"}) is None

    def test_delete(self, repo):
        assert repo.delete("a") is True
        assert repo.delete("a") is False
        assert repo.get("a") is None

    def test_find(self, repo):
        assert repo.find(kind="y") == [{"id": "b", "kind": "y"}]
        assert repo.find(kind="nope") == []

    def test_transaction_allows_nested_calls(self, repo):
        with repo.transaction() as tx:
            assert tx.find(kind="x")
            tx.insert({"id": "c", "kind": "x"})
        assert len(repo) == 3


class TestBuildRepositories:

    def test_memory_backend(self):
        repositories = build_repositories(replace(app_config, storage_backend="memory"))
        assert isinstance(repositories.listings, InMemoryRepository)
        assert repositories.bookings.name == app_config.bookings_collection

    def test_supabase_backend(self):
        repositories = build_repositories(replace(app_config, storage_backend="supabase"))
        assert isinstance(repositories.users, SupabaseRepository)
        assert repositories.users.name == "users"

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            build_repositories(replace(app_config, storage_backend="sqlite"))


def _mock_table(client, rows):
    table = Mock()
    client.table.return_value = table
    for method in ("select", "insert", "update", "delete", "eq", "limit"):
        getattr(table, method).return_value = table
    res = Mock()
    res.data = rows
    table.execute.return_value = res
    return table


class TestSupabaseRepository:
    """Test cases for the Supabase repository with a mocked client."""

    @pytest.fixture
    def client(self):
        return Mock()

    @pytest.fixture
    def repo(self, client):
        return SupabaseRepository("bookings", client=client)

    def test_get(self, repo, client):
        table = _mock_table(client, [{"id": "booking-1"}])
        assert repo.get("booking-1") == {"id": "booking-1"}
        client.table.assert_called_with("bookings")
        table.eq.assert_called_with("id", "booking-1")
        table.limit.assert_called_with(1)

    def test_get_missing(self, repo, client):
        _mock_table(client, [])
        assert repo.get("nope") is None

    def test_insert_serializes_dates(self, repo, client):
        table = _mock_table(client, [])
        row = repo.insert({"check_in": date(2024, 7, 1), "nested": {"d": date(2024, 7, 2)}})
        payload = table.insert.call_args[0][0]
        assert payload["check_in"] == "2024-07-01"
        assert payload["nested"] == {"d": "2024-07-02"}
        assert payload["id"]
        assert row == payload

    def test_update_drops_id(self, repo, client):
        table = _mock_table(client, [{"id": "booking-1", "status": "cancelled"}])
        result = repo.update("booking-1", {"id": "other", "status": "cancelled"})
        assert result["status"] == "cancelled"
        table.update.assert_called_once_with({"status": "cancelled"})

    def test_delete(self, repo, client):
        _mock_table(client, [{"id": "booking-1"}])
        assert repo.delete("booking-1") is True

    def test_find_chains_filters(self, repo, client):
        table = _mock_table(client, [{"id": "booking-1"}])
        assert repo.find(listing_id="listing-1", status="confirmed") == [{"id": "booking-1"}]
        table.eq.assert_any_call("listing_id", "listing-1")
        table.eq.assert_any_call("status", "confirmed")

    def test_missing_configuration(self):
        repo = SupabaseRepository("bookings")
        with patch("src.storage.supabase_repository.supabase_config") as cfg:
            cfg.url = ""
            cfg.get_auth_key.return_value = ""
            with pytest.raises(RuntimeError):
                repo.list()

    def test_initialize_creates_client(self):
        repo = SupabaseRepository("bookings")
        with patch("src.storage.supabase_repository.supabase_config") as cfg, \
                patch("src.storage.supabase_repository.create_client") as create:
            cfg.url = "https://example.supabase.co"
            cfg.get_auth_key.return_value = "key"
            assert repo.initialize() is True
            create.assert_called_once_with("https://example.supabase.co", "key")
