"""
Unit tests for the command-line client.
"""
import pytest
from click.testing import CliRunner
from unittest.mock import Mock, patch

from src.main import cli
from src.client import MarketplaceClient
from src.utils.exceptions import MarketplaceError

CREDENTIALS = ['--email', 'alex.guest@example.com', '--password', 'password123']


class TestCLI:
    """Test cases for CLI commands against the in-process backend."""

    @pytest.fixture
    def runner(self):
        """Create CLI runner for testing."""
        return CliRunner()

    def _invoke(self, runner, mock_client, args):
        return runner.invoke(cli, args, obj=mock_client)

    def test_search(self, runner, mock_client):
        result = self._invoke(runner, mock_client, ['search', '--country', 'Italy', '--amenity', 'TV'])
        assert result.exit_code == 0
        assert "listing-6" in result.output
        assert "Page 1/1 (1 listings)" in result.output

    def test_search_with_dates(self, runner, mock_client):
        result = self._invoke(runner, mock_client,
                              ['search', '--city', 'malibu', '--check-in', '2024-07-02', '--check-out', '2024-07-04'])
        assert result.exit_code == 0
        assert "(0 listings)" in result.output

    def test_search_invalid_page(self, runner, mock_client):
        result = self._invoke(runner, mock_client, ['search', '--page', '0'])
        assert result.exit_code == 1
        assert "Error: page must be at least 1" in result.output

    def test_show(self, runner, mock_client):
        result = self._invoke(runner, mock_client, ['show', 'listing-1'])
        assert result.exit_code == 0
        assert "Beachfront Villa with Ocean Views (Villa)" in result.output
        assert "Host: Sarah Johnson" in result.output
        assert "(2 reviews)" in result.output

    def test_show_missing(self, runner, mock_client):
        result = self._invoke(runner, mock_client, ['show', 'listing-404'])
        assert result.exit_code == 1
        assert "Error: Listing not found" in result.output

    def test_availability(self, runner, mock_client):
        result = self._invoke(runner, mock_client, ['availability', 'listing-1', '2024-07-04', '2024-07-08'])
        assert result.exit_code == 0
        assert "Not available for selected dates" in result.output
        assert "booked 2024-07-01 -> 2024-07-05" in result.output

        result = self._invoke(runner, mock_client, ['availability', 'listing-1', '2024-07-05', '2024-07-08'])
        assert result.output.strip() == "Available"

    @pytest.mark.parametrize("args", [
        ['availability', 'listing-1', '2024-13-45', '2024-07-08'],
        ['quote', 'listing-2', '2024-05-10', 'tomorrow'],
        ['search', '--check-in', '2024-02-30', '--check-out', '2024-03-02'],
        ['book', 'listing-2', '2025-03-01', '2025-03-xx'] + CREDENTIALS,
    ])
    def test_malformed_date(self, runner, mock_client, args):
        result = self._invoke(runner, mock_client, args)
        assert result.exit_code == 1
        assert "Error: Invalid date" in result.output

    def test_quote(self, runner, mock_client):
        result = self._invoke(runner, mock_client, ['quote', 'listing-2', '2024-05-10', '2024-05-13'])
        assert result.exit_code == 0
        assert "$180 x 3 nights = $540" in result.output
        assert "Total: $616" in result.output

    def test_book_and_cancel(self, runner, mock_client):
        result = self._invoke(runner, mock_client,
                              ['book', 'listing-4', '2025-06-01', '2025-06-03', '--guests', '2'] + CREDENTIALS)
        assert result.exit_code == 0
        assert "Booking confirmed:" in result.output
        assert "Total: $280" in result.output

        booking_id = result.output.split("Booking confirmed: ")[1].split()[0]
        result = self._invoke(runner, mock_client, ['cancel', booking_id] + CREDENTIALS)
        assert result.exit_code == 0
        assert f"Booking {booking_id} is cancelled" in result.output

    def test_book_conflict(self, runner, mock_client):
        result = self._invoke(runner, mock_client,
                              ['book', 'listing-1', '2024-07-03', '2024-07-06'] + CREDENTIALS)
        assert result.exit_code == 1
        assert "Error: Listing not available for selected dates" in result.output

    def test_book_bad_credentials(self, runner, mock_client):
        result = self._invoke(runner, mock_client,
                              ['book', 'listing-4', '2025-06-01', '2025-06-03',
                               '--email', 'alex.guest@example.com', '--password', 'wrong'])
        assert result.exit_code == 1
        assert "Error: Invalid credentials" in result.output

    def test_bookings(self, runner, mock_client):
        result = self._invoke(runner, mock_client, ['bookings'] + CREDENTIALS)
        assert result.exit_code == 0
        assert "booking-1  Beachfront Villa with Ocean Views  2024-07-01 -> 2024-07-05" in result.output

    def test_host_bookings_empty(self, runner, mock_client):
        result = self._invoke(runner, mock_client, ['bookings', '--host'] + CREDENTIALS)
        assert result.exit_code == 0
        assert "No bookings" in result.output

    def test_credentials_required(self, runner, mock_client):
        result = self._invoke(runner, mock_client, ['bookings'])
        assert result.exit_code == 2

    def test_backend_selection(self, runner):
        client = Mock(spec=MarketplaceClient)
        client.get_listing.side_effect = MarketplaceError("down")
        with patch("src.main.HttpMarketplaceClient", return_value=client) as http_cls:
            result = runner.invoke(cli, ['--no-mock', '--base-url', 'http://api.test', 'show', 'listing-1'])
        http_cls.assert_called_once_with(base_url='http://api.test')
        assert result.exit_code == 1
        assert "Error: down" in result.output
