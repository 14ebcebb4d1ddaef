"""
Tests for the command-line entry point.
"""
from unittest.mock import AsyncMock, patch

import pytest

from marketstate.cli import main
from marketstate.core.storage import DataError


@pytest.fixture
def store():
    price_store = AsyncMock()
    price_store.fetch_field_rows.return_value = []
    return price_store


@pytest.fixture
def run_cli(mainnet_config, store):
    def run(*argv):
        with patch("marketstate.cli.ConfigManager", return_value=mainnet_config), patch(
            "marketstate.cli.build_price_store", return_value=store
        ):
            return main(list(argv))

    return run


class TestPricesCommand:
    """Test suite for `marketstate prices`."""

    def test_prints_points(self, run_cli, store, capsys):
        store.fetch_field_rows.return_value = [{"date": "2024-01-01", "priceUSD": "0.5"}]

        assert run_cli("prices", "HEX", "priceUSD") == 0

        assert "2024-01-01T00:00:00  0.5" in capsys.readouterr().out
        store.disconnect.assert_awaited_once()

    def test_unparseable_date(self, run_cli, store, capsys):
        store.fetch_field_rows.return_value = [{"date": "not a date", "priceUSD": 1.5}]

        assert run_cli("prices", "HEX", "priceUSD") == 0

        assert "unknown date  1.5" in capsys.readouterr().out
        store.disconnect.assert_awaited_once()

    def test_no_data(self, run_cli, capsys):
        assert run_cli("prices", "HEX", "priceUSD") == 0

        assert "No price data (no_rows)" in capsys.readouterr().out

    def test_store_failure_exit_code(self, run_cli, store):
        store.fetch_field_rows.side_effect = DataError("relation does not exist")

        assert run_cli("prices", "HEX", "priceUSD") == 1
        store.disconnect.assert_awaited_once()
