"""Tests for the HTTP routes."""
from decimal import Decimal

import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from marketstate.api import ChainReaders, create_app
from marketstate.chain import ChainReader, ConfigurationError, ContractRevertError, RpcError
from marketstate.config import ChainConfig, ConfigManager, DatabaseConfig
from marketstate.core.storage import DataError
from marketstate.prices import HistoricPriceGateway

TOKEN_A = "0x0000000000000000000000000000000000000aaa"
TOKEN_B = "0x0000000000000000000000000000000000000bbb"
OWNER = "0x00000000000000000000000000000000000000ff"


class FakeReader:
    """Chain reader backed by in-memory contract state."""

    def __init__(self, whitelist=None, orders=None, error=None):
        self.whitelist = whitelist or []
        self.orders = orders or {}
        self.error = error

    async def read(self, function_name, *args):
        if self.error is not None:
            raise self.error
        if function_name == "viewCountWhitelisted":
            return len(self.whitelist)
        if function_name == "viewWhitelisted":
            cursor, size = args
            page = self.whitelist[cursor : cursor + size]
            return page, cursor + len(page)
        if function_name == "getTokenInfoAt":
            (index,) = args
            if index >= len(self.whitelist):
                raise ContractRevertError("getTokenInfoAt reverted")
            return self.whitelist[index]
        if function_name == "getOrderDetails":
            (order_id,) = args
            if order_id not in self.orders:
                raise ContractRevertError("getOrderDetails reverted")
            return self.orders[order_id]
        raise AssertionError(f"unexpected call {function_name}")


class FakeReaders:
    def __init__(self, reader):
        self.reader = reader
        self.requested = []

    def get(self, chain_id=None):
        self.requested.append(chain_id)
        return self.reader


@pytest.fixture
def config():
    return ConfigManager(
        environment="test",
        chains=ChainConfig(TESTING_MODE=False),
        database=DatabaseConfig(POSTGRES_HOST=None, POSTGRES_USER=None, POSTGRES_PASSWORD=None),
    )


@pytest.fixture
def store():
    price_store = AsyncMock()
    price_store.fetch_field_rows.return_value = []
    return price_store


@pytest.fixture
def reader():
    order = (
        (0, OWNER),
        (7, 75 * 10**16, 0, 1690000000, 0, 0, (TOKEN_A, 1000, [1], [5], 1700000000)),
    )
    return FakeReader(whitelist=[(TOKEN_A, True), (TOKEN_B, False)], orders={7: order})


@pytest.fixture
def readers(reader):
    return FakeReaders(reader)


@pytest.fixture
def client(config, store, readers):
    app = create_app(config, gateway=HistoricPriceGateway(store), readers=readers)
    return TestClient(app, raise_server_exceptions=False)


class TestHistoricPrices:
    """Test cases for GET /prices/historic."""

    def test_missing_field(self, client, store):
        response = client.get("/prices/historic", params={"symbol": "HEX"})

        assert response.status_code == 400
        assert response.json() == {"error": "Missing required parameters"}
        store.fetch_field_rows.assert_not_awaited()

    def test_unconfigured_store(self, config):
        client = TestClient(create_app(config))

        response = client.get("/prices/historic", params={"symbol": "HEX", "field": "priceUSD"})

        assert response.status_code == 200
        assert response.json() == {"data": None}

    def test_all_rows_invalid(self, client, store):
        store.fetch_field_rows.return_value = [{"date": "2024-01-01", "priceUSD": "n/a"}]

        response = client.get("/prices/historic", params={"symbol": "HEX", "field": "priceUSD"})

        assert response.status_code == 200
        assert response.json() == {"data": None}

    def test_serves_rows_with_cache_header(self, client, store):
        rows = [
            {"date": "2024-01-01", "priceUSD": "0.01"},
            {"date": "2024-01-02", "priceUSD": "junk"},
        ]
        store.fetch_field_rows.return_value = rows

        response = client.get("/prices/historic", params={"symbol": "HEX", "field": "priceUSD"})

        assert response.status_code == 200
        assert response.json() == {"data": rows}
        assert response.headers["cache-control"] == "public, s-maxage=3600, stale-while-revalidate"

    def test_store_failure(self, client, store):
        store.fetch_field_rows.side_effect = DataError("relation does not exist")

        response = client.get("/prices/historic", params={"symbol": "HEX", "field": "priceUSD"})

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
        assert "cache-control" not in response.headers

    @pytest.mark.parametrize("bad_value", [float("nan"), float("inf"), Decimal("NaN")])
    def test_non_finite_values_served_as_null(self, client, store, bad_value):
        store.fetch_field_rows.return_value = [
            {"date": "2024-01-01", "priceUSD": 1.0},
            {"date": "2024-01-02", "priceUSD": bad_value},
        ]

        response = client.get("/prices/historic", params={"symbol": "HEX", "field": "priceUSD"})

        assert response.status_code == 200
        assert response.json() == {
            "data": [
                {"date": "2024-01-01", "priceUSD": 1.0},
                {"date": "2024-01-02", "priceUSD": None},
            ]
        }


class TestWhitelistRoutes:
    """Test cases for the whitelist routes."""

    def test_active_whitelist(self, client):
        response = client.get("/whitelist/active")

        assert response.status_code == 200
        assert response.json() == {
            "data": [{"tokenAddress": TOKEN_A, "isActive": True, "index": 0}]
        }

    def test_chain_id_is_forwarded(self, client, readers):
        client.get("/whitelist/active", params={"chainId": 943})

        assert readers.requested == [943]

    def test_entry_by_index(self, client):
        response = client.get("/whitelist/1")

        assert response.json() == {
            "data": {"tokenAddress": TOKEN_B, "isActive": False, "index": 1}
        }

    def test_entry_out_of_range(self, client):
        response = client.get("/whitelist/5")

        assert response.status_code == 404
        assert "error" in response.json()

    def test_unconfigured_chain(self, config):
        app = create_app(config, gateway=HistoricPriceGateway(None), readers=ChainReaders(config))
        client = TestClient(app)

        response = client.get("/whitelist/active", params={"chainId": 943})

        assert response.status_code == 503
        assert response.json() == {"error": "Contract not configured for this chain"}

    def test_index_beyond_uint256(self, client):
        response = client.get(f"/whitelist/{2**256}")

        assert response.status_code == 404

    def test_rpc_failure(self, config):
        readers = FakeReaders(FakeReader(error=RpcError("connection refused")))
        client = TestClient(create_app(config, gateway=HistoricPriceGateway(None), readers=readers))

        response = client.get("/whitelist/active")

        assert response.status_code == 502
        assert response.json() == {"error": "Upstream RPC error"}


class TestOrderRoutes:
    """Test cases for GET /orders/{order_id}/progress."""

    def test_progress(self, client):
        response = client.get("/orders/7/progress")

        assert response.status_code == 200
        assert response.json() == {
            "data": {
                "orderId": "7",
                "remainingFillPercentage": "750000000000000000",
                "filledPercentage": "250000000000000000",
                "status": "active",
            }
        }

    def test_unknown_order(self, client):
        response = client.get("/orders/8/progress")

        assert response.status_code == 404

    def test_order_id_beyond_uint256(self, client):
        response = client.get(f"/orders/{2**256}/progress")

        assert response.status_code == 404


class TestChainReaders:
    """Test cases for the per-chain reader cache."""

    def test_default_chain_when_omitted(self, config):
        built = []
        readers = ChainReaders(config, factory=lambda chain_id: built.append(chain_id) or object())
        default = config.chains.DEFAULT_CHAIN_ID

        assert readers.get() is readers.get(default)
        assert built == [default]

    def test_unsupported_chains_share_one_reader(self, config):
        built = []
        readers = ChainReaders(config, factory=lambda chain_id: built.append(chain_id) or object())

        shared = {id(readers.get(chain_id)) for chain_id in range(10_000, 10_500)}

        assert len(shared) == 1
        assert readers._readers == {}
        assert built == []

    @pytest.mark.asyncio
    async def test_unsupported_reader_raises_configuration_error(self, config):
        reader = ChainReaders(config).get(943)

        assert isinstance(reader, ChainReader)
        with pytest.raises(ConfigurationError):
            await reader.read("viewCountWhitelisted")


class TestHealth:
    """Test cases for GET /health."""

    def test_store_ok(self, client, store):
        store.health_check.return_value = True

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "priceStore": "ok"}

    def test_store_unavailable(self, client, store):
        store.health_check.return_value = False

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "degraded", "priceStore": "unavailable"}

    def test_store_disabled(self, config):
        client = TestClient(create_app(config))

        response = client.get("/health")

        assert response.json() == {"status": "healthy", "priceStore": "disabled"}
