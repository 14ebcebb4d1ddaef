import pytest

from marketstate.config import ChainConfig, ConfigManager, DatabaseConfig


@pytest.fixture
def testnet_config():
    # Testnet enabled, price store disabled
    return ConfigManager(
        environment="test",
        chains=ChainConfig(TESTING_MODE=True, DEFAULT_CHAIN_ID=943),
        database=DatabaseConfig(POSTGRES_HOST=None, POSTGRES_USER=None, POSTGRES_PASSWORD=None),
    )


@pytest.fixture
def mainnet_config():
    return ConfigManager(
        environment="test",
        chains=ChainConfig(TESTING_MODE=False, DEFAULT_CHAIN_ID=369),
        database=DatabaseConfig(POSTGRES_HOST=None, POSTGRES_USER=None, POSTGRES_PASSWORD=None),
    )
