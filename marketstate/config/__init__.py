"""
Configuration management for marketstate.

Build a ConfigManager and hand it (or one of its sections) to the
components that need it.

Example:
    from marketstate.config import ConfigManager, ChainConfig

    config = ConfigManager()

    # Access chain settings
    rpc_url = config.chains.get_rpc_url(369)
    contract = config.chains.get_contract_address(369)

    # A separate testnet-enabled configuration
    testnet = ConfigManager(chains=ChainConfig(TESTING_MODE=True))
"""

from .base import BaseConfig, ConfigError
from .chains import (
    ETHEREUM_CHAIN_ID,
    PULSECHAIN_CHAIN_ID,
    PULSECHAIN_TESTNET_CHAIN_ID,
    ChainConfig,
)
from .database import DatabaseConfig
from .manager import ConfigManager
from .prefetch import ApiConfig, PrefetchConfig

__all__ = [
    "BaseConfig",
    "ConfigError",
    "ChainConfig",
    "DatabaseConfig",
    "PrefetchConfig",
    "ApiConfig",
    "ConfigManager",
    "PULSECHAIN_CHAIN_ID",
    "PULSECHAIN_TESTNET_CHAIN_ID",
    "ETHEREUM_CHAIN_ID",
]
