"""
Configuration manager for marketstate.

Combines all configuration classes into a single object that is passed
explicitly to the components that need it. There is no module-level
instance: every caller (the API app, the CLI, a test) builds its own.
"""

import logging
from typing import Any, Dict, Optional

from .base import BaseConfig, ConfigError
from .chains import ChainConfig
from .database import DatabaseConfig
from .prefetch import ApiConfig, PrefetchConfig

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Centralized configuration that combines all configuration classes.

    Any section can be supplied pre-built, which is how tests run several
    configurations side by side.
    """

    def __init__(
        self,
        environment: Optional[str] = None,
        chains: Optional[ChainConfig] = None,
        database: Optional[DatabaseConfig] = None,
        prefetch: Optional[PrefetchConfig] = None,
        api: Optional[ApiConfig] = None,
    ):
        """
        Initialize the configuration manager.

        Args:
            environment: Override the environment (local, test, dev, staging, production)
            chains: Chain configuration, read from the environment if omitted
            database: Price store configuration, read from the environment if omitted
            prefetch: Asset prefetch configuration, read from the environment if omitted
            api: HTTP server configuration, read from the environment if omitted
        """
        try:
            self._base_config = BaseConfig(ENVIRONMENT=environment) if environment else BaseConfig()
            self._chain_config = chains or ChainConfig()
            self._database_config = database or DatabaseConfig()
            self._prefetch_config = prefetch or PrefetchConfig()
            self._api_config = api or ApiConfig()
        except ConfigError:
            raise
        except Exception as e:
            logger.error(f"Failed to initialize configuration: {e}")
            raise ConfigError(f"Configuration initialization failed: {e}") from e

        logger.debug(f"Configuration initialized for environment: {self.environment}")

    @property
    def environment(self) -> str:
        """Get current environment."""
        return self._base_config.ENVIRONMENT

    @property
    def base(self) -> BaseConfig:
        return self._base_config

    @property
    def chains(self) -> ChainConfig:
        return self._chain_config

    @property
    def database(self) -> DatabaseConfig:
        return self._database_config

    @property
    def prefetch(self) -> PrefetchConfig:
        return self._prefetch_config

    @property
    def api(self) -> ApiConfig:
        return self._api_config

    def validate_configuration(self) -> bool:
        """
        Validate settings that span sections.

        A missing contract address or missing price store credentials are
        not errors: the affected features report themselves as disabled.

        Raises:
            ConfigError: If the default chain is not served by any RPC endpoint
        """
        default_chain = self.chains.DEFAULT_CHAIN_ID
        if not self.chains.is_supported_chain(default_chain):
            raise ConfigError(f"Default chain {default_chain} is not supported")
        if not self.chains.get_rpc_url(default_chain):
            raise ConfigError(f"No RPC URL configured for default chain {default_chain}")

        if self.chains.get_contract_address(default_chain) is None:
            logger.warning(f"No contract address for chain {default_chain}; chain reads are disabled")
        if not self.database.is_configured:
            logger.warning("Price store credentials missing; historic prices are disabled")

        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert all configurations to dictionary format."""
        return {
            "environment": self.environment,
            "chains": self.chains.to_dict(),
            "database": self.database.to_dict(),
            "prefetch": self.prefetch.to_dict(),
            "api": self.api.to_dict(),
        }

    def __repr__(self) -> str:
        return f"ConfigManager(environment={self.environment})"
