"""
Price store configuration for marketstate.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .base import BaseConfig


@dataclass
class DatabaseConfig(BaseConfig):
    """
    Connection settings for the historic price store.

    Credentials are optional: when they are not resolved the price feature
    is treated as disabled rather than misconfigured.
    """

    SECRET_FIELDS = ("POSTGRES_PASSWORD",)

    # PostgreSQL Configuration
    POSTGRES_HOST: Optional[str] = BaseConfig.get_env_optional("POSTGRES_HOST")
    POSTGRES_PORT: int = BaseConfig.get_env_int("POSTGRES_PORT", 5432)
    POSTGRES_USER: Optional[str] = BaseConfig.get_env_optional("POSTGRES_USER")
    POSTGRES_PASSWORD: Optional[str] = BaseConfig.get_env_optional("POSTGRES_PASSWORD")
    POSTGRES_DB: str = BaseConfig.get_env("POSTGRES_DB", "postgres")

    # Pool Settings
    POOL_MIN_SIZE: int = BaseConfig.get_env_int("POOL_MIN_SIZE", 1)
    POOL_MAX_SIZE: int = BaseConfig.get_env_int("POOL_MAX_SIZE", 10)
    CONNECTION_TIMEOUT: int = BaseConfig.get_env_int("CONNECTION_TIMEOUT", 10)
    COMMAND_TIMEOUT: int = BaseConfig.get_env_int("COMMAND_TIMEOUT", 30)

    # Table Naming
    PRICES_TABLE: str = BaseConfig.get_env("PRICES_TABLE", "historic_prices")
    SYMBOL_COLUMN: str = BaseConfig.get_env("PRICES_SYMBOL_COLUMN", "symbol")
    DATE_COLUMN: str = BaseConfig.get_env("PRICES_DATE_COLUMN", "date")

    @property
    def is_configured(self) -> bool:
        """Whether enough credentials are present to reach the store."""
        return bool(self.POSTGRES_HOST and self.POSTGRES_USER and self.POSTGRES_PASSWORD)

    @property
    def postgres_url(self) -> str:
        """Build PostgreSQL connection URL."""
        return (
            f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    def get_pool_kwargs(self) -> Dict[str, Any]:
        """Get asyncpg pool parameters."""
        return {
            "min_size": self.POOL_MIN_SIZE,
            "max_size": self.POOL_MAX_SIZE,
            "timeout": self.CONNECTION_TIMEOUT,
            "command_timeout": self.COMMAND_TIMEOUT,
        }
