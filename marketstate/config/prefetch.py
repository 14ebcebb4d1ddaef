"""
Asset prefetch and HTTP server configuration for marketstate.
"""

from dataclasses import dataclass, field
from typing import List

from .base import BaseConfig, ConfigError


@dataclass
class PrefetchConfig(BaseConfig):
    """Settings for the coin logo prefetcher."""

    ASSET_HOST_URL: str = BaseConfig.get_env("ASSET_HOST_URL", "http://localhost:3000")
    LOGO_PATH: str = BaseConfig.get_env("LOGO_PATH", "/coin-logos")
    LOGO_EXTENSION: str = BaseConfig.get_env("LOGO_EXTENSION", "svg")

    BATCH_SIZE: int = BaseConfig.get_env_int("PREFETCH_BATCH_SIZE", 50)
    BATCH_DELAY: float = BaseConfig.get_env_float("PREFETCH_BATCH_DELAY", 0.1)
    INITIAL_DELAY: float = BaseConfig.get_env_float("PREFETCH_INITIAL_DELAY", 2.0)
    REQUEST_TIMEOUT: float = BaseConfig.get_env_float("PREFETCH_REQUEST_TIMEOUT", 10.0)

    # Log progress every N loaded assets
    PROGRESS_LOG_INTERVAL: int = 100

    def _validate_config(self):
        super()._validate_config()
        if self.BATCH_SIZE < 1:
            raise ConfigError(f"Prefetch batch size must be positive, got: {self.BATCH_SIZE}")
        if self.BATCH_DELAY < 0 or self.INITIAL_DELAY < 0:
            raise ConfigError("Prefetch delays must not be negative")

    def asset_url(self, asset_id: str) -> str:
        """Build the static URL for one logo."""
        host = self.ASSET_HOST_URL.rstrip("/")
        path = "/" + self.LOGO_PATH.strip("/")
        return f"{host}{path}/{asset_id}.{self.LOGO_EXTENSION}"


@dataclass
class ApiConfig(BaseConfig):
    """HTTP server settings."""

    API_HOST: str = BaseConfig.get_env("API_HOST", "0.0.0.0")
    API_PORT: int = BaseConfig.get_env_int("API_PORT", 8000)
    CORS_ORIGINS: List[str] = field(
        default_factory=lambda: BaseConfig.get_env_list("CORS_ORIGINS", ["*"])
    )
