"""
Base configuration management for marketstate.

Every configuration section is a dataclass whose defaults are read from the
environment (and a local .env file) at import time. Constructor keyword
arguments override them, which is how tests and embedding callers build
independent configurations.
"""

import os
import logging
from typing import Any, Callable, ClassVar, Dict, Optional, List, Tuple
from dataclasses import dataclass, fields
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

ENVIRONMENTS = ("local", "test", "dev", "staging", "production")

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""
    pass


@dataclass
class BaseConfig:
    """Base configuration class with environment variable management."""

    # Fields masked by to_dict() when set
    SECRET_FIELDS: ClassVar[Tuple[str, ...]] = ()

    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "local")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", DEFAULT_LOG_FORMAT)

    def __post_init__(self):
        self._setup_logging()
        self._validate_config()

    def _setup_logging(self):
        """Configure root logging once; later sections only validate the level."""
        level = getattr(logging, self.LOG_LEVEL.upper(), None)
        if not isinstance(level, int):
            raise ConfigError(f"Invalid log level: {self.LOG_LEVEL}")
        logging.basicConfig(level=level, format=self.LOG_FORMAT)

    def _validate_config(self):
        """Validate configuration values. Subclasses extend this."""
        if self.ENVIRONMENT not in ENVIRONMENTS:
            raise ConfigError(
                f"Invalid environment: {self.ENVIRONMENT} (expected one of {', '.join(ENVIRONMENTS)})"
            )

    @staticmethod
    def get_env(key: str, default: Optional[str] = None, required: bool = False) -> str:
        """
        Get environment variable with validation.

        Args:
            key: Environment variable name
            default: Default value if not found
            required: Whether the variable is required

        Raises:
            ConfigError: If required variable is missing
        """
        value = os.getenv(key, default)
        if required and value is None:
            raise ConfigError(f"Required environment variable '{key}' is not set")
        return value

    @staticmethod
    def get_env_optional(key: str, default: Optional[str] = None) -> Optional[str]:
        """Get environment variable, treating unset and blank alike as None."""
        value = os.getenv(key, default)
        if value is None or not value.strip():
            return None
        return value.strip()

    @staticmethod
    def _get_env_as(key: str, convert: Callable[[str], Any], type_name: str, default: Any, required: bool) -> Any:
        value = BaseConfig.get_env(key, str(default) if default is not None else None, required)
        try:
            return convert(value)
        except (ValueError, TypeError):
            raise ConfigError(f"Environment variable '{key}' must be {type_name}, got: {value}")

    @staticmethod
    def get_env_int(key: str, default: Optional[int] = None, required: bool = False) -> int:
        return BaseConfig._get_env_as(key, int, "an integer", default, required)

    @staticmethod
    def get_env_float(key: str, default: Optional[float] = None, required: bool = False) -> float:
        return BaseConfig._get_env_as(key, float, "a float", default, required)

    @staticmethod
    def get_env_bool(key: str, default: bool = False) -> bool:
        value = BaseConfig.get_env(key, str(default))
        return value.lower() in ("true", "1", "yes", "on")

    @staticmethod
    def get_env_list(key: str, default: Optional[List[str]] = None, separator: str = ",") -> List[str]:
        """Get a separator-delimited environment variable, dropping blank items."""
        value = BaseConfig.get_env(key, separator.join(default) if default else "")
        return [item.strip() for item in value.split(separator) if item.strip()] if value else []

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary, masking secret fields that are set."""
        data = {}
        for field in fields(self):
            name = field.name
            value = getattr(self, name)
            if name in self.SECRET_FIELDS and value:
                value = "***"
            data[name] = value
        return data
