"""
Error types for contract read operations.

ConfigurationError, RpcError and NotFoundError are the failure taxonomy
chain readers expose to their callers. ErrorHandler classifies arbitrary
exceptions for logging and for the retry policy.
"""

from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)


class ChainReadError(Exception):
    """Base exception for contract read operations."""
    pass


class ConfigurationError(ChainReadError):
    """
    Raised when no contract address resolves for the active chain.

    Not retryable; callers surface it as a disabled feature.
    """

    def __init__(self, message: str, chain_id: Optional[int] = None):
        super().__init__(message)
        self.chain_id = chain_id


class RpcError(ChainReadError):
    """Raised on transport failures or contract call failures. Retryable."""

    def __init__(self, message: str, function_name: Optional[str] = None):
        super().__init__(message)
        self.function_name = function_name


class ContractRevertError(RpcError):
    """Raised when the contract itself reverted the call."""
    pass


class NotFoundError(ChainReadError):
    """Raised when a requested index or record does not exist. Not retryable."""
    pass


class ErrorHandler:
    """
    Centralized error classification for contract reads.

    Provides classification, logging, and retry decisions for the
    exceptions encountered while talking to an RPC endpoint.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def classify_error(self, error: Exception) -> str:
        """
        Classify an error into a category for appropriate handling.

        Args:
            error: Exception to classify

        Returns:
            Error category string
        """
        if isinstance(error, ConfigurationError):
            return 'configuration'
        if isinstance(error, NotFoundError):
            return 'not_found'
        if isinstance(error, ContractRevertError):
            return 'contract'

        error_str = str(error).lower()

        if any(keyword in error_str for keyword in ['rate limit', 'too many requests', '429']):
            return 'rate_limit'

        if any(keyword in error_str for keyword in ['connection', 'timeout', 'timed out', 'network', 'dns']):
            return 'network'

        if any(keyword in error_str for keyword in ['revert', 'execution reverted', 'out of gas']):
            return 'contract'

        if any(keyword in error_str for keyword in ['invalid', 'bad request', '400']):
            return 'validation'

        return 'unknown'

    def should_retry(self, error: Exception, attempt: int, max_retries: int) -> bool:
        """
        Determine if an error should trigger a retry.

        Only RpcError is ever retried, and only for transient categories.

        Args:
            error: Exception that occurred
            attempt: Current attempt number (0-based)
            max_retries: Maximum number of attempts allowed

        Returns:
            True if operation should be retried
        """
        if attempt + 1 >= max_retries:
            return False

        if not isinstance(error, RpcError):
            return False

        return self.classify_error(error) in ['network', 'rate_limit', 'unknown']

    def get_retry_delay(self, error: Exception, attempt: int, base_delay: float = 1.0) -> float:
        """
        Calculate retry delay based on error type and attempt.

        Args:
            error: Exception that occurred
            attempt: Current attempt number (0-based)
            base_delay: Delay for the first retry in seconds

        Returns:
            Delay in seconds before retry
        """
        delay = min(base_delay * (2 ** attempt), 60)

        # Rate limit errors get longer delays
        if self.classify_error(error) == 'rate_limit':
            return delay * 2

        return delay

    def log_error(self, error: Exception, context: Dict[str, Any]):
        """
        Log error with appropriate level and context.

        Args:
            error: Exception to log
            context: Additional context for logging
        """
        error_category = self.classify_error(error)

        log_data = {
            'error_type': type(error).__name__,
            'error_category': error_category,
            'error_message': str(error),
            **context
        }

        if error_category in ('configuration', 'not_found', 'validation'):
            self.logger.warning(f"Contract read rejected: {error}", extra=log_data)
        elif error_category == 'contract':
            self.logger.error(f"Contract execution failed: {error}", extra=log_data)
        elif error_category == 'rate_limit':
            self.logger.info(f"Rate limit encountered: {error}", extra=log_data)
        else:
            self.logger.warning(f"Contract read error: {error}", extra=log_data)
