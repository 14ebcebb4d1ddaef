"""
Retry policy for contract reads.

Readers never retry on their own; wrap one in RetryingChainReader to add a
bounded exponential backoff for transient RPC failures.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Union

from .errors import ErrorHandler
from .reader import ChainReader

logger = logging.getLogger(__name__)


@dataclass
class RetryConfig:
    """Configuration for retried reads."""

    max_retries: int = 3
    retry_delay: float = 1.0

    def __post_init__(self):
        if self.max_retries < 1:
            raise ValueError(f"max_retries must be at least 1, got: {self.max_retries}")
        if self.retry_delay < 0:
            raise ValueError(f"retry_delay must not be negative, got: {self.retry_delay}")


class RetryingChainReader:
    """
    ChainReader wrapper that retries RpcError with exponential backoff.

    ConfigurationError, NotFoundError and contract reverts are raised on the
    first attempt. Exposes the same read() coroutine as ChainReader.
    """

    def __init__(self, reader: ChainReader, config: RetryConfig = None):
        self.reader = reader
        self.config = config or RetryConfig()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.error_handler = ErrorHandler(self.logger)

    @property
    def is_configured(self) -> bool:
        return self.reader.is_configured

    @property
    def chain_id(self):
        return self.reader.chain_id

    async def read(
        self,
        function_name: str,
        *args: Any,
        block_identifier: Union[int, str] = "latest",
    ) -> Any:
        """Read through the wrapped reader, retrying transient failures."""
        for attempt in range(self.config.max_retries):
            try:
                return await self.reader.read(
                    function_name, *args, block_identifier=block_identifier
                )
            except Exception as e:
                if not self.error_handler.should_retry(e, attempt, self.config.max_retries):
                    raise

                delay = self.error_handler.get_retry_delay(
                    e, attempt, base_delay=self.config.retry_delay
                )
                self.logger.info(
                    f"Retrying {function_name} in {delay}s... "
                    f"(attempt {attempt + 1}/{self.config.max_retries})"
                )
                await asyncio.sleep(delay)

        raise RuntimeError(f"Retry loop for {function_name} exited without a result")
