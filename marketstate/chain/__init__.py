"""
Read-only access to the limit-order exchange contract.

This package wraps web3 view calls behind a small reader that reports
failures with a fixed error taxonomy.
"""

from .abi import EXCHANGE_ABI, ORDERS_ABI, UINT256_LIMIT, WHITELIST_ABI
from .errors import (
    ChainReadError,
    ConfigurationError,
    ContractRevertError,
    ErrorHandler,
    NotFoundError,
    RpcError,
)
from .reader import ChainReader
from .retry import RetryConfig, RetryingChainReader

__all__ = [
    'ChainReader',
    'RetryingChainReader',
    'RetryConfig',
    'ChainReadError',
    'ConfigurationError',
    'RpcError',
    'ContractRevertError',
    'NotFoundError',
    'ErrorHandler',
    'EXCHANGE_ABI',
    'WHITELIST_ABI',
    'ORDERS_ABI',
    'UINT256_LIMIT',
]
