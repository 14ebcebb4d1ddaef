"""
HTTP boundary for the market-state service.
"""

from .app import ChainReaders, create_app, run_server
from .errors import register_error_handlers

__all__ = [
    "ChainReaders",
    "create_app",
    "run_server",
    "register_error_handlers",
]
