"""
FastAPI application for the market-state service.
"""

import logging
from contextlib import asynccontextmanager
from typing import Callable, Dict, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..chain import ChainReader, RetryingChainReader
from ..config import ConfigManager
from ..core.storage import build_price_store
from ..prices import HistoricPriceGateway
from .errors import register_error_handlers
from .routes import router

logger = logging.getLogger(__name__)


class ChainReaders:
    """
    Lazily built, per-chain contract readers.

    A missing chain id resolves to the configured default chain. Only
    supported chains get a cached reader of their own; every other id shares
    one unconfigured reader whose reads raise ConfigurationError.
    """

    def __init__(self, config: ConfigManager, factory: Optional[Callable[[int], object]] = None):
        self.config = config
        self._factory = factory or self._build
        self._readers: Dict[int, object] = {}
        self._unsupported = ChainReader(None, None)

    def _build(self, chain_id: int):
        return RetryingChainReader(ChainReader.for_chain(self.config.chains, chain_id))

    def get(self, chain_id: Optional[int] = None):
        if chain_id is None:
            chain_id = self.config.chains.DEFAULT_CHAIN_ID
        if not self.config.chains.is_supported_chain(chain_id):
            return self._unsupported
        if chain_id not in self._readers:
            self._readers[chain_id] = self._factory(chain_id)
        return self._readers[chain_id]


def create_app(
    config: Optional[ConfigManager] = None,
    gateway: Optional[HistoricPriceGateway] = None,
    readers: Optional[ChainReaders] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        config: Configuration, read from the environment if omitted
        gateway: Price gateway, built over the configured Postgres store if omitted
        readers: Per-chain reader source, built from config if omitted
    """
    config = config or ConfigManager()
    store = None
    if gateway is None:
        store = build_price_store(config.database)
        gateway = HistoricPriceGateway(store)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Market state API starting (environment: {config.environment})")
        yield
        if store is not None:
            await store.disconnect()
        logger.info("Market state API stopped")

    app = FastAPI(
        title="Market State API",
        description="Whitelist, order progress and historic prices for the limit-order exchange",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.config = config
    app.state.gateway = gateway
    app.state.readers = readers or ChainReaders(config)

    register_error_handlers(app)
    app.include_router(router)
    return app


def run_server(config: Optional[ConfigManager] = None, host: Optional[str] = None, port: Optional[int] = None):
    """Run the API under uvicorn."""
    config = config or ConfigManager()
    config.validate_configuration()

    host = host or config.api.API_HOST
    port = port or config.api.API_PORT
    logger.info(f"Starting market state API on {host}:{port} (Environment: {config.environment})")

    uvicorn.run(
        create_app(config),
        host=host,
        port=port,
        log_level=config.base.LOG_LEVEL.lower(),
    )
