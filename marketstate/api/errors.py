"""
Translate the error taxonomy into HTTP responses.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..chain.errors import ConfigurationError, NotFoundError, RpcError
from ..prices.models import BadRequestError

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_error_handlers(app: FastAPI) -> None:
    """Register handlers for every taxonomy member plus a catch-all."""

    @app.exception_handler(BadRequestError)
    async def bad_request_handler(request: Request, exc: BadRequestError):
        logger.info(f"Bad request on {request.url.path}: {exc}")
        return error_response(400, str(exc) or "Bad request")

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(request: Request, exc: ConfigurationError):
        logger.warning(f"Feature disabled on {request.url.path}: {exc}")
        return error_response(503, "Contract not configured for this chain")

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return error_response(404, str(exc) or "Not found")

    @app.exception_handler(RpcError)
    async def rpc_error_handler(request: Request, exc: RpcError):
        logger.error(f"RPC failure on {request.url.path}: {exc}")
        return error_response(502, "Upstream RPC error")

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
        return error_response(500, "Internal server error")
