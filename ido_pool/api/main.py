"""FastAPI application for the IDO pool program.

Callers are assumed to be authenticated upstream; the `authority` named in a
request body is trusted as the signer of that instruction.
"""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ido_pool import __version__
from ido_pool.api.endpoints import router
from ido_pool.errors import (
    AccountAlreadyExists,
    AccountNotFound,
    LedgerError,
    MintNotFound,
    PoolAlreadyExists,
    PoolNotFound,
    ProgramError,
)
from ido_pool.models.api import ErrorResponse
from ido_pool.signer import SignerDerivationError

logger = structlog.get_logger()

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("IDO_HOST", "0.0.0.0")
PORT = int(os.environ.get("IDO_PORT", "8000"))
DEBUG = os.environ.get("IDO_DEBUG", "false").lower() in ("true", "1", "yes")

# Maximum request body size (64 KB); instruction bodies are small
MAX_REQUEST_SIZE = 64 * 1024

app = FastAPI(
    title="IDO Pool",
    description="Phase-gated token exchange pool",
    version=__version__,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


def _error(status_code: int, exc: Exception, code: int | None = None) -> JSONResponse:
    body = ErrorResponse(error=type(exc).__name__, message=str(exc), code=code)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@app.exception_handler(ProgramError)
async def program_error_handler(request: Request, exc: ProgramError) -> JSONResponse:
    logger.warning(
        "instruction_rejected", path=request.url.path, error=exc.name, code=exc.code
    )
    return _error(400, exc, exc.code)


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    if isinstance(exc, (AccountNotFound, MintNotFound)):
        return _error(404, exc)
    if isinstance(exc, AccountAlreadyExists):
        return _error(409, exc)
    logger.warning("ledger_rejected", path=request.url.path, error=type(exc).__name__)
    return _error(400, exc)


@app.exception_handler(PoolNotFound)
async def pool_not_found_handler(request: Request, exc: PoolNotFound) -> JSONResponse:
    return _error(404, exc)


@app.exception_handler(PoolAlreadyExists)
async def pool_exists_handler(request: Request, exc: PoolAlreadyExists) -> JSONResponse:
    return _error(409, exc)


@app.exception_handler(SignerDerivationError)
async def signer_error_handler(request: Request, exc: SignerDerivationError) -> JSONResponse:
    return _error(400, exc)


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the API server.

    Configuration via environment variables:
    - IDO_HOST: Host to bind to (default: 0.0.0.0)
    - IDO_PORT: Port to bind to (default: 8000)
    - IDO_DEBUG: Enable debug/reload mode (default: false)
    - IDO_PROGRAM_ID: Program id used for signer derivation
    """
    uvicorn.run(
        "ido_pool.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
