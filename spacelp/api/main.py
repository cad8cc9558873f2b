"""FastAPI application serving a simulated ETH/SPC pool deployment.

Domain errors are returned as JSON with the error's name and structured
fields: 400 for bad input and slippage violations, 409 for anything the
current pool or ledger state refused.
"""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from spacelp import __version__
from spacelp.api.endpoints import router
from spacelp.api.models import ErrorResponse
from spacelp.errors import InputValidationError, SlippageError, SpaceLPError

logger = structlog.get_logger()

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("SPACELP_HOST", "0.0.0.0")
PORT = int(os.environ.get("SPACELP_PORT", "8000"))
DEBUG = os.environ.get("SPACELP_DEBUG", "false").lower() in ("true", "1", "yes")

app = FastAPI(
    title="SpaceLP",
    description="ETH/SPC constant product pool and router (in-memory simulation)",
    version=__version__,
)

app.include_router(router)


def error_status(err: SpaceLPError) -> int:
    """HTTP status for a domain error."""
    if isinstance(err, InputValidationError | SlippageError):
        return 400
    return 409


@app.exception_handler(SpaceLPError)
async def handle_domain_error(request: Request, err: SpaceLPError) -> JSONResponse:
    """Render a typed domain error as JSON."""
    status = error_status(err)
    logger.info(
        "request_rejected",
        path=request.url.path,
        status=status,
        error=err.name,
    )
    body = ErrorResponse(error=err.name, detail=str(err), args=err.args_dict())
    return JSONResponse(status_code=status, content=body.model_dump())


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok"}


def run() -> None:
    """Run the API server.

    Configuration via environment variables:
    - SPACELP_HOST: Host to bind to (default: 0.0.0.0)
    - SPACELP_PORT: Port to bind to (default: 8000)
    - SPACELP_DEBUG: Enable debug/reload mode (default: false)
    """
    uvicorn.run(
        "spacelp.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
