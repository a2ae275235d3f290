"""FastAPI application for the DocVault REST API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from docvault.api.middleware import api_key_middleware
from docvault.api.routes import attachments, files, health, vaults
from docvault.core.config import (
    DOCVAULT_CORS_ORIGINS,
    DOCVAULT_HOST,
    DOCVAULT_PORT,
)
from docvault.core.errors import (
    DocVaultError,
    InvalidVaultPathError,
    PathTraversalError,
    VaultConflictError,
    VaultEncodingError,
    VaultNotFoundError,
)

logger = logging.getLogger(__name__)

# HTTP status per error kind; anything else is a server-side I/O failure
ERROR_STATUS = {
    VaultNotFoundError: 404,
    PathTraversalError: 400,
    InvalidVaultPathError: 400,
    VaultConflictError: 409,
    VaultEncodingError: 422,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("DocVault API starting up...")
    yield
    logger.info("DocVault API shutting down...")


async def docvault_error_handler(request: Request, exc: DocVaultError) -> JSONResponse:
    """Render vault failures as short structured JSON errors."""
    status_code = ERROR_STATUS.get(type(exc), 500)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "kind": exc.kind, "path": exc.path},
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="DocVault API",
        description="REST API for per-project document vaults",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=DOCVAULT_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add API key authentication middleware
    app.middleware("http")(api_key_middleware)

    app.add_exception_handler(DocVaultError, docvault_error_handler)

    # Include routers
    app.include_router(health.router, prefix="/api/v1", tags=["Health"])
    app.include_router(vaults.router, prefix="/api/v1", tags=["Vaults"])
    app.include_router(files.router, prefix="/api/v1", tags=["Files"])
    app.include_router(attachments.router, prefix="/api/v1", tags=["Attachments"])

    return app


# Create the default app instance
app = create_app()


def run_server():
    """Run the API server."""
    import uvicorn

    uvicorn.run(
        "docvault.api.app:app",
        host=DOCVAULT_HOST,
        port=DOCVAULT_PORT,
        reload=False,
    )


if __name__ == "__main__":
    run_server()
