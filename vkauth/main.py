"""
FastAPI application for VK social login.

This module wires dependencies and configures the application.
The OAuth2 client is in vkauth/core, provider and HTTP adapters in
vkauth/infrastructure.
"""

import logging
import os
from contextlib import asynccontextmanager
from datetime import UTC, datetime

# Configure logging FIRST, before other local imports
from vkauth.logging_config import setup_global_logging

setup_global_logging()

# Now import other modules (they will use the configured logging)
from fastapi import FastAPI, Request, status  # noqa: E402
from fastapi.responses import JSONResponse  # noqa: E402

from vkauth.core.exceptions import (  # noqa: E402
    ParseError,
    TransportError,
    UnexpectedResponseError,
)
from vkauth.oauth import router as oauth_router  # noqa: E402
from vkauth.oauth.config import get_oauth_config, reset_oauth_clients  # noqa: E402

logger = logging.getLogger(__name__)


# ============================================================================
# Application Lifecycle
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Clients are created lazily on first request; shutdown drops them.
    """
    logger.info(
        "Application starting up...",
        extra={"providers": get_oauth_config().get_configured_providers()},
    )
    yield
    logger.info("Shutting down application...")
    reset_oauth_clients()


app = FastAPI(
    title="VK Social Login",
    description="OAuth2 login with VK and normalized user profiles",
    version="1.0.0",
    lifespan=lifespan,
)


# ============================================================================
# Centralized Exception Handlers
# ============================================================================


@app.exception_handler(UnexpectedResponseError)
async def unexpected_response_handler(request: Request, exc: UnexpectedResponseError):
    """
    Handle provider-reported errors (access denied, rejected code).

    Returns 401 Unauthorized; the user has to start the flow again.
    """
    logger.warning(
        f"OAuth provider error: {str(exc)}",
        extra={"upstream_status": exc.status_code},
    )
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={
            "status": "error",
            "message": f"OAuth authorization failed: {str(exc)}",
        },
    )


@app.exception_handler(ParseError)
async def parse_error_handler(request: Request, exc: ParseError):
    """Handle unreadable provider responses with 502 Bad Gateway."""
    logger.error(f"Failed to parse provider response: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={
            "status": "error",
            "message": "Invalid response from OAuth provider",
        },
    )


@app.exception_handler(TransportError)
async def transport_error_handler(request: Request, exc: TransportError):
    """Handle network failures talking to the provider with 502 Bad Gateway."""
    logger.error(f"Transport error: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={
            "status": "error",
            "message": "OAuth provider unreachable - please retry",
        },
    )


# ============================================================================
# Health Check Endpoints
# ============================================================================


@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "vkauth",
        "timestamp": datetime.now(UTC).isoformat(),
    }


@app.get("/health")
async def health():
    """Health check endpoint for Cloud Run."""
    return {"status": "healthy"}


# ============================================================================
# Include Routers
# ============================================================================

app.include_router(oauth_router.router)


# ============================================================================
# Main Entry Point
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", 8080))
    uvicorn.run(app, host="0.0.0.0", port=port)
