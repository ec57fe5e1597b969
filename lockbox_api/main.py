"""
Lockbox API - Main Application

FastAPI application generating lockbox access codes and tracking
lockbox heartbeats.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import Settings, get_settings
from .errors import ComputationError, ValidationError
from .routes import lockbox_status, totp
from .tracker import HeartbeatTracker

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info("Starting Lockbox API...")

    app.state.tracker = HeartbeatTracker()

    logger.info("Server started successfully")

    yield

    # Shutdown
    logger.info("Shutting down...")
    app.state.tracker.reset()


async def validation_error_handler(request: Request, exc: ValidationError):
    """Missing identifiers or secrets are client errors."""
    return JSONResponse(status_code=400, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request fields are reported like other validation errors."""
    error = ValidationError(
        "Invalid request parameters",
        details={'errors': [
            {'field': '.'.join(str(part) for part in err.get('loc', ())), 'message': err.get('msg')}
            for err in exc.errors()
        ]}
    )
    return JSONResponse(status_code=400, content=error.to_dict())


async def computation_error_handler(request: Request, exc: ComputationError):
    """Code generation failures are server errors."""
    logger.error(f"Computation error on {request.url.path}: {exc.message}", exc_info=exc)
    return JSONResponse(status_code=500, content=exc.to_dict())


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={
            'error': 'INTERNAL_ERROR',
            'message': 'Failed to process request',
            'details': {'reason': str(exc)}
        }
    )


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        app_settings: Settings to use instead of the environment

    Returns:
        Configured FastAPI app
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title="Lockbox API",
        description="Access codes and heartbeat tracking for remote lockboxes",
        version=__version__,
        lifespan=lifespan
    )
    app.state.settings = app_settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ComputationError, computation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Include routers
    app.include_router(totp.router, prefix="/api", tags=["TOTP"])
    app.include_router(lockbox_status.router, prefix="/api", tags=["Lockbox Status"])

    @app.get("/health")
    async def health_check(request: Request):
        """Health check endpoint."""
        tracker = getattr(request.app.state, 'tracker', None)
        return {
            "status": "healthy",
            "version": __version__,
            "tracker": tracker.get_stats() if tracker else None
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "lockbox_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=True
    )
