"""JSON Guard Service - FastAPI Application Entry Point

A FastAPI service whose routes accept guarded JSON bodies: JSON content type
only, a capped body size, typed decoding and field-level validation.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from config import settings
from jsonguard import __version__
from jsonguard.routers import notes
from jsonguard.utils.errors import GuardFailure, RequestForwarded

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
)
logger = logging.getLogger("jsonguard")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    # Startup
    logger.info(
        "Starting JSON Guard Service",
        extra={"environment": settings.environment, "port": settings.port},
    )
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"JSON body limit: {settings.json_body_limit} bytes")

    yield

    # Shutdown
    logger.info("Shutting down JSON Guard Service")


app = FastAPI(
    title="JSON Guard Service",
    description="Guarded JSON request bodies with typed decoding and validation",
    version=__version__,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT"],
    allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
)

# JSON routes first so non-JSON requests fall through to the plain ones
app.include_router(notes.json_router)
app.include_router(notes.router)


@app.get("/")
async def root():
    """Root endpoint - basic service status."""
    return {"service": "json-guard", "status": "running"}


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring and load balancer probes."""
    return {
        "status": "healthy",
        "version": __version__,
        "environment": settings.environment,
    }


@app.exception_handler(GuardFailure)
async def guard_failure_handler(request: Request, exc: GuardFailure):
    """Return a guard failure as its status code with a plain-text message."""
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        f"Guard failure: {type(exc).__name__} ({exc.status_code})",
        extra={"path": request.url.path, "method": request.method},
    )
    return PlainTextResponse(exc.message, status_code=exc.status_code)


@app.exception_handler(RequestForwarded)
async def request_forwarded_handler(request: Request, exc: RequestForwarded):
    """A forwarded request that no other route took ends like an unknown path."""
    logger.debug(f"No route accepted forwarded request to {request.url.path}")
    return PlainTextResponse("Not Found", status_code=404)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors.

    Logs the error and returns a user-friendly message.
    Never exposes internal error details to clients.
    """
    logger.error(
        f"Unhandled exception: {type(exc).__name__}",
        extra={
            "path": request.url.path,
            "method": request.method,
        },
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "internal_error",
            "message": "An unexpected error occurred. Please try again.",
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.port)
