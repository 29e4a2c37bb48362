"""
FastAPI main application for tablecop.

This application exposes the Ruby layout engine (condensation and alignment
rules) as a REST API: report-only inspection and fixed-point autocorrect.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import traceback
import logging
import os

from .api import tablecop
from .config import ConfigurationError
from ._version import __version__

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Tablecop API",
    description="API for condensing and aligning Ruby source into a table-like layout",
    version=__version__
)

# Add request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"HTTP {request.method} {request.url.path}")
    response = await call_next(request)
    logger.info(f"Response: {response.status_code}")
    return response

@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    """Invalid configuration is a client error, rejected before any pass runs."""
    logger.warning(f"Invalid configuration for {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=422, content={"detail": str(exc)})

# Global exception handler to show the full stack trace of engine failures
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Capture unexpected errors and return complete stack traces."""

    full_traceback = traceback.format_exc()

    logger.error(f"ENGINE ERROR in {request.method} {request.url}")
    logger.error(f"Exception: {exc}")
    logger.error(f"FULL STACK TRACE:\n{full_traceback}")

    error_response = {
        "detail": f"{type(exc).__name__}: {str(exc)}",
        "error_type": type(exc).__name__,
        "error_message": str(exc),
        "stack_trace": full_traceback,
        "request_url": str(request.url),
        "request_method": request.method
    }

    return JSONResponse(
        status_code=500,
        content=error_response
    )

# Allow all origins if CORS_ORIGINS is "*" (for development/testing)
# Otherwise split comma-separated list of allowed origins
cors_origins_env = os.getenv("CORS_ORIGINS", "*")
allowed_origins = ["*"] if cors_origins_env == "*" else cors_origins_env.split(",")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(tablecop.router, prefix="/api/tablecop", tags=["tablecop"])

@app.get("/")
async def root():
    """Health check endpoint with version info."""
    return {"message": "Tablecop API", "status": "running", "version": __version__}

@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy", "version": __version__}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000, reload=True)
