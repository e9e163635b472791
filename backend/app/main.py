"""
FastAPI main application for TestForge.

This application provides a REST API for generating Cypress spec files from
Gherkin test cases and for validating, repairing and formatting test code.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import traceback
import logging
import os

from .api import code_validator, suites, system
from ._version import __version__

logger = logging.getLogger(__name__)

app = FastAPI(
    title="TestForge API",
    description="API for generating and repairing Cypress test files",
    version=__version__
)

# Add request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"🌐 HTTP {request.method} {request.url.path}")
    response = await call_next(request)
    logger.info(f"🌐 Response: {response.status_code}")
    return response

# Global exception handler for errors that escape the routers
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Log unhandled errors with their stack trace and return them as JSON."""

    full_traceback = traceback.format_exc()

    logger.error(f"🚨 UNHANDLED ERROR in {request.method} {request.url}")
    logger.error(f"🚨 Exception: {exc}")
    logger.error(f"🚨 FULL STACK TRACE:\n{full_traceback}")

    error_response = {
        "detail": f"{type(exc).__name__}: {str(exc)}",
        "error_type": type(exc).__name__,
        "error_message": str(exc),
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
app.include_router(code_validator.router, prefix="/api/code-validator", tags=["code-validator"])
app.include_router(suites.router, prefix="/api/test-generator", tags=["test-generator"])
app.include_router(system.router, prefix="/api/system", tags=["system"])

@app.get("/")
async def root():
    """Health check endpoint with version info."""
    return {"message": "TestForge API", "status": "running", "version": __version__}

@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy", "version": __version__}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
