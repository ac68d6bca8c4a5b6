"""
FastAPI application entry point.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalog_admin.api.router import api_router
from catalog_admin.catalog.client import CatalogAPIError, CatalogAuthError
from catalog_admin.config import settings
from catalog_admin.services.session_service import clear_session_cookies

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version="1.0.0",
    description="Admin backend for the furniture catalog: categories, products and users",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router
app.include_router(api_router, prefix="/api/v1")


@app.exception_handler(CatalogAPIError)
async def catalog_api_error_handler(request: Request, exc: CatalogAPIError):
    """Pass catalog API client errors through; upstream server errors become 502."""
    status_code = exc.status_code if 400 <= exc.status_code < 500 else 502
    response = JSONResponse(status_code=status_code, content={"detail": exc.message})
    if isinstance(exc, CatalogAuthError):
        clear_session_cookies(response)
    return response


@app.get("/")
def read_root():
    """Root endpoint."""
    return {
        "name": settings.app_name,
        "version": "1.0.0",
        "status": "running"
    }


@app.get("/api/v1/health")
def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "app_name": settings.app_name
    }


def run():
    """Serve the app with uvicorn using the configured host and port."""
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
