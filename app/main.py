"""
FastAPI application entry point.
Main application setup and configuration.
"""

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from pydantic import ValidationError as PydanticValidationError
import logging

from app import database
from app.config import settings
from app.routers import (
    locations_router,
    features_router,
    properties_router,
    units_router,
    property_images_router,
    unit_images_router,
    object_images_router,
    db_images_router,
    inquiries_router,
)
from app.utils.exceptions import APIException, ServiceUnavailableError
from app.services.error_handler import ErrorHandlerService
from app.middleware import RequestLoggingMiddleware
from app.storage import MemoryStorage, SqlStorage, Storage, create_object_store, seed_storage
from app.utils.dependencies import get_storage

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)


async def _init_database_backend() -> None:
    """Create tables and seed demo data in the relational backend."""
    await database.create_tables()

    if settings.seed_demo_data:
        async with database.AsyncSessionLocal() as session:
            await seed_storage(SqlStorage(session))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    if settings.use_database:
        logger.info("Using relational storage")
        app.state.memory_storage = None
        await _init_database_backend()
    else:
        logger.info("DATABASE_URL not set, using in-memory storage")
        app.state.memory_storage = MemoryStorage()
        if settings.seed_demo_data:
            await seed_storage(app.state.memory_storage)

    if settings.object_storage_backend == "database":
        # Built per request around the request's storage
        app.state.object_store = None
    else:
        app.state.object_store = create_object_store(settings)
    logger.info(f"Object storage backend: {settings.object_storage_backend}")

    yield

    # Shutdown
    logger.info("Shutting down application")
    await database.close_db_connection()


# Create FastAPI application instance
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Property rental listings API with a public catalog and an admin surface.

    ## Features

    * **Catalog**: Locations, neighborhood guides and feature cards
    * **Listings**: Properties and the units of multifamily buildings
    * **Galleries**: Property and unit images with ordering and a featured image
    * **Object Storage**: Uploaded image bytes served through the API
    * **Inquiries**: Contact-form submissions with a simple status workflow
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "Locations", "description": "Locations and neighborhood guides"},
        {"name": "Features", "description": "Why-choose-us feature cards"},
        {"name": "Properties", "description": "Property listing management"},
        {"name": "Units", "description": "Units of multifamily properties"},
        {"name": "Images", "description": "Property and unit image galleries"},
        {"name": "Object Storage", "description": "Stored image bytes"},
        {"name": "Inquiries", "description": "Contact-form inquiries"},
        {"name": "Health", "description": "System health endpoints"},
    ],
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Process-Time", "X-Total-Count", "X-Page", "X-Limit", "X-Total-Pages"],
)

app.add_middleware(RequestLoggingMiddleware, path_prefix=settings.api_prefix)

# Include API routers
for router in (
    locations_router,
    features_router,
    properties_router,
    units_router,
    property_images_router,
    unit_images_router,
    object_images_router,
    db_images_router,
    inquiries_router,
):
    app.include_router(router, prefix=settings.api_prefix)

# Legacy uploads
app.mount("/uploads", StaticFiles(directory=settings.upload_dir, check_dir=False), name="uploads")


# Global exception handlers using ErrorHandlerService
@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    """Handle custom API exceptions with structured error responses."""
    return ErrorHandlerService.handle_api_exception(exc, request)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle FastAPI request validation errors with detailed field information."""
    return ErrorHandlerService.handle_validation_error(exc, request)


@app.exception_handler(PydanticValidationError)
async def pydantic_validation_exception_handler(request: Request, exc: PydanticValidationError):
    """Handle Pydantic validation errors with detailed field information."""
    return ErrorHandlerService.handle_validation_error(exc, request)


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Handle database errors with appropriate error responses."""
    return ErrorHandlerService.handle_database_error(exc, request)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions such as unknown routes with structured error responses."""
    return ErrorHandlerService.handle_http_exception(exc, request)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with secure error responses."""
    return ErrorHandlerService.handle_unexpected_error(exc, request)


@app.get("/", tags=["Health"])
async def root():
    """
    Root endpoint providing basic API information.
    """
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "environment": settings.environment,
        "storage": "database" if settings.use_database else "memory",
        "object_storage": settings.object_storage_backend,
        "documentation": {
            "swagger_ui": "/docs",
            "redoc": "/redoc",
            "openapi_json": "/openapi.json"
        },
        "api_prefix": settings.api_prefix
    }


@app.get("/health", tags=["Health"])
async def health_check(storage: Storage = Depends(get_storage)):
    """
    Health check endpoint with a storage connectivity test.
    Used by container health checks and load balancers.
    """
    if not await storage.ping():
        raise ServiceUnavailableError(f"Storage backend unavailable: {storage.backend_name}")

    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "storage": storage.backend_name
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
