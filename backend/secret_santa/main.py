"""
Secret Santa Backend - FastAPI Application

Draws a random recipient for each registrant from a shared name pool and
lets them look the assignment up again with their credentials.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from secret_santa.config import get_settings
from secret_santa.core.errors import SantaError, ValidationError
from secret_santa.core.logging import configure_logging
from secret_santa.database.connections import get_mongo_client, close_connections
from secret_santa.database.registry import create_indexes
from secret_santa.routers import health, santa

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
    - Initialize database connection
    - Create collections and indexes

    Shutdown:
    - Close all database connections
    """
    logger.info("Starting up Secret Santa Backend...")

    try:
        client = await get_mongo_client()
        await create_indexes(client)
        logger.info("Collections and indexes ready")
    except Exception as e:
        logger.warning(f"Database initialization warning: {e}")

    yield

    logger.info("Shutting down Secret Santa Backend...")
    await close_connections()
    logger.info("Database connections closed")


app = FastAPI(
    title="Secret Santa API",
    description="""
## Secret Santa Assignment API

Each participant registers once and is assigned a random recipient from the
shared name pool. Nobody is ever assigned to themselves and no name is handed
out twice.

### Operations
- `POST /santa` with `action: "create"` registers and draws a recipient
- `POST /santa` with `action: "check"` returns the recipient again

### Errors
Every error body has the form `{"error": "<kind>", "detail": "<message>"}`.
    """,
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SantaError)
async def santa_error_handler(request: Request, exc: SantaError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.kind, "detail": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=ValidationError.status_code,
        content={"error": ValidationError.kind, "detail": "Malformed request body"},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "internal_error", "detail": "An unexpected error occurred"},
    )


app.include_router(health.router)
app.include_router(santa.router)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Secret Santa API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }
