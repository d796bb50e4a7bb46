# contactbook/main.py
"""
Application factory with storage lifecycle management.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from contactbook.config import Settings, settings
from contactbook.infrastructure.observability.logging import get_logger, setup_logging
from contactbook.middleware import RequestContextMiddleware
from contactbook.repositories.contact_repository import ContactRepository, ContactStorageError
from contactbook.routes import contacts, health
from contactbook.services.contact_store import ContactStore
from contactbook.services.kv_store import build_key_value_store
from contactbook.services.latency_simulator import LatencySimulator
from contactbook.services.redis_client import FastRedisClient

# Setup logging before creating the app
setup_logging(log_level=settings.LOG_LEVEL)
logger = get_logger(__name__)


def build_contact_store(app_settings: Settings) -> ContactStore:
    """Wire the configured storage backend and latency simulator into a ContactStore."""
    store = build_key_value_store(app_settings)
    repository = ContactRepository(store, key=app_settings.CONTACTS_KEY)
    latency = LatencySimulator(**app_settings.get_latency_config())
    return ContactStore(repository, latency=latency)


def create_app(
    contact_store: ContactStore | None = None, app_settings: Settings = settings
) -> FastAPI:
    contact_store = contact_store or build_contact_store(app_settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Handle application startup and shutdown."""
        logger.info(
            "Application starting",
            environment=app_settings.environment,
            debug=app_settings.debug,
            storage_backend=app_settings.STORAGE_BACKEND,
        )

        store = contact_store.repository.store
        if isinstance(store, FastRedisClient):
            logger.info("Initializing Redis connection")
            await store.initialize()

        yield

        logger.info("Application shutting down")
        if isinstance(store, FastRedisClient):
            try:
                await store.close()
            except Exception as e:
                logger.error("Error closing Redis", error=str(e))

    app = FastAPI(
        title="Contact Directory",
        description="Personal contact directory with search, filters and local persistence",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.contact_store = contact_store

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health.router)
    app.include_router(contacts.router)

    @app.exception_handler(ContactStorageError)
    async def storage_error_handler(request: Request, exc: ContactStorageError):
        logger.error("Contact storage error", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=500, content={"detail": "Contact storage is unreadable"})

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log HTTP requests with timing."""
        start_time = time.time()
        response = await call_next(request)
        process_time = (time.time() - start_time) * 1000

        logger.info(
            "HTTP request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(process_time, 2),
        )
        return response

    return app


app = create_app()
