"""FastAPI application entry point for the petition registry."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from petition_registry import __version__
from petition_registry.api.middleware.logging_middleware import LoggingMiddleware
from petition_registry.api.routes.health import router as health_router
from petition_registry.api.routes.petition_registry import (
    router as petition_registry_router,
)
from petition_registry.api.startup import (
    configure_logging,
    initialize_petition_registry,
    load_environment,
)
from petition_registry.bootstrap.database import close_database_engine


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    load_environment()
    configure_logging()
    await initialize_petition_registry()
    yield
    await close_database_engine()


app = FastAPI(
    title="Petition Registry API",
    description="Registry of petitions, signatures and creation fees",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(LoggingMiddleware)
app.include_router(health_router)
app.include_router(petition_registry_router)
