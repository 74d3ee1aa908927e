"""Pledgebook API — FastAPI application entry point.

Invariants:
    - Routers are included one by one below; nothing is discovered
    - The ServiceContainer exists only between lifespan startup and shutdown
    - Every error response goes through api/error_handlers.py

Design Decisions:
    - Services hang off app.state rather than module globals, so tests install
      a container built on fakes without touching the lifespan
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app import __version__
from app.api.error_handlers import register_error_handlers
from app.api.routes import auth, contributions, events, health, politicians, users
from app.config import get_settings
from app.infrastructure.observability import setup_logging
from app.services.container import build_services_from_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.services = build_services_from_settings(settings)
    logger.info(f"Pledgebook API {__version__} ready")
    try:
        yield
    finally:
        await app.state.services.close()
        logger.info("Pledgebook API stopped")


app = FastAPI(title="Pledgebook API", version=__version__, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["Authorization", "Content-Type"],
)

for module in (health, auth, users, contributions, politicians, events):
    app.include_router(module.router)

register_error_handlers(app)


@app.get("/")
async def banner():
    return {"revitalizingDemocracy": True}
