"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from questlog import __version__
from questlog.api.errors import register_exception_handlers
from questlog.api.routes import router as api_router
from questlog.core.config import settings
from questlog.core.database import init_db
from questlog.core.logging import configure_logging
from questlog.middleware import register_middleware

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    if settings.DB_AUTO_CREATE_TABLES:
        init_db()
    logger.info("Questlog API started (env=%s, prefix=%s)", settings.APP_ENV, settings.API_PREFIX)
    yield


app = FastAPI(
    title="Questlog API",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

if settings.CORS_ALLOW_ORIGINS:
    allow_origins = settings.CORS_ALLOW_ORIGINS
else:
    allow_origins = ["*"] if settings.APP_ENV == "dev" else []

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=allow_origins != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["access_token"],
)
register_middleware(app)
register_exception_handlers(app)

app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Questlog API"}
