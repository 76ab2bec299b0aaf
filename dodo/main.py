"""FastAPI application entrypoint."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dodo.api.v1 import v1_router
from dodo.core.config import get_settings
from dodo.core.errors import DodoError
from dodo.services.container import Services

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # Startup: open the store (creates tables once) and seed an empty workspace
    settings = get_settings()
    configure_logging(settings.log_level)
    services = await Services.open(settings)
    if settings.seed_welcome_document:
        await services.documents.seed_welcome()
    app.state.services = services
    yield
    await services.close()


app = FastAPI(
    title="Dodo",
    version="0.1.0",
    description="Versioned document store with a read-only corpus overlay",
    lifespan=lifespan,
)

# ── CORS ─────────────────────────────────────────────────────
_settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in _settings.allowed_origins.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DodoError)
async def handle_dodo_error(_: Request, exc: DodoError) -> JSONResponse:
    """Return standardized responses for store and corpus errors."""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message, "code": exc.code})


# ── API routes ───────────────────────────────────────────────
app.include_router(v1_router)


@app.get("/health", tags=["system"])
async def health_check() -> dict:
    return {"status": "ok"}
