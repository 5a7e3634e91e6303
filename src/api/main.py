import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.adapters.sqlite.migrator import SQLiteMigrator
from src.api.deps import get_rules, get_settings
from src.app_shell.config import ConfigurationError, load_cors_origins, validate_ops_rules

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    # Fail fast: never serve traffic with an unusable secret or rules file
    try:
        settings = get_settings()
        rules = get_rules(settings)
        validate_ops_rules(rules, settings)
        SQLiteMigrator(settings.db_path, str(settings.migrations_dir)).run_migrations()
    except (ConfigurationError, FileNotFoundError, ValueError, RuntimeError) as e:
        logger.critical("Startup aborted: %s", e)
        sys.exit(1)

    logger.info("Rules loaded from %s", settings.rules_path)
    yield


app = FastAPI(
    title="Trade Log Auth API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from src.api.routes import auth  # noqa: E402

app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])


app.add_middleware(
    CORSMiddleware,
    allow_origins=load_cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "api"}
