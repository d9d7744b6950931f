import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from briklyst.core.config import CORS_ORIGINS, DATABASE_URL
from briklyst.core.database import Base, engine
from briklyst.core.errors import register_exception_handlers
from briklyst.core.logging_setup import configure_logging
from briklyst.core.startup_checks import apply_migrations, ensure_migrations_applied, validate_database_environment
from briklyst.middleware.observability import ObservabilityMiddleware
import briklyst.models  # noqa: F401  models must be registered before create_all

from briklyst.routers.auth import router as auth_router
from briklyst.routers.collections import router as collections_router
from briklyst.routers.internal_metrics import router as internal_metrics_router
from briklyst.routers.mailing import router as mailing_router
from briklyst.routers.products import router as products_router
from briklyst.routers.public_storefront import router as public_storefront_router
from briklyst.routers.reports import router as reports_router
from briklyst.routers.saved_templates import router as saved_templates_router
from briklyst.routers.storefront_settings import router as storefront_settings_router
from briklyst.routers.storefronts import router as storefronts_router
from briklyst.routers.upload import router as upload_router

configure_logging()

logger = logging.getLogger(__name__)
STARTUP_PREFIX = "[STARTUP]"
REPO_ROOT = Path(__file__).resolve().parents[1]
ALEMBIC_CONFIG_PATH = Path(os.getenv("ALEMBIC_CONFIG", str(REPO_ROOT / "alembic.ini")))


def _startup_tasks() -> None:
    try:
        validate_database_environment()
        if DATABASE_URL.startswith("sqlite"):
            # local databases are created in place; real deployments run alembic
            Base.metadata.create_all(bind=engine)
            return
        apply_migrations(alembic_config_path=ALEMBIC_CONFIG_PATH)
        ensure_migrations_applied(engine=engine, alembic_config_path=ALEMBIC_CONFIG_PATH)
    except Exception:
        logger.exception("%s ERROR startup failed", STARTUP_PREFIX)
        raise


@asynccontextmanager
async def lifespan(_: FastAPI):
    _startup_tasks()
    yield


app = FastAPI(
    title="Briklyst API",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(ObservabilityMiddleware)
register_exception_handlers(app)

UPLOADS_DIR = Path("uploads")
UPLOADS_DIR.mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=str(UPLOADS_DIR)), name="uploads")

# Routers
app.include_router(auth_router)
app.include_router(storefronts_router)
app.include_router(storefront_settings_router)
app.include_router(saved_templates_router)
app.include_router(public_storefront_router)
app.include_router(products_router)
app.include_router(collections_router)
app.include_router(mailing_router)
app.include_router(reports_router)
app.include_router(upload_router)
app.include_router(internal_metrics_router)


@app.get("/")
def root():
    return {"status": "ok"}


@app.get("/health")
def health():
    return {"status": "healthy"}
