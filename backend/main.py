import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.routes import api_router
from infrastructure.catalog.store import CatalogStore
from infrastructure.config import AppConfig, load_app_config
from infrastructure.db.database import dispose_engine, get_session
from infrastructure.db.repositories import TemplateRepository
from infrastructure.db.seed.reconcile import ReconciliationState, TemplateReconciler
from infrastructure.db.seed.registry import TemplateRegistry
from infrastructure.localization.provider import TranslationProvider
from service.localization import LocalizationOverlay

CONFIG = load_app_config()

# -------------------------------
# Logging
# -------------------------------

logging.basicConfig(
    level=getattr(logging, CONFIG.log_level, logging.INFO),
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

# quiet down chatty sub-loggers
for name in [
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "sqlalchemy.dialects",
]:
    logging.getLogger(name).setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

LOGGER = logging.getLogger("startup")


def init_runtime(app: FastAPI, config: AppConfig) -> None:
    """Load read-only content once and park it on app.state."""
    catalog = CatalogStore.load(config.catalog_path)
    provider = TranslationProvider.load(config.translations_root)
    registry = TemplateRegistry.load(config.templates_path)

    app.state.config = config
    app.state.catalog = catalog
    app.state.overlay = LocalizationOverlay(provider, source_language=config.source_language)
    app.state.reconciliation_state = ReconciliationState()
    app.state.reconciler = TemplateReconciler(registry, app.state.reconciliation_state)


# -------------------------------
# FastAPI Lifespan
# -------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    # === STARTUP ===
    init_runtime(app, CONFIG)

    if CONFIG.auto_reconcile:
        async for session in get_session():
            res = await app.state.reconciler.reconcile(TemplateRepository(session))
            LOGGER.info("[startup] templates inserted=%d activated=%d", res.inserted, res.activated)

    yield

    # === SHUTDOWN ===
    await dispose_engine()


# -------------------------------
# FastAPI app
# -------------------------------

app = FastAPI(lifespan=lifespan)


@app.get("/healthz", tags=["infra"])
async def health_check():
    return {"status": "ok"}


app.include_router(api_router, prefix="/api")
