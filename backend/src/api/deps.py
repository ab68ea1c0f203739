# src/api/deps.py
from typing import Any, AsyncGenerator, Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from domain.identity.models import VerifiedIdentity
from infrastructure.catalog.store import CatalogStore
from infrastructure.db.database import get_session
from infrastructure.db.repositories import TemplateRepository
from infrastructure.db.seed.reconcile import TemplateReconciler
from service.estimate import EstimateService
from service.localization import LocalizationOverlay


# DB session (FastAPI dependency); get_session supports yield-style dependencies
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    async for s in get_session():
        yield s


def get_template_repository(session: AsyncSession = Depends(db_session)) -> TemplateRepository:
    return TemplateRepository(session)


# process-wide objects are built once in the lifespan and parked on app.state
def get_catalog(request: Request) -> CatalogStore:
    return request.app.state.catalog


def get_overlay(request: Request) -> LocalizationOverlay:
    return request.app.state.overlay


def get_reconciler(request: Request) -> TemplateReconciler:
    return request.app.state.reconciler


def get_estimate_service(
    catalog: CatalogStore = Depends(get_catalog),
    overlay: LocalizationOverlay = Depends(get_overlay),
) -> EstimateService:
    return EstimateService(catalog=catalog, overlay=overlay)


def get_identity(request: Request) -> Optional[VerifiedIdentity]:
    """Identity verified upstream (session middleware), if any."""
    raw: Any = getattr(request.state, "identity", None)
    if raw is None or isinstance(raw, VerifiedIdentity):
        return raw
    return VerifiedIdentity.model_validate(raw)
