# src/api/routes/templates.py
import logging
from typing import Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.deps import get_identity, get_reconciler, get_template_repository
from api.schemas.templates import (
    DefaultJobTypesResponse,
    ReconcileResponse,
    TemplateListResponse,
    TradeTemplates,
)
from domain.catalog.errors import PersistenceError
from domain.identity.models import VerifiedIdentity
from infrastructure.db.repositories import TemplateRepository
from infrastructure.db.seed.reconcile import TemplateReconciler
from infrastructure.db.seed.schema import TemplateRow

LOGGER = logging.getLogger("api.templates")

router = APIRouter(prefix="/templates", tags=["templates"])


@router.get("", response_model=TemplateListResponse)
async def list_templates(
    trade_id: Optional[str] = Query(None),
    repo: TemplateRepository = Depends(get_template_repository),
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
):
    try:
        rows = await repo.list_visible(user_id=identity.id if identity else None, trade_id=trade_id)
    except PersistenceError as e:
        LOGGER.exception("list templates failed: %s", e)
        raise HTTPException(status_code=503, detail="template store unavailable")

    # group by trade, keeping the usage ordering inside each group
    by_trade: Dict[str, TradeTemplates] = {}
    for r in rows:
        group = by_trade.get(r.trade_id)
        if group is None:
            group = by_trade[r.trade_id] = TradeTemplates(trade_id=r.trade_id, trade_name=r.trade_name)
        group.job_types.append(r)

    return TemplateListResponse(templates=list(by_trade.values()), total=len(rows))


@router.get("/defaults", response_model=DefaultJobTypesResponse)
async def list_default_job_types(reconciler: TemplateReconciler = Depends(get_reconciler)):
    return DefaultJobTypesResponse(job_type_ids=reconciler.registry.job_type_ids())


@router.post("/reconcile", response_model=ReconcileResponse)
async def reconcile_templates(
    force: bool = Query(False, description="run again even if already attempted in this process"),
    repo: TemplateRepository = Depends(get_template_repository),
    reconciler: TemplateReconciler = Depends(get_reconciler),
):
    res = await reconciler.reconcile(repo, force=force)
    LOGGER.info("reconcile via api (force=%s): inserted=%d activated=%d", force, res.inserted, res.activated)
    return ReconcileResponse(inserted=res.inserted, activated=res.activated)


@router.get("/{template_id}", response_model=TemplateRow)
async def get_template(template_id: int, repo: TemplateRepository = Depends(get_template_repository)):
    try:
        row = await repo.get_by_id(template_id)
    except PersistenceError as e:
        LOGGER.exception("get template %s failed: %s", template_id, e)
        raise HTTPException(status_code=503, detail="template store unavailable")
    if row is None:
        raise HTTPException(status_code=404, detail="template not found")
    return row


@router.post("/{template_id}/use")
async def track_template_usage(template_id: int, repo: TemplateRepository = Depends(get_template_repository)):
    try:
        found = await repo.increment_usage(template_id)
    except PersistenceError as e:
        LOGGER.exception("track usage %s failed: %s", template_id, e)
        raise HTTPException(status_code=503, detail="template store unavailable")
    if not found:
        raise HTTPException(status_code=404, detail="template not found")
    return {"message": "usage tracked"}
