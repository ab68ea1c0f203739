# src/api/routes/catalog.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.deps import get_catalog, get_overlay
from api.schemas.catalog import JobTypeResponse, TradeListResponse, TradeResponse, TradeSummary
from domain.catalog.errors import NotFoundError
from infrastructure.catalog.store import CatalogStore
from service.localization import LocalizationOverlay

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("/trades", response_model=TradeListResponse)
async def list_trades(
    catalog: CatalogStore = Depends(get_catalog),
    overlay: LocalizationOverlay = Depends(get_overlay),
):
    items = [
        TradeSummary(id=t.id, name=t.name, job_type_ids=[jt.id for jt in t.job_types]) for t in catalog.list_trades()
    ]
    src = overlay.source_language
    languages = [src] + [lang for lang in overlay.provider.languages() if lang != src]
    return TradeListResponse(trades=items, languages=languages)


@router.get("/trades/{trade_id}", response_model=TradeResponse)
async def get_trade(
    trade_id: str,
    language: Optional[str] = Query(None, description="content language"),
    catalog: CatalogStore = Depends(get_catalog),
    overlay: LocalizationOverlay = Depends(get_overlay),
):
    try:
        trade = catalog.get_trade(trade_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    lang = language or overlay.source_language
    job_types = [overlay.localize(jt, trade.id, lang) for jt in trade.job_types]
    return TradeResponse(id=trade.id, name=trade.name, language=lang, job_types=job_types)


@router.get("/trades/{trade_id}/job-types/{job_type_id}", response_model=JobTypeResponse)
async def get_job_type(
    trade_id: str,
    job_type_id: str,
    language: Optional[str] = Query(None, description="content language"),
    catalog: CatalogStore = Depends(get_catalog),
    overlay: LocalizationOverlay = Depends(get_overlay),
):
    try:
        jt = catalog.get_job_type(trade_id, job_type_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    lang = language or overlay.source_language
    return JobTypeResponse(
        trade_id=trade_id,
        language=lang,
        job_type=overlay.localize(jt, trade_id, lang),
        options_section_title=overlay.provider.options_section_title(lang),
    )
