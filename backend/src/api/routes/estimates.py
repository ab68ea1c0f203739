# src/api/routes/estimates.py
from fastapi import APIRouter, Depends, HTTPException

from api.deps import get_estimate_service
from api.schemas.estimates import EstimateRequest, EstimateResponse
from domain.catalog.errors import InvalidSelection, NotFoundError
from service.estimate import EstimateService

router = APIRouter(prefix="/estimates", tags=["estimates"])


@router.post("", response_model=EstimateResponse)
async def create_estimate(req: EstimateRequest, svc: EstimateService = Depends(get_estimate_service)):
    """
    Compose a priced, ordered scope document for one job type + option selection.
    """
    language = req.language or svc.overlay.source_language
    try:
        estimate = svc.estimate(
            trade_id=req.trade_id,
            job_type_id=req.job_type_id,
            selection=req.selection,
            language=language,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidSelection as e:
        raise HTTPException(status_code=422, detail={"option_id": e.option_id, "message": str(e)})

    return EstimateResponse(
        trade_id=req.trade_id,
        job_type_id=req.job_type_id,
        language=language,
        estimate=estimate,
    )
