# src/api/schemas/estimates.py
from typing import Dict, Optional, Union

from pydantic import BaseModel, Field

from domain.estimate.models import Estimate


class EstimateRequest(BaseModel):
    trade_id: str = Field(..., min_length=1)
    job_type_id: str = Field(..., min_length=1)
    language: Optional[str] = Field(default=None, description="content language (default: source language)")
    selection: Dict[str, Union[bool, str]] = Field(default_factory=dict, description="option_id -> bool | choice value")


class EstimateResponse(BaseModel):
    trade_id: str
    job_type_id: str
    language: str
    estimate: Estimate
