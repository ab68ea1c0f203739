# src/api/schemas/catalog.py
from typing import List, Optional

from pydantic import BaseModel, Field

from domain.catalog.models import JobType


class TradeSummary(BaseModel):
    id: str
    name: str
    job_type_ids: List[str] = Field(default_factory=list)


class TradeListResponse(BaseModel):
    trades: List[TradeSummary] = Field(default_factory=list)
    # source language first, then every loaded translation
    languages: List[str] = Field(default_factory=list)


class TradeResponse(BaseModel):
    id: str
    name: str
    language: str
    job_types: List[JobType] = Field(default_factory=list)


class JobTypeResponse(BaseModel):
    trade_id: str
    language: str
    job_type: JobType
    options_section_title: Optional[str] = None
