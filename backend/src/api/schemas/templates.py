# src/api/schemas/templates.py
from typing import List

from pydantic import BaseModel, Field

from infrastructure.db.seed.schema import TemplateRow


class TradeTemplates(BaseModel):
    trade_id: str
    trade_name: str
    job_types: List[TemplateRow] = Field(default_factory=list)


class TemplateListResponse(BaseModel):
    templates: List[TradeTemplates] = Field(default_factory=list)
    total: int = 0


class ReconcileResponse(BaseModel):
    inserted: int
    activated: int


class DefaultJobTypesResponse(BaseModel):
    job_type_ids: List[str] = Field(default_factory=list)
