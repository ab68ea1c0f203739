# src/infrastructure/db/seed/schema.py
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DefaultTemplate(BaseModel):
    """Canonical system template for one job type (registry entry)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    trade_id: str
    trade_name: str
    job_type_id: str
    job_type_name: str
    base_scope: List[str]
    options: List[Dict[str, Any]] = Field(default_factory=list)
    base_price_low: int
    base_price_high: int
    estimated_days_low: Optional[int] = None
    estimated_days_high: Optional[int] = None
    warranty: Optional[str] = None
    exclusions: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_prices(self) -> "DefaultTemplate":
        if self.base_price_low > self.base_price_high:
            raise ValueError(f"{self.job_type_id}: base_price_low must not exceed base_price_high")
        return self


class TemplateRow(BaseModel):
    """Persisted template row as seen by the reconciler and the API."""

    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    trade_id: str
    trade_name: str
    job_type_id: str
    job_type_name: str
    base_scope: List[str] = Field(default_factory=list)
    options: List[Dict[str, Any]] = Field(default_factory=list)
    base_price_low: int
    base_price_high: int
    estimated_days_low: Optional[int] = None
    estimated_days_high: Optional[int] = None
    warranty: Optional[str] = None
    exclusions: Optional[List[str]] = None
    is_default: bool = True
    is_active: bool = True
    created_by: Optional[str] = None
    usage_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_default(cls, tpl: DefaultTemplate) -> "TemplateRow":
        return cls(
            **tpl.model_dump(),
            is_default=True,
            is_active=True,
            created_by=None,
            usage_count=0,
        )
