from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from domain.catalog.models import DayRange

# option_id -> True/False (boolean option) or choice value (select option)
Selection = Dict[str, Union[bool, str]]


class EstimateSection(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)
    title: Optional[str] = None
    items: List[str] = Field(default_factory=list)


class Estimate(BaseModel):
    """
    Priced, ordered scope document. Pure function output, never persisted.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)
    price_range_low: int
    price_range_high: int
    scope_sections: List[EstimateSection] = Field(default_factory=list)
    warranty: Optional[str] = None
    exclusions: Optional[List[str]] = None
    estimated_days: Optional[DayRange] = None
