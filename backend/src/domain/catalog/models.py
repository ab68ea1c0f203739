# src/domain/catalog/models.py
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

OptionType = Literal["boolean", "select"]


class PriceRange(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)
    low: int
    high: int

    @model_validator(mode="after")
    def _check_order(self) -> "PriceRange":
        if self.low > self.high:
            raise ValueError(f"price range low ({self.low}) must not exceed high ({self.high})")
        return self


class DayRange(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)
    low: int
    high: int


class ScopeSection(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)
    title: str
    items: List[str] = Field(default_factory=list)


class Choice(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)
    value: str
    label: str
    price_modifier: int = 0
    scope_addition: Optional[str] = Field(default=None, min_length=1)


class JobOption(BaseModel):
    """
    Customization axis on a job type.
    - boolean: price_modifier / scope_addition apply when toggled on
    - select: one of `choices` (matched by value) applies
    """

    model_config = ConfigDict(extra="forbid", frozen=True)
    id: str
    label: str
    type: OptionType
    price_modifier: Optional[int] = None
    scope_addition: Optional[str] = Field(default=None, min_length=1)
    choices: Optional[List[Choice]] = None

    @model_validator(mode="after")
    def _check_choices(self) -> "JobOption":
        if self.type == "select":
            if not self.choices:
                raise ValueError(f"select option '{self.id}' must declare choices")
            values = [c.value for c in self.choices]
            if len(values) != len(set(values)):
                raise ValueError(f"duplicate choice value in option '{self.id}'")
        return self

    def find_choice(self, value: str) -> Optional[Choice]:
        for c in self.choices or []:
            if c.value == value:
                return c
        return None


class JobType(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)
    id: str
    name: str
    base_scope: List[str]
    scope_sections: Optional[List[ScopeSection]] = None
    options: List[JobOption] = Field(default_factory=list)
    base_price_range: PriceRange
    estimated_days: Optional[DayRange] = None
    warranty: Optional[str] = None
    exclusions: Optional[List[str]] = None

    @model_validator(mode="after")
    def _check_structure(self) -> "JobType":
        ids = [o.id for o in self.options]
        if len(ids) != len(set(ids)):
            raise ValueError(f"duplicate option id in job type '{self.id}'")
        # scope_sections is authoritative for rendering; base_scope is its flat fallback
        if self.scope_sections is not None:
            flat = [item for s in self.scope_sections for item in s.items]
            if flat != list(self.base_scope):
                raise ValueError(f"scope_sections of '{self.id}' do not match base_scope")
        return self

    def find_option(self, option_id: str) -> Optional[JobOption]:
        for o in self.options:
            if o.id == option_id:
                return o
        return None


class Trade(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)
    id: str
    name: str
    job_types: List[JobType] = Field(default_factory=list)

    def find_job_type(self, job_type_id: str) -> Optional[JobType]:
        for jt in self.job_types:
            if jt.id == job_type_id:
                return jt
        return None
