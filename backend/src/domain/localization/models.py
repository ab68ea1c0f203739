# src/domain/localization/models.py
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from domain.catalog.models import ScopeSection


class ChoiceTranslation(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)
    label: str
    scope_addition: Optional[str] = Field(default=None, min_length=1)


class OptionTranslation(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)
    label: str
    scope_addition: Optional[str] = Field(default=None, min_length=1)
    # keyed by choice value (structural, never translated)
    choices: Dict[str, ChoiceTranslation] = Field(default_factory=dict)

    @field_validator("choices", mode="before")
    @classmethod
    def _choices_as_mapping(cls, v: Any) -> Any:
        # list form: [{value, label, scope_addition?}, ...]
        if isinstance(v, list):
            out: Dict[str, Any] = {}
            for item in v:
                item = dict(item)
                value = item.pop("value")
                out[str(value)] = item
            return out
        return v or {}


class JobTypeTranslation(BaseModel):
    """
    Translated content for one job type. Every field is optional:
    whatever is omitted falls back to the source catalog.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)
    name: Optional[str] = None
    base_scope: Optional[List[str]] = None
    scope_sections: Optional[List[ScopeSection]] = None
    warranty: Optional[str] = None
    exclusions: Optional[List[str]] = None
    options: Dict[str, OptionTranslation] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_scope(self) -> "JobTypeTranslation":
        if self.scope_sections is not None and self.base_scope is not None:
            flat = [item for s in self.scope_sections for item in s.items]
            if flat != list(self.base_scope):
                raise ValueError("translated scope_sections do not match translated base_scope")
        return self


# trade_id -> job_type_id -> translation
TranslationBundle = Dict[str, Dict[str, JobTypeTranslation]]


class LanguagePack(BaseModel):
    """One language file: bundle plus a few UI strings used by the composer."""

    model_config = ConfigDict(extra="forbid", frozen=True)
    language: str
    options_section_title: Optional[str] = None
    trades: TranslationBundle = Field(default_factory=dict)
