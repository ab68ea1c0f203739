# src/service/estimate.py
from typing import List, Mapping, Optional, Union

from domain.catalog.errors import InvalidSelection
from domain.catalog.models import JobType
from domain.estimate.models import Estimate, EstimateSection
from infrastructure.catalog.store import CatalogStore
from service.localization import LocalizationOverlay

OPTIONS_SECTION_TITLE = "Options"


def _validate_selection(job_type: JobType, selection: Mapping[str, Union[bool, str, None]]) -> None:
    for option_id, value in selection.items():
        opt = job_type.find_option(option_id)
        if opt is None:
            raise InvalidSelection(option_id, f"unknown option '{option_id}' for job type '{job_type.id}'")
        if value is None:
            continue
        if opt.type == "boolean" and not isinstance(value, bool):
            raise InvalidSelection(option_id, f"option '{option_id}' expects true/false, got {value!r}")
        if opt.type == "select" and not isinstance(value, str):
            raise InvalidSelection(option_id, f"option '{option_id}' expects a choice value, got {value!r}")


def compose(
    job_type: JobType,
    selection: Mapping[str, Union[bool, str, None]],
    *,
    options_title: str = OPTIONS_SECTION_TITLE,
) -> Estimate:
    """
    Merge a selection into a (localized) job type.

    - options are applied in catalog order, not selection order
    - price modifiers shift both bounds; negatives are clamped to 0
    - scope additions go to a trailing options section (only when non-empty)
    Raises InvalidSelection for unknown options or undeclared choice values.
    """
    _validate_selection(job_type, selection)

    low = job_type.base_price_range.low
    high = job_type.base_price_range.high

    if job_type.scope_sections is not None:
        sections = [EstimateSection(title=s.title, items=list(s.items)) for s in job_type.scope_sections]
    else:
        sections = [EstimateSection(title=None, items=list(job_type.base_scope))]

    addenda: List[str] = []
    for opt in job_type.options:
        value = selection.get(opt.id)
        if opt.type == "boolean":
            if value is not True:
                continue
            delta = opt.price_modifier or 0
            low += delta
            high += delta
            if opt.scope_addition is not None:
                addenda.append(opt.scope_addition)
        else:
            if value is None:
                continue
            choice = opt.find_choice(value)
            if choice is None:
                raise InvalidSelection(opt.id, f"'{value}' is not a declared choice of option '{opt.id}'")
            low += choice.price_modifier
            high += choice.price_modifier
            if choice.scope_addition is not None:
                addenda.append(choice.scope_addition)

    if addenda:
        sections.append(EstimateSection(title=options_title, items=addenda))

    return Estimate(
        price_range_low=max(low, 0),
        price_range_high=max(high, 0),
        scope_sections=sections,
        warranty=job_type.warranty,
        exclusions=list(job_type.exclusions) if job_type.exclusions is not None else None,
        estimated_days=job_type.estimated_days,
    )


class EstimateService:
    """catalog lookup -> localization -> composition"""

    def __init__(self, catalog: CatalogStore, overlay: LocalizationOverlay):
        self.catalog = catalog
        self.overlay = overlay

    def localized_job_type(self, trade_id: str, job_type_id: str, language: Optional[str] = None) -> JobType:
        jt = self.catalog.get_job_type(trade_id, job_type_id)
        return self.overlay.localize(jt, trade_id, language or self.overlay.source_language)

    def estimate(
        self,
        *,
        trade_id: str,
        job_type_id: str,
        selection: Mapping[str, Union[bool, str, None]],
        language: Optional[str] = None,
    ) -> Estimate:
        lang = language or self.overlay.source_language
        jt = self.localized_job_type(trade_id, job_type_id, lang)
        title = self.overlay.provider.options_section_title(lang, default=OPTIONS_SECTION_TITLE)
        return compose(jt, selection, options_title=title)
