# src/service/localization.py
import logging
from typing import List, Optional, Tuple

from domain.catalog.models import Choice, JobOption, JobType, ScopeSection
from domain.localization.models import JobTypeTranslation, OptionTranslation
from infrastructure.localization.provider import TranslationProvider

LOGGER = logging.getLogger("localization.overlay")


class LocalizationOverlay:
    """
    Per-field merge of translated content onto a structural JobType.

    Structural fields (ids, option type, price modifiers, choice values) are
    never touched. Anything the translation leaves out keeps the source text.
    The result keeps base_scope equal to the flattened scope_sections.
    """

    def __init__(self, provider: TranslationProvider, source_language: str = "en"):
        self.provider = provider
        self.source_language = source_language.lower()

    def localize(self, job_type: JobType, trade_id: str, language: str) -> JobType:
        if not language or language.lower() == self.source_language:
            return job_type
        if not self.provider.has_trade(language, trade_id):
            return job_type
        tr = self.provider.get(language, trade_id, job_type.id)
        if tr is None:
            return job_type

        options: List[JobOption] = []
        for opt in job_type.options:
            opt_tr = tr.options.get(opt.id)
            options.append(opt if opt_tr is None else _overlay_option(opt, opt_tr))

        base_scope, scope_sections = _overlay_scope(job_type, tr, language)
        return job_type.model_copy(
            update={
                "name": tr.name if tr.name is not None else job_type.name,
                "base_scope": base_scope,
                "scope_sections": scope_sections,
                "warranty": tr.warranty if tr.warranty is not None else job_type.warranty,
                "exclusions": list(tr.exclusions) if tr.exclusions is not None else job_type.exclusions,
                "options": options,
            }
        )


def _flatten(sections: List[ScopeSection]) -> List[str]:
    return [item for s in sections for item in s.items]


def _overlay_scope(
    job_type: JobType, tr: JobTypeTranslation, language: str
) -> Tuple[List[str], Optional[List[ScopeSection]]]:
    """
    base_scope and scope_sections are overlaid as one unit:
      sections translated   -> base_scope is their flattening
      only lines translated -> lines are split back into the source sections
                               by item count (source titles kept); on a count
                               mismatch the source scope is kept whole
    """
    if tr.scope_sections is not None:
        sections = list(tr.scope_sections)
        return _flatten(sections), sections

    if tr.base_scope is None:
        return job_type.base_scope, job_type.scope_sections

    lines = list(tr.base_scope)
    if job_type.scope_sections is None:
        return lines, None

    if len(lines) != len(job_type.base_scope):
        LOGGER.warning(
            "Translated base_scope of %s/%s has %d lines, source has %d; keeping source scope",
            language,
            job_type.id,
            len(lines),
            len(job_type.base_scope),
        )
        return job_type.base_scope, job_type.scope_sections

    sections: List[ScopeSection] = []
    pos = 0
    for s in job_type.scope_sections:
        n = len(s.items)
        sections.append(ScopeSection(title=s.title, items=lines[pos : pos + n]))
        pos += n
    return lines, sections


def _overlay_option(opt: JobOption, tr: OptionTranslation) -> JobOption:
    update = {
        "label": tr.label,
        "scope_addition": tr.scope_addition if tr.scope_addition is not None else opt.scope_addition,
    }
    if opt.choices is not None:
        choices: List[Choice] = []
        for c in opt.choices:
            c_tr = tr.choices.get(c.value)
            if c_tr is None:
                choices.append(c)
                continue
            choices.append(
                c.model_copy(
                    update={
                        "label": c_tr.label,
                        "scope_addition": (
                            c_tr.scope_addition if c_tr.scope_addition is not None else c.scope_addition
                        ),
                    }
                )
            )
        update["choices"] = choices
    return opt.model_copy(update=update)
