# src/infrastructure/localization/provider.py
import logging
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from domain.localization.models import JobTypeTranslation, LanguagePack

LOGGER = logging.getLogger("localization.provider")

_PACKAGE = "infrastructure.localization.data"
YAML_EXTS = {".yml", ".yaml"}


class TranslationProvider:
    """
    Immutable view over translation bundles, built once from a declarative
    {language: LanguagePack} mapping. Lookups never raise; a gap is None.
    """

    def __init__(self, packs: Mapping[str, LanguagePack]):
        self._packs: Dict[str, LanguagePack] = {lang.lower(): p for lang, p in packs.items()}

    @classmethod
    def from_mapping(cls, data: Mapping[str, Mapping[str, Any]]) -> "TranslationProvider":
        packs = {}
        for lang, raw in data.items():
            payload = dict(raw)
            payload.setdefault("language", lang)
            packs[lang] = LanguagePack.model_validate(payload)
        return cls(packs)

    @classmethod
    def load(cls, root: Optional[str | Path] = None) -> "TranslationProvider":
        raws: List[Dict[str, Any]] = []
        if root is not None:
            root_path = Path(root)
            if not root_path.exists():
                LOGGER.warning("Translations root does not exist: %s", root_path)
                return cls({})
            for p in sorted(root_path.iterdir()):
                if p.is_file() and p.suffix.lower() in YAML_EXTS:
                    raws.append(_load_yaml(p.read_text(encoding="utf-8"), str(p)))
        else:
            entries = sorted(resources.files(_PACKAGE).iterdir(), key=lambda e: e.name)
            for entry in entries:
                if entry.is_file() and Path(entry.name).suffix.lower() in YAML_EXTS:
                    raws.append(_load_yaml(entry.read_text(encoding="utf-8"), entry.name))

        packs: Dict[str, LanguagePack] = {}
        for raw in raws:
            pack = LanguagePack.model_validate(raw)
            if pack.language.lower() in packs:
                raise ValueError(f"duplicate translation pack for language: {pack.language}")
            packs[pack.language.lower()] = pack
        LOGGER.info("Loaded translations: %s", ", ".join(sorted(packs)) or "(none)")
        return cls(packs)

    def languages(self) -> List[str]:
        return sorted(self._packs)

    def has_trade(self, language: str, trade_id: str) -> bool:
        pack = self._packs.get((language or "").lower())
        return bool(pack and trade_id in pack.trades)

    def get(self, language: str, trade_id: str, job_type_id: str) -> Optional[JobTypeTranslation]:
        pack = self._packs.get((language or "").lower())
        if pack is None:
            return None
        return (pack.trades.get(trade_id) or {}).get(job_type_id)

    def options_section_title(self, language: str, default: str = "Options") -> str:
        pack = self._packs.get((language or "").lower())
        if pack is None or not pack.options_section_title:
            return default
        return pack.options_section_title


def _load_yaml(text: str, source: str) -> Dict[str, Any]:
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"YAML must be a mapping: {source}")
    return data
