# src/infrastructure/db/seed/registry.py
from importlib import resources
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional

import yaml

from infrastructure.db.seed.schema import DefaultTemplate

_PACKAGE = "infrastructure.db.seed.data"
_TEMPLATES_FILE = "default_templates.yaml"


class TemplateRegistry:
    """
    Canonical default templates keyed flatly by job_type_id, in declared order.
    """

    def __init__(self, templates: Iterable[DefaultTemplate]):
        self._templates: Dict[str, DefaultTemplate] = {}
        for t in templates:
            if t.job_type_id in self._templates:
                raise ValueError(f"duplicate default template: {t.job_type_id}")
            self._templates[t.job_type_id] = t

    @classmethod
    def load(cls, path: Optional[str | Path] = None) -> "TemplateRegistry":
        if path is not None:
            text = Path(path).read_text(encoding="utf-8")
        else:
            text = (resources.files(_PACKAGE) / _TEMPLATES_FILE).read_text(encoding="utf-8")
        raw = yaml.safe_load(text) or {}
        return cls(DefaultTemplate.model_validate(t) for t in raw.get("templates") or [])

    def __iter__(self) -> Iterator[DefaultTemplate]:
        return iter(self._templates.values())

    def __len__(self) -> int:
        return len(self._templates)

    def get(self, job_type_id: str) -> Optional[DefaultTemplate]:
        return self._templates.get(job_type_id)

    def job_type_ids(self) -> List[str]:
        return list(self._templates)

    def is_valid_job_type_id(self, job_type_id: str) -> bool:
        return job_type_id in self._templates
