# src/infrastructure/catalog/store.py
import logging
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import yaml

from domain.catalog.errors import JobTypeNotFound, TradeNotFound
from domain.catalog.models import JobType, Trade

LOGGER = logging.getLogger("catalog.store")

_PACKAGE = "infrastructure.catalog.data"
_CATALOG_FILE = "catalog.yaml"


class CatalogStore:
    """
    Read-only Trade -> JobType -> JobOption catalog, loaded once per process.
    """

    def __init__(self, trades: Iterable[Trade]):
        self._trades: List[Trade] = list(trades)
        self._by_id: Dict[str, Trade] = {}
        for t in self._trades:
            if t.id in self._by_id:
                raise ValueError(f"duplicate trade id in catalog: {t.id}")
            self._by_id[t.id] = t

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "CatalogStore":
        raw = data.get("trades") or []
        return cls(Trade.model_validate(t) for t in raw)

    @classmethod
    def load(cls, path: Optional[str | Path] = None) -> "CatalogStore":
        if path is not None:
            text = Path(path).read_text(encoding="utf-8")
            source = str(path)
        else:
            text = (resources.files(_PACKAGE) / _CATALOG_FILE).read_text(encoding="utf-8")
            source = f"{_PACKAGE}/{_CATALOG_FILE}"
        data = yaml.safe_load(text) or {}
        if not isinstance(data, dict):
            raise ValueError(f"catalog must be a mapping: {source}")
        store = cls.from_mapping(data)
        LOGGER.info("Loaded catalog from %s (%d trades)", source, len(store._trades))
        return store

    def list_trades(self) -> List[Trade]:
        return list(self._trades)

    def get_trade(self, trade_id: str) -> Trade:
        trade = self._by_id.get(trade_id)
        if trade is None:
            raise TradeNotFound(trade_id)
        return trade

    def get_job_type(self, trade_id: str, job_type_id: str) -> JobType:
        jt = self.get_trade(trade_id).find_job_type(job_type_id)
        if jt is None:
            raise JobTypeNotFound(trade_id, job_type_id)
        return jt
