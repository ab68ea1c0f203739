# tests/conftest.py
from typing import Dict, List, Optional, Set

import pytest

from domain.catalog.errors import PersistenceError
from infrastructure.catalog.store import CatalogStore
from infrastructure.db.seed.schema import TemplateRow
from infrastructure.localization.provider import TranslationProvider
from service.localization import LocalizationOverlay


class InMemoryTemplateStore:
    """TemplateStore + the repository's API surface, backed by a list."""

    def __init__(self, rows: Optional[List[TemplateRow]] = None, fail_on: Optional[Set[str]] = None):
        self.rows: List[TemplateRow] = list(rows or [])
        self.fail_on: Set[str] = set(fail_on or ())
        # job types another writer inserts between our select and insert
        self.raced: Set[str] = set()
        self.calls: List[tuple] = []

    def _check(self, op: str, job_type_id: str) -> None:
        if job_type_id in self.fail_on:
            raise PersistenceError(f"{op} failed for {job_type_id}")

    def by_job_type(self, job_type_id: str) -> Optional[TemplateRow]:
        for r in self.rows:
            if r.job_type_id == job_type_id and r.is_default:
                return r
        return None

    async def select_by_job_type_id(self, job_type_id: str) -> Optional[TemplateRow]:
        self.calls.append(("select", job_type_id))
        self._check("select", job_type_id)
        return self.by_job_type(job_type_id)

    async def insert(self, row: TemplateRow) -> bool:
        self.calls.append(("insert", row.job_type_id))
        self._check("insert", row.job_type_id)
        if row.job_type_id in self.raced:
            # the other writer's row wins the partial unique index
            self.rows.append(row.model_copy(update={"id": len(self.rows) + 1, "usage_count": 1}))
            return False
        self.rows.append(row.model_copy(update={"id": len(self.rows) + 1}))
        return True

    async def update_activation(self, job_type_id: str, is_active: bool) -> None:
        self.calls.append(("update_activation", job_type_id))
        self._check("update_activation", job_type_id)
        self.rows = [
            r.model_copy(update={"is_active": is_active}) if (r.job_type_id == job_type_id and r.is_default) else r
            for r in self.rows
        ]

    async def list_visible(self, *, user_id: Optional[str] = None, trade_id: Optional[str] = None) -> List[TemplateRow]:
        out = [
            r
            for r in self.rows
            if r.is_active
            and (r.created_by is None or (user_id is not None and r.created_by == user_id))
            and (trade_id is None or r.trade_id == trade_id)
        ]
        return sorted(out, key=lambda r: (-r.usage_count, r.trade_name, r.job_type_name))

    async def get_by_id(self, template_id: int) -> Optional[TemplateRow]:
        for r in self.rows:
            if r.id == template_id:
                return r
        return None

    async def increment_usage(self, template_id: int) -> bool:
        for i, r in enumerate(self.rows):
            if r.id == template_id:
                self.rows[i] = r.model_copy(update={"usage_count": r.usage_count + 1})
                return True
        return False


@pytest.fixture(scope="session")
def catalog() -> CatalogStore:
    return CatalogStore.load()


@pytest.fixture(scope="session")
def provider() -> TranslationProvider:
    return TranslationProvider.load()


@pytest.fixture
def overlay(provider) -> LocalizationOverlay:
    return LocalizationOverlay(provider, source_language="en")


@pytest.fixture
def tub_to_shower(catalog):
    return catalog.get_job_type("bathroom", "tub-to-shower")


@pytest.fixture
def template_store() -> InMemoryTemplateStore:
    return InMemoryTemplateStore()


def make_row(job_type_id: str, **overrides) -> TemplateRow:
    values: Dict = dict(
        trade_id="bathroom",
        trade_name="Bathroom",
        job_type_id=job_type_id,
        job_type_name=job_type_id.replace("-", " ").title(),
        base_scope=["Do the work."],
        base_price_low=100,
        base_price_high=200,
    )
    values.update(overrides)
    return TemplateRow(**values)


@pytest.fixture
def row_factory():
    return make_row
