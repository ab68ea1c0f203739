# tests/infrastructure/test_catalog_store.py

import pytest
from pydantic import ValidationError

from domain.catalog.errors import JobTypeNotFound, NotFoundError, TradeNotFound
from infrastructure.catalog.store import CatalogStore


def test_packaged_catalog_loads(catalog):
    ids = [t.id for t in catalog.list_trades()]
    assert ids == ["bathroom", "kitchen", "roofing", "hvac"]


def test_get_trade_and_job_type(catalog):
    trade = catalog.get_trade("bathroom")
    assert trade.name == "Bathroom Remodel"
    assert [jt.id for jt in trade.job_types][:2] == ["tub-to-shower", "shower-replacement"]

    jt = catalog.get_job_type("bathroom", "tub-to-shower")
    assert jt.base_price_range.low == 8500
    assert [o.id for o in jt.options] == ["wall-system", "niche", "glass-door", "grab-bars"]


def test_lookup_failures(catalog):
    with pytest.raises(TradeNotFound):
        catalog.get_trade("pools")
    with pytest.raises(JobTypeNotFound):
        catalog.get_job_type("bathroom", "sauna")
    with pytest.raises(NotFoundError):
        catalog.get_job_type("pools", "pool")


def test_list_trades_returns_a_copy(catalog):
    trades = catalog.list_trades()
    trades.clear()
    assert catalog.list_trades()


def test_load_from_path(tmp_path):
    p = tmp_path / "catalog.yaml"
    p.write_text(
        "trades:\n"
        "  - id: fence\n"
        "    name: Fence\n"
        "    job_types:\n"
        "      - id: fence\n"
        "        name: Fence Installation\n"
        "        base_scope: [Set posts.]\n"
        "        base_price_range: {low: 3000, high: 8000}\n",
        encoding="utf-8",
    )
    store = CatalogStore.load(p)
    assert store.get_job_type("fence", "fence").name == "Fence Installation"


def test_invalid_catalog_fails_fast():
    with pytest.raises(ValidationError):
        CatalogStore.from_mapping(
            {"trades": [{"id": "x", "name": "X", "job_types": [{"id": "j", "name": "J", "base_scope": [], "base_price_range": {"low": 9, "high": 1}}]}]}
        )


def test_duplicate_trade_ids_rejected():
    with pytest.raises(ValueError):
        CatalogStore.from_mapping({"trades": [{"id": "x", "name": "X"}, {"id": "x", "name": "X2"}]})
