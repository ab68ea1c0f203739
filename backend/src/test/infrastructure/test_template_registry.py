# tests/infrastructure/test_template_registry.py

import pytest
from pydantic import ValidationError

from infrastructure.db.seed.registry import TemplateRegistry
from infrastructure.db.seed.schema import DefaultTemplate, TemplateRow


def test_packaged_registry_order_and_lookup():
    reg = TemplateRegistry.load()

    ids = reg.job_type_ids()
    assert ids[:3] == ["bathroom-remodel", "shower-replacement", "tub-to-shower"]
    assert len(reg) == len(ids)
    assert [t.job_type_id for t in reg] == ids

    tpl = reg.get("tub-to-shower")
    assert (tpl.base_price_low, tpl.base_price_high) == (8500, 12000)
    assert reg.is_valid_job_type_id("fence")
    assert not reg.is_valid_job_type_id("sauna")
    assert reg.get("sauna") is None


def test_duplicate_job_type_rejected():
    t = DefaultTemplate(
        trade_id="a", trade_name="A", job_type_id="j", job_type_name="J", base_scope=[], base_price_low=1, base_price_high=2
    )
    with pytest.raises(ValueError):
        TemplateRegistry([t, t])


def test_inverted_prices_rejected():
    with pytest.raises(ValidationError):
        DefaultTemplate(
            trade_id="a", trade_name="A", job_type_id="j", job_type_name="J", base_scope=[], base_price_low=5, base_price_high=2
        )


def test_row_from_default_is_system_owned():
    tpl = TemplateRegistry.load().get("roofing")
    row = TemplateRow.from_default(tpl)

    assert row.is_default is True
    assert row.is_active is True
    assert row.created_by is None
    assert row.usage_count == 0
    assert row.base_scope == tpl.base_scope
