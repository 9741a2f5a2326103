"""
Tests unitarios para UpsertLoader.
"""
import pytest

from data_factory.application.services.loader import UpsertLoader
from data_factory.domain.entities import TargetRecord


def _rows(*ids):
    return [
        TargetRecord(id=i, county_name=f"C-{i}", parcel_id=None, updated_at="2025-12-16T10:15:00.000Z")
        for i in ids
    ]


@pytest.mark.asyncio
async def test_empty_batch_is_noop(target_store):
    outcome = await UpsertLoader(target_store).load([])

    assert outcome.success is True
    assert outcome.rows_affected == 0
    assert target_store.calls == []


@pytest.mark.asyncio
async def test_single_upsert_call_with_conflict_key(target_store):
    outcome = await UpsertLoader(target_store).load(_rows("a", "b", "c"))

    assert outcome.success is True
    assert outcome.rows_affected == 3
    assert len(target_store.calls) == 1
    call = target_store.calls[0]
    assert call["table"] == "dev_properties"
    assert call["on_conflict"] == "id"
    assert [r["id"] for r in call["rows"]] == ["a", "b", "c"]


@pytest.mark.asyncio
async def test_custom_table_and_key(target_store):
    loader = UpsertLoader(target_store, table="analytics_props", conflict_key="id")

    await loader.load(_rows("a"))

    assert target_store.calls[0]["table"] == "analytics_props"


@pytest.mark.asyncio
async def test_load_twice_is_idempotent(target_store):
    loader = UpsertLoader(target_store)
    batch = _rows("a", "b")

    await loader.load(batch)
    after_first = {k: dict(v) for k, v in target_store.tables["dev_properties"].items()}
    await loader.load(batch)

    assert target_store.tables["dev_properties"] == after_first


@pytest.mark.asyncio
async def test_target_error_becomes_failed_outcome(target_factory):
    target = target_factory(error_message="constraint violation")

    outcome = await UpsertLoader(target).load(_rows("a"))

    assert outcome.success is False
    assert outcome.error == "constraint violation"
    assert outcome.rows_affected == 0
