from __future__ import annotations

from decimal import Decimal

import pytest
from sqlalchemy import create_engine

from indexer.domain.entities.pool import Pool
from indexer.domain.entities.tick import Tick, tick_id
from indexer.domain.entities.token import Token
from indexer.infrastructure.db.mappers.entity_mapper import (
    kind_of,
    map_payload_to_record,
    map_record_to_payload,
)
from indexer.infrastructure.db.repositories.sql_entity_store import SqlEntityStore


@pytest.fixture
def sql_store() -> SqlEntityStore:
    engine = create_engine("sqlite://")
    return SqlEntityStore(engine, create_schema=True)


def _pool() -> Pool:
    return Pool(
        id="0xpool",
        token0="0xa",
        token1="0xb",
        fee_tier=3000,
        tick=-120,
        sqrt_price=2**160 - 1,
        fee_growth_global0_x128=2**255 + 17,
        token0_price=Decimal("1234.567890123456789012345678"),
        total_value_locked_usd=Decimal("1E-18"),
    )


def test_mapper_keeps_big_integers_and_decimals_exact():
    pool = _pool()
    restored = map_payload_to_record(kind_of(pool), map_record_to_payload(pool))
    assert restored == pool


def test_mapper_restores_list_fields():
    token = Token(id="0xa", symbol="A", name="Token A", decimals=18, whitelist_pools=["0xp1", "0xp2"])
    assert map_payload_to_record("Token", map_record_to_payload(token)) == token


def test_mapper_rejects_unknown_kinds():
    with pytest.raises(ValueError):
        kind_of(object())


def test_committed_records_survive_a_new_unit_of_work(sql_store):
    sql_store.save(_pool())
    sql_store.commit()

    loaded = sql_store.load(Pool, "0xpool")

    assert loaded == _pool()
    assert sql_store.load(Pool, "0xpool") is loaded


def test_commit_overwrites_existing_rows(sql_store):
    sql_store.save(_pool())
    sql_store.commit()

    pool = sql_store.load(Pool, "0xpool")
    pool.tx_count = 5
    sql_store.save(pool)
    sql_store.commit()

    assert sql_store.load(Pool, "0xpool").tx_count == 5


def test_rollback_discards_staged_records(sql_store):
    tick = Tick(id=tick_id("0xpool", 60), pool_address="0xpool", tick_idx=60, liquidity_net=-10)
    sql_store.save(tick)
    sql_store.rollback()

    assert sql_store.load(Tick, tick.id) is None


def test_kinds_do_not_collide_on_shared_ids(sql_store):
    sql_store.save(Token(id="0xsame", symbol="S", name="Same", decimals=6))
    sql_store.save(Pool(id="0xsame", token0="0xa", token1="0xb", fee_tier=500))
    sql_store.commit()

    assert sql_store.load(Token, "0xsame").symbol == "S"
    assert sql_store.load(Pool, "0xsame").fee_tier == 500


def test_mapper_ignores_fields_a_record_no_longer_declares():
    payload = map_record_to_payload(Token(id="0xa", symbol="A", name="Token A", decimals=6))
    legacy = payload.replace('"decimals": 6', '"decimals": 6, "pool_count": 3, "total_supply": 10')

    token = map_payload_to_record("Token", legacy)

    assert token == Token(id="0xa", symbol="A", name="Token A", decimals=6)
    assert not hasattr(token, "pool_count")
