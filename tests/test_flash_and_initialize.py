from __future__ import annotations

import dataclasses
from decimal import Decimal

from indexer.application.dto.events import FlashEvent, InitializeEvent
from indexer.domain.entities.interval_data import PoolDayData, PoolFiveMinuteData, PoolHourData
from indexer.domain.entities.pool import Pool
from indexer.domain.entities.protocol import Bundle, Factory
from indexer.domain.entities.token import Token


def test_flash_only_refreshes_fee_growth_globals(harness):
    harness.pool_contract.fee_growth_globals = (123 * 2**128, 456)
    pool_before = harness.store.all(Pool)[0]
    tokens_before = sorted(harness.store.all(Token), key=lambda token: token.id)
    factory_before = harness.store.all(Factory)[0]

    assert harness.dispatcher.dispatch(
        FlashEvent(
            context=harness.context(),
            sender="0xborrower",
            recipient="0xborrower",
            amount0=10**6,
            amount1=10**18,
            paid0=3000,
            paid1=3 * 10**15,
        )
    )

    pool_after = harness.store.all(Pool)[0]
    assert pool_after == dataclasses.replace(
        pool_before,
        fee_growth_global0_x128=123 * 2**128,
        fee_growth_global1_x128=456,
    )
    assert sorted(harness.store.all(Token), key=lambda token: token.id) == tokens_before
    assert harness.store.all(Factory)[0] == factory_before
    assert harness.pool_contract.global_calls == 1


def test_initialize_sets_price_state_and_reference_prices(harness):
    harness.reseed(tick=None)
    harness.pricing.eth_price_usd = Decimal("2500")
    harness.pricing.eth_per_token = {harness.token0_id: Decimal("0.0004")}
    context = harness.context()

    assert harness.dispatcher.dispatch(InitializeEvent(context=context, sqrt_price_x96=2**96, tick=0))

    store = harness.store
    pool = store.load(Pool, harness.pool_id)
    assert (pool.tick, pool.sqrt_price) == (0, 2**96)
    assert store.load(Bundle, "1").eth_price_usd == Decimal("2500")
    assert store.load(Token, harness.token0_id).derived_eth == Decimal("0.0004")
    assert store.load(Token, harness.token1_id).derived_eth == Decimal("1")

    timestamp = context.block_timestamp
    assert store.load(PoolDayData, f"{harness.pool_id}-{timestamp // 86400}").tx_count == 1
    assert store.load(PoolHourData, f"{harness.pool_id}-{timestamp // 3600}") is not None
    assert store.load(PoolFiveMinuteData, f"{harness.pool_id}-{timestamp // 300}") is not None


def test_initialize_does_not_touch_factory(harness):
    harness.reseed(tick=None)
    factory_before = harness.store.all(Factory)[0]

    harness.dispatcher.dispatch(InitializeEvent(context=harness.context(), sqrt_price_x96=2**96, tick=-10))

    assert harness.store.all(Factory)[0] == factory_before
