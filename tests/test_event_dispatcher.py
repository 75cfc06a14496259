from __future__ import annotations

from decimal import Decimal

import pytest

from conftest import IndexerHarness, make_settings
from indexer.application.dto.events import FlashEvent, MintEvent, SwapEvent
from indexer.domain.entities.pool import Pool
from indexer.domain.entities.protocol import Bundle, Factory
from indexer.domain.entities.transactions import Mint, Transaction
from indexer.infrastructure.clients.pool_contract_client import ContractCallError


class FailingPoolContract:
    def get_fee_growth_globals(self, *, pool_address: str, block_number: int | None = None) -> tuple[int, int]:
        _ = (pool_address, block_number)
        raise ContractCallError("RPC request failed after retries: timeout")

    def get_tick_fee_growth_outside(
        self,
        *,
        pool_address: str,
        tick_idx: int,
        block_number: int | None = None,
    ) -> tuple[int, int]:
        _ = (pool_address, tick_idx, block_number)
        raise ContractCallError("RPC request failed after retries: timeout")


class ReplayedFlashEvent(FlashEvent):
    pass


def _mint_event(context) -> MintEvent:
    return MintEvent(
        context=context,
        sender=None,
        owner="0xlp",
        tick_lower=-60,
        tick_upper=60,
        amount=1000,
        amount0=1_000_000,
        amount1=10**15,
    )


def test_event_for_unknown_pool_is_dropped(harness, caplog):
    context = harness.context(pool_address="0xmissing")

    assert harness.dispatcher.dispatch(_mint_event(context)) is False

    assert harness.store.count(Mint) == 0
    assert harness.store.count(Transaction) == 0
    assert harness.store.all(Factory)[0].tx_count == 0
    assert "dropped event=MintEvent pool=0xmissing" in caplog.text


def test_missing_bundle_drops_event_before_any_write(store, pool_contract, pricing):
    store.save(Factory(id="0xfactory"))
    store.save(Pool(id="0xpool", token0="0xtoken0", token1="0xtoken1", fee_tier=3000, tick=0))
    store.commit()
    harness = IndexerHarness(store=store, pool_contract=pool_contract, pricing=pricing, settings=make_settings())

    assert harness.dispatcher.dispatch(_mint_event(harness.context())) is False

    assert store.count(Bundle) == 0
    assert store.all(Pool)[0].tx_count == 0


def test_failure_mid_handler_discards_partial_writes(harness):
    harness.pool_contract = FailingPoolContract()
    harness.reconfigure()
    swap = SwapEvent(
        context=harness.context(),
        sender="0xrouter",
        recipient="0xtrader",
        amount0=10**6,
        amount1=-(10**14),
        sqrt_price_x96=2**96,
        liquidity=0,
        tick=10,
    )

    with pytest.raises(ContractCallError):
        harness.dispatcher.dispatch(swap)

    pool = harness.store.all(Pool)[0]
    assert pool.tx_count == 0
    assert pool.tick == 0
    assert harness.store.all(Factory)[0].total_volume_usd == Decimal("0")


def test_unsupported_event_type_is_dropped(harness):
    event = ReplayedFlashEvent(
        context=harness.context(),
        sender="0xborrower",
        recipient="0xborrower",
        amount0=0,
        amount1=0,
        paid0=0,
        paid1=0,
    )

    assert harness.dispatcher.dispatch(event) is False
    assert harness.pool_contract.global_calls == 0


def test_dispatch_all_counts_applied_events(harness):
    events = [
        _mint_event(harness.context()),
        _mint_event(harness.context(pool_address="0xmissing")),
        _mint_event(harness.context()),
    ]

    assert harness.dispatcher.dispatch_all(events) == 2
    assert harness.store.count(Mint) == 2
    assert harness.store.all(Pool)[0].liquidity == 2000
