from __future__ import annotations

import logging
from decimal import Decimal

from indexer.application.dto.events import EventContext
from indexer.application.ports.entity_store_port import EntityStorePort
from indexer.application.ports.interval_data_port import IntervalDataPort
from indexer.application.ports.pool_contract_port import PoolContractPort
from indexer.application.use_cases.pool_state import PoolState
from indexer.domain.entities.interval_data import TickIntervalData
from indexer.domain.entities.pool import Pool
from indexer.domain.entities.tick import Tick, tick_id
from indexer.domain.services.fee_growth import (
    FeeGrowthPair,
    fee_growth_above,
    fee_growth_below,
    fee_growth_inside,
    fees_from_fee_growth,
)
from indexer.domain.services.rollups import refresh_tick_bucket
from indexer.domain.services.univ3_math import (
    MIN_TICK,
    fee_fraction,
    fee_tier_to_tick_spacing,
    tick_prices,
)


logger = logging.getLogger(__name__)


class TickStateResolver:
    """Keeps per-tick fee and volume figures in line with the pool accumulators.

    Swap mode refreshes the tick's fee-growth-outside from the pool contract
    before recomputing; non-swap mode (Mint/Burn) recomputes from whatever
    fee-growth-outside the record already holds.
    """

    def __init__(
        self,
        *,
        store: EntityStorePort,
        pool_contract: PoolContractPort,
        interval_data: IntervalDataPort,
    ):
        self._store = store
        self._pool_contract = pool_contract
        self._interval_data = interval_data

    def get_or_create_tick(self, *, pool: Pool, tick_idx: int, context: EventContext) -> Tick:
        lookup_id = tick_id(pool.id, tick_idx)
        tick = self._store.load(Tick, lookup_id)
        if tick is not None:
            return tick

        logger.info("tick_state_resolver: create_tick pool=%s tick_idx=%s", pool.id, tick_idx)
        price0, price1 = tick_prices(tick_idx)
        tick = Tick(
            id=lookup_id,
            pool_address=pool.id,
            tick_idx=tick_idx,
            created_at_timestamp=context.block_timestamp,
            created_at_block_number=context.block_number,
            price0=price0,
            price1=price1,
        )
        self._store.save(tick)
        return tick

    def resolve(
        self,
        *,
        state: PoolState,
        tick_idx: int,
        context: EventContext,
        is_swap: bool,
    ) -> Tick:
        pool = state.pool
        tick = self.get_or_create_tick(pool=pool, tick_idx=tick_idx, context=context)
        # buckets opened now snapshot the cumulative values before this update
        buckets = self._open_rollups(tick=tick, timestamp=context.block_timestamp)

        if is_swap:
            outside0, outside1 = self._pool_contract.get_tick_fee_growth_outside(
                pool_address=pool.id,
                tick_idx=tick_idx,
                block_number=context.block_number,
            )
            tick.fee_growth_outside0_x128 = outside0
            tick.fee_growth_outside1_x128 = outside1

        fraction = fee_fraction(pool.fee_tier)
        tick_spacing = fee_tier_to_tick_spacing(pool.fee_tier)
        if fraction > 0 and tick_spacing is not None:
            previous = self._find_previous_tick(pool=pool, tick_idx=tick_idx, tick_spacing=tick_spacing)
            self._update_fee_metrics(state=state, tick=tick, previous=previous, fraction=fraction)
        else:
            logger.warning(
                "tick_state_resolver: skip_fee_derivation pool=%s fee_tier=%s tick_idx=%s",
                pool.id,
                pool.fee_tier,
                tick_idx,
            )

        self._store.save(tick)
        for bucket in buckets:
            refresh_tick_bucket(bucket, tick)
            self._store.save(bucket)
        return tick

    def _find_previous_tick(self, *, pool: Pool, tick_idx: int, tick_spacing: int) -> Tick | None:
        candidate = tick_idx - tick_spacing
        steps = 1
        while candidate >= MIN_TICK:
            previous = self._store.load(Tick, tick_id(pool.id, candidate))
            if previous is not None:
                if steps > 1:
                    logger.info(
                        "tick_state_resolver: previous_tick_gap pool=%s tick_idx=%s previous=%s steps=%s",
                        pool.id,
                        tick_idx,
                        candidate,
                        steps,
                    )
                return previous
            candidate -= tick_spacing
            steps += 1

        logger.warning(
            "tick_state_resolver: previous_tick_not_found pool=%s tick_idx=%s",
            pool.id,
            tick_idx,
        )
        return None

    def _update_fee_metrics(
        self,
        *,
        state: PoolState,
        tick: Tick,
        previous: Tick | None,
        fraction: Decimal,
    ) -> None:
        pool = state.pool
        global_growth = FeeGrowthPair(
            token0=pool.fee_growth_global0_x128,
            token1=pool.fee_growth_global1_x128,
        )
        below = fee_growth_below(
            fee_growth_global=global_growth,
            previous_outside=(
                FeeGrowthPair(
                    token0=previous.fee_growth_outside0_x128,
                    token1=previous.fee_growth_outside1_x128,
                )
                if previous is not None
                else None
            ),
            previous_tick_idx=previous.tick_idx if previous is not None else None,
            tick_current=pool.tick,
        )
        above = fee_growth_above(
            fee_growth_global=global_growth,
            outside=FeeGrowthPair(
                token0=tick.fee_growth_outside0_x128,
                token1=tick.fee_growth_outside1_x128,
            ),
            tick_idx=tick.tick_idx,
            tick_current=pool.tick,
        )
        inside = fee_growth_inside(fee_growth_global=global_growth, below=below, above=above)

        tick.fees_token0 = fees_from_fee_growth(fee_growth=inside.token0, liquidity=tick.liquidity_gross)
        tick.fees_token1 = fees_from_fee_growth(fee_growth=inside.token1, liquidity=tick.liquidity_gross)
        tick.volume_token0 = tick.fees_token0 / fraction
        tick.volume_token1 = tick.fees_token1 / fraction

        eth_price_usd = state.bundle.eth_price_usd
        fees_token0_usd = state.token0.derived_eth * eth_price_usd * tick.fees_token0
        fees_token1_usd = state.token1.derived_eth * eth_price_usd * tick.fees_token1
        tick.fees_usd = fees_token0_usd + fees_token1_usd
        tick.volume_usd = tick.fees_usd / fraction

    def _open_rollups(self, *, tick: Tick, timestamp: int) -> tuple[TickIntervalData, ...]:
        return (
            self._interval_data.update_tick_day_data(tick=tick, timestamp=timestamp),
            self._interval_data.update_tick_hour_data(tick=tick, timestamp=timestamp),
            self._interval_data.update_tick_five_minute_data(tick=tick, timestamp=timestamp),
        )
