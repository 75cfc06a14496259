from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from indexer.application.dto.events import EventContext
from indexer.application.ports.entity_store_port import EntityStorePort
from indexer.application.ports.interval_data_port import IntervalDataPort
from indexer.application.use_cases.pool_state import PoolState
from indexer.application.use_cases.tick_state_resolver import TickStateResolver
from indexer.domain.services.tvl import detach_pool_tvl, reattach_pool_tvl, refresh_token_tvl_usd
from indexer.domain.services.univ3_math import convert_token_to_decimal


MINT = 1
BURN = -1


@dataclass(frozen=True)
class PositionAmounts:
    amount0: Decimal
    amount1: Decimal
    amount_usd: Decimal


class PositionChangeApplier:
    """Shared Mint/Burn bookkeeping; ``direction`` is MINT or BURN."""

    def __init__(
        self,
        *,
        store: EntityStorePort,
        interval_data: IntervalDataPort,
        resolver: TickStateResolver,
    ):
        self._store = store
        self._interval_data = interval_data
        self._resolver = resolver

    def apply_amounts(
        self,
        *,
        state: PoolState,
        direction: int,
        liquidity: int,
        tick_lower: int,
        tick_upper: int,
        raw_amount0: int,
        raw_amount1: int,
    ) -> PositionAmounts:
        bundle, factory, pool = state.bundle, state.factory, state.pool
        token0, token1 = state.token0, state.token1
        eth_price_usd = bundle.eth_price_usd

        amount0 = convert_token_to_decimal(raw_amount0, token0.decimals)
        amount1 = convert_token_to_decimal(raw_amount1, token1.decimals)
        amount_usd = (
            amount0 * token0.derived_eth * eth_price_usd
            + amount1 * token1.derived_eth * eth_price_usd
        )

        detach_pool_tvl(factory=factory, pool=pool)

        factory.tx_count += 1

        token0.tx_count += 1
        token0.total_value_locked += direction * amount0
        refresh_token_tvl_usd(token=token0, eth_price_usd=eth_price_usd)

        token1.tx_count += 1
        token1.total_value_locked += direction * amount1
        refresh_token_tvl_usd(token=token1, eth_price_usd=eth_price_usd)

        pool.tx_count += 1
        # active liquidity only moves when the position covers the current tick
        if pool.tick is not None and tick_lower <= pool.tick < tick_upper:
            pool.liquidity += direction * liquidity

        pool.total_value_locked_token0 += direction * amount0
        pool.total_value_locked_token1 += direction * amount1

        reattach_pool_tvl(
            factory=factory,
            pool=pool,
            token0=token0,
            token1=token1,
            eth_price_usd=eth_price_usd,
        )
        return PositionAmounts(amount0=amount0, amount1=amount1, amount_usd=amount_usd)

    def apply_ticks(
        self,
        *,
        state: PoolState,
        direction: int,
        liquidity: int,
        tick_lower: int,
        tick_upper: int,
        context: EventContext,
    ) -> None:
        pool = state.pool
        lower = self._resolver.get_or_create_tick(pool=pool, tick_idx=tick_lower, context=context)
        upper = self._resolver.get_or_create_tick(pool=pool, tick_idx=tick_upper, context=context)

        delta = direction * liquidity
        lower.liquidity_gross += delta
        lower.liquidity_net += delta
        upper.liquidity_gross += delta
        upper.liquidity_net -= delta
        self._store.save(lower)
        self._store.save(upper)

    def touch_rollups(self, *, state: PoolState, timestamp: int) -> None:
        eth_price_usd = state.bundle.eth_price_usd
        buckets = (
            self._interval_data.update_uniswap_day_data(factory=state.factory, timestamp=timestamp),
            self._interval_data.update_pool_day_data(pool=state.pool, timestamp=timestamp),
            self._interval_data.update_pool_hour_data(pool=state.pool, timestamp=timestamp),
            self._interval_data.update_pool_five_minute_data(pool=state.pool, timestamp=timestamp),
            self._interval_data.update_token_day_data(
                token=state.token0, eth_price_usd=eth_price_usd, timestamp=timestamp
            ),
            self._interval_data.update_token_day_data(
                token=state.token1, eth_price_usd=eth_price_usd, timestamp=timestamp
            ),
            self._interval_data.update_token_hour_data(
                token=state.token0, eth_price_usd=eth_price_usd, timestamp=timestamp
            ),
            self._interval_data.update_token_hour_data(
                token=state.token1, eth_price_usd=eth_price_usd, timestamp=timestamp
            ),
        )
        for bucket in buckets:
            self._store.save(bucket)

    def resolve_boundaries(
        self,
        *,
        state: PoolState,
        tick_lower: int,
        tick_upper: int,
        context: EventContext,
    ) -> None:
        self._resolver.resolve(state=state, tick_idx=tick_lower, context=context, is_swap=False)
        self._resolver.resolve(state=state, tick_idx=tick_upper, context=context, is_swap=False)

    def save_aggregates(self, state: PoolState) -> None:
        self._store.save(state.token0)
        self._store.save(state.token1)
        self._store.save(state.pool)
        self._store.save(state.factory)
