from __future__ import annotations

import logging
from decimal import Decimal

from indexer.application.dto.events import SwapEvent
from indexer.application.ports.entity_store_port import EntityStorePort
from indexer.application.ports.interval_data_port import IntervalDataPort
from indexer.application.ports.pool_contract_port import PoolContractPort
from indexer.application.ports.pricing_port import PricingPort
from indexer.application.use_cases.pool_state import PoolState, load_pool_state, load_transaction
from indexer.application.use_cases.tick_crossing_iterator import TickCrossingIterator
from indexer.domain.entities.transactions import Swap, event_record_id
from indexer.domain.services.rollups import (
    add_pool_swap_volume,
    add_protocol_swap_volume,
    add_token_swap_volume,
)
from indexer.domain.services.tvl import detach_pool_tvl, reattach_pool_tvl, refresh_token_tvl_usd
from indexer.domain.services.univ3_math import (
    convert_token_to_decimal,
    fee_fraction,
    safe_div,
    sqrt_price_x96_to_token_prices,
)


logger = logging.getLogger(__name__)

TWO = Decimal("2")


class HandleSwapUseCase:
    def __init__(
        self,
        *,
        store: EntityStorePort,
        pricing: PricingPort,
        pool_contract: PoolContractPort,
        interval_data: IntervalDataPort,
        tick_crossing: TickCrossingIterator,
        factory_address: str,
        excluded_pools: tuple[str, ...] = (),
    ):
        self._store = store
        self._pricing = pricing
        self._pool_contract = pool_contract
        self._interval_data = interval_data
        self._tick_crossing = tick_crossing
        self._factory_address = factory_address
        self._excluded_pools = frozenset(address.lower() for address in excluded_pools)

    def execute(self, event: SwapEvent) -> Swap | None:
        context = event.context
        if context.pool_address.lower() in self._excluded_pools:
            logger.warning("handle_swap: excluded_pool pool=%s tx=%s", context.pool_address, context.transaction_hash)
            return None

        state = load_pool_state(
            self._store,
            pool_address=context.pool_address,
            factory_address=self._factory_address,
        )
        bundle, factory, pool = state.bundle, state.factory, state.pool
        token0, token1 = state.token0, state.token1
        old_tick = pool.tick

        # signed token deltas from the pool's point of view
        amount0 = convert_token_to_decimal(event.amount0, token0.decimals)
        amount1 = convert_token_to_decimal(event.amount1, token1.decimals)
        amount0_abs = abs(amount0)
        amount1_abs = abs(amount1)

        amount0_usd = amount0_abs * token0.derived_eth * bundle.eth_price_usd
        amount1_usd = amount1_abs * token1.derived_eth * bundle.eth_price_usd

        # both legs of a swap are priced, so halve to count the trade once
        tracked_usd = (
            self._pricing.get_tracked_amount_usd(
                amount0=amount0_abs,
                token0=token0,
                amount1=amount1_abs,
                token1=token1,
                eth_price_usd=bundle.eth_price_usd,
            )
            / TWO
        )
        tracked_eth = safe_div(tracked_usd, bundle.eth_price_usd)
        untracked_usd = (amount0_usd + amount1_usd) / TWO

        fraction = fee_fraction(pool.fee_tier)
        fees_eth = tracked_eth * fraction
        fees_usd = tracked_usd * fraction

        factory.tx_count += 1
        factory.total_volume_eth += tracked_eth
        factory.total_volume_usd += tracked_usd
        factory.untracked_volume_usd += untracked_usd
        factory.total_fees_eth += fees_eth
        factory.total_fees_usd += fees_usd

        detach_pool_tvl(factory=factory, pool=pool)

        pool.volume_token0 += amount0_abs
        pool.volume_token1 += amount1_abs
        pool.volume_usd += tracked_usd
        pool.untracked_volume_usd += untracked_usd
        pool.fees_usd += fees_usd
        pool.tx_count += 1

        pool.liquidity = event.liquidity
        pool.tick = event.tick
        pool.sqrt_price = event.sqrt_price_x96
        pool.total_value_locked_token0 += amount0
        pool.total_value_locked_token1 += amount1

        for token, amount, amount_abs in ((token0, amount0, amount0_abs), (token1, amount1, amount1_abs)):
            token.volume += amount_abs
            token.total_value_locked += amount
            token.volume_usd += tracked_usd
            token.untracked_volume_usd += untracked_usd
            token.fees_usd += fees_usd
            token.tx_count += 1

        pool.token0_price, pool.token1_price = sqrt_price_x96_to_token_prices(
            pool.sqrt_price, token0.decimals, token1.decimals
        )
        self._store.save(pool)

        bundle.eth_price_usd = self._pricing.get_eth_price_in_usd()
        self._store.save(bundle)
        token0.derived_eth = self._pricing.find_eth_per_token(token=token0, eth_price_usd=bundle.eth_price_usd)
        token1.derived_eth = self._pricing.find_eth_per_token(token=token1, eth_price_usd=bundle.eth_price_usd)

        reattach_pool_tvl(
            factory=factory,
            pool=pool,
            token0=token0,
            token1=token1,
            eth_price_usd=bundle.eth_price_usd,
        )
        refresh_token_tvl_usd(token=token0, eth_price_usd=bundle.eth_price_usd)
        refresh_token_tvl_usd(token=token1, eth_price_usd=bundle.eth_price_usd)

        transaction = load_transaction(self._store, context=context)
        swap = Swap(
            id=event_record_id(transaction.id, pool.tx_count),
            transaction=transaction.id,
            timestamp=transaction.timestamp,
            pool=pool.id,
            token0=pool.token0,
            token1=pool.token1,
            sender=event.sender,
            recipient=event.recipient,
            origin=context.transaction_from,
            amount0=amount0,
            amount1=amount1,
            amount_usd=tracked_usd,
            sqrt_price_x96=event.sqrt_price_x96,
            tick=event.tick,
            log_index=context.log_index,
        )
        self._store.save(swap)

        growth0, growth1 = self._pool_contract.get_fee_growth_globals(
            pool_address=pool.id,
            block_number=context.block_number,
        )
        pool.fee_growth_global0_x128 = growth0
        pool.fee_growth_global1_x128 = growth1

        self._propagate_rollups(
            state=state,
            timestamp=context.block_timestamp,
            amount0_abs=amount0_abs,
            amount1_abs=amount1_abs,
            tracked_eth=tracked_eth,
            tracked_usd=tracked_usd,
            untracked_usd=untracked_usd,
            fees_usd=fees_usd,
        )

        self._store.save(factory)
        self._store.save(pool)
        self._store.save(token0)
        self._store.save(token1)

        resolved = self._tick_crossing.run(state=state, old_tick=old_tick, new_tick=event.tick, context=context)

        logger.info(
            "handle_swap: applied pool=%s id=%s tick=%s->%s volume_usd=%s ticks_resolved=%s",
            pool.id,
            swap.id,
            old_tick,
            event.tick,
            tracked_usd,
            len(resolved),
        )
        return swap

    def _propagate_rollups(
        self,
        *,
        state: PoolState,
        timestamp: int,
        amount0_abs: Decimal,
        amount1_abs: Decimal,
        tracked_eth: Decimal,
        tracked_usd: Decimal,
        untracked_usd: Decimal,
        fees_usd: Decimal,
    ) -> None:
        eth_price_usd = state.bundle.eth_price_usd

        uniswap_day = self._interval_data.update_uniswap_day_data(factory=state.factory, timestamp=timestamp)
        add_protocol_swap_volume(
            uniswap_day,
            volume_eth=tracked_eth,
            volume_usd=tracked_usd,
            untracked_volume_usd=untracked_usd,
            fees_usd=fees_usd,
        )
        self._store.save(uniswap_day)

        pool_buckets = (
            self._interval_data.update_pool_day_data(pool=state.pool, timestamp=timestamp),
            self._interval_data.update_pool_hour_data(pool=state.pool, timestamp=timestamp),
            self._interval_data.update_pool_five_minute_data(pool=state.pool, timestamp=timestamp),
        )
        for bucket in pool_buckets:
            add_pool_swap_volume(
                bucket,
                amount0_abs=amount0_abs,
                amount1_abs=amount1_abs,
                volume_usd=tracked_usd,
                fees_usd=fees_usd,
            )
            self._store.save(bucket)

        for token, amount_abs in ((state.token0, amount0_abs), (state.token1, amount1_abs)):
            token_buckets = (
                self._interval_data.update_token_day_data(
                    token=token, eth_price_usd=eth_price_usd, timestamp=timestamp
                ),
                self._interval_data.update_token_hour_data(
                    token=token, eth_price_usd=eth_price_usd, timestamp=timestamp
                ),
            )
            for bucket in token_buckets:
                add_token_swap_volume(
                    bucket,
                    amount_abs=amount_abs,
                    volume_usd=tracked_usd,
                    untracked_volume_usd=untracked_usd,
                    fees_usd=fees_usd,
                )
                self._store.save(bucket)
