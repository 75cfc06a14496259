from __future__ import annotations

import logging

from indexer.application.dto.events import InitializeEvent
from indexer.application.ports.entity_store_port import EntityStorePort
from indexer.application.ports.interval_data_port import IntervalDataPort
from indexer.application.ports.pricing_port import PricingPort
from indexer.application.use_cases.pool_state import load_pool_state
from indexer.domain.entities.pool import Pool


logger = logging.getLogger(__name__)


class HandleInitializeUseCase:
    def __init__(
        self,
        *,
        store: EntityStorePort,
        pricing: PricingPort,
        interval_data: IntervalDataPort,
    ):
        self._store = store
        self._pricing = pricing
        self._interval_data = interval_data

    def execute(self, event: InitializeEvent) -> Pool:
        context = event.context
        state = load_pool_state(self._store, pool_address=context.pool_address, factory_address=None)
        bundle, pool = state.bundle, state.pool

        pool.sqrt_price = event.sqrt_price_x96
        pool.tick = event.tick
        self._store.save(pool)

        bundle.eth_price_usd = self._pricing.get_eth_price_in_usd()
        self._store.save(bundle)

        timestamp = context.block_timestamp
        self._store.save(self._interval_data.update_pool_day_data(pool=pool, timestamp=timestamp))
        self._store.save(self._interval_data.update_pool_hour_data(pool=pool, timestamp=timestamp))
        self._store.save(self._interval_data.update_pool_five_minute_data(pool=pool, timestamp=timestamp))

        state.token0.derived_eth = self._pricing.find_eth_per_token(
            token=state.token0, eth_price_usd=bundle.eth_price_usd
        )
        state.token1.derived_eth = self._pricing.find_eth_per_token(
            token=state.token1, eth_price_usd=bundle.eth_price_usd
        )
        self._store.save(state.token0)
        self._store.save(state.token1)

        logger.info(
            "handle_initialize: applied pool=%s tick=%s sqrt_price=%s",
            pool.id,
            pool.tick,
            pool.sqrt_price,
        )
        return pool
