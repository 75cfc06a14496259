from __future__ import annotations

import logging

from indexer.application.dto.events import FlashEvent
from indexer.application.ports.entity_store_port import EntityStorePort
from indexer.application.ports.pool_contract_port import PoolContractPort
from indexer.application.use_cases.pool_state import load_pool
from indexer.domain.entities.pool import Pool


logger = logging.getLogger(__name__)


class HandleFlashUseCase:
    def __init__(self, *, store: EntityStorePort, pool_contract: PoolContractPort):
        self._store = store
        self._pool_contract = pool_contract

    def execute(self, event: FlashEvent) -> Pool:
        context = event.context
        pool = load_pool(self._store, pool_address=context.pool_address)

        growth0, growth1 = self._pool_contract.get_fee_growth_globals(
            pool_address=pool.id,
            block_number=context.block_number,
        )
        pool.fee_growth_global0_x128 = growth0
        pool.fee_growth_global1_x128 = growth1
        self._store.save(pool)

        logger.info("handle_flash: applied pool=%s block=%s", pool.id, context.block_number)
        return pool
