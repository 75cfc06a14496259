from __future__ import annotations

import logging

from indexer.application.dto.events import MintEvent
from indexer.application.ports.entity_store_port import EntityStorePort
from indexer.application.use_cases.pool_state import load_pool_state, load_transaction
from indexer.application.use_cases.position_change import MINT, PositionChangeApplier
from indexer.domain.entities.transactions import Mint, event_record_id


logger = logging.getLogger(__name__)


class HandleMintUseCase:
    def __init__(
        self,
        *,
        store: EntityStorePort,
        position_change: PositionChangeApplier,
        factory_address: str,
    ):
        self._store = store
        self._position_change = position_change
        self._factory_address = factory_address

    def execute(self, event: MintEvent) -> Mint:
        context = event.context
        state = load_pool_state(
            self._store,
            pool_address=context.pool_address,
            factory_address=self._factory_address,
        )
        pool = state.pool

        amounts = self._position_change.apply_amounts(
            state=state,
            direction=MINT,
            liquidity=event.amount,
            tick_lower=event.tick_lower,
            tick_upper=event.tick_upper,
            raw_amount0=event.amount0,
            raw_amount1=event.amount1,
        )

        transaction = load_transaction(self._store, context=context)
        mint = Mint(
            id=event_record_id(transaction.id, pool.tx_count),
            transaction=transaction.id,
            timestamp=transaction.timestamp,
            pool=pool.id,
            token0=pool.token0,
            token1=pool.token1,
            owner=event.owner,
            sender=event.sender,
            origin=context.transaction_from,
            amount=event.amount,
            amount0=amounts.amount0,
            amount1=amounts.amount1,
            amount_usd=amounts.amount_usd,
            tick_lower=event.tick_lower,
            tick_upper=event.tick_upper,
            log_index=context.log_index,
        )
        self._store.save(mint)

        self._position_change.apply_ticks(
            state=state,
            direction=MINT,
            liquidity=event.amount,
            tick_lower=event.tick_lower,
            tick_upper=event.tick_upper,
            context=context,
        )
        self._position_change.touch_rollups(state=state, timestamp=context.block_timestamp)
        self._position_change.resolve_boundaries(
            state=state,
            tick_lower=event.tick_lower,
            tick_upper=event.tick_upper,
            context=context,
        )
        self._position_change.save_aggregates(state)

        logger.info(
            "handle_mint: applied pool=%s id=%s amount=%s ticks=[%s,%s)",
            pool.id,
            mint.id,
            event.amount,
            event.tick_lower,
            event.tick_upper,
        )
        return mint
