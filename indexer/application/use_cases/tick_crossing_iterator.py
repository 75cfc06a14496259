from __future__ import annotations

import logging

from indexer.application.dto.events import EventContext
from indexer.application.use_cases.pool_state import PoolState
from indexer.application.use_cases.tick_state_resolver import TickStateResolver
from indexer.domain.entities.tick import Tick
from indexer.domain.services.tick_crossing import (
    MAX_TICK_CROSSINGS,
    crossed_tick_indices,
    crossing_count,
)
from indexer.domain.services.univ3_math import fee_tier_to_tick_spacing


logger = logging.getLogger(__name__)


class TickCrossingIterator:
    def __init__(self, *, resolver: TickStateResolver, max_crossings: int = MAX_TICK_CROSSINGS):
        self._resolver = resolver
        self._max_crossings = max_crossings

    def run(
        self,
        *,
        state: PoolState,
        old_tick: int | None,
        new_tick: int,
        context: EventContext,
    ) -> list[Tick]:
        pool = state.pool
        resolved = [self._resolver.resolve(state=state, tick_idx=new_tick, context=context, is_swap=True)]

        if old_tick is None:
            logger.warning("tick_crossing: no_previous_tick pool=%s new_tick=%s", pool.id, new_tick)
            return resolved

        tick_spacing = fee_tier_to_tick_spacing(pool.fee_tier)
        if tick_spacing is None:
            logger.warning(
                "tick_crossing: unknown_tick_spacing pool=%s fee_tier=%s",
                pool.id,
                pool.fee_tier,
            )
            return resolved

        crossings = crossing_count(old_tick=old_tick, new_tick=new_tick, tick_spacing=tick_spacing)
        if crossings > self._max_crossings:
            logger.warning(
                "tick_crossing: skip_crossings pool=%s old_tick=%s new_tick=%s crossings=%s max=%s",
                pool.id,
                old_tick,
                new_tick,
                crossings,
                self._max_crossings,
            )
            return resolved

        for tick_idx in crossed_tick_indices(old_tick=old_tick, new_tick=new_tick, tick_spacing=tick_spacing):
            resolved.append(
                self._resolver.resolve(state=state, tick_idx=tick_idx, context=context, is_swap=True)
            )
        return resolved
