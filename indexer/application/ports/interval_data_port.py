from __future__ import annotations

from decimal import Decimal
from typing import Protocol

from indexer.domain.entities.interval_data import (
    PoolDayData,
    PoolFiveMinuteData,
    PoolHourData,
    TickDayData,
    TickFiveMinuteData,
    TickHourData,
    TokenDayData,
    TokenHourData,
    UniswapDayData,
)
from indexer.domain.entities.pool import Pool
from indexer.domain.entities.protocol import Factory
from indexer.domain.entities.tick import Tick
from indexer.domain.entities.token import Token


class IntervalDataPort(Protocol):
    def update_uniswap_day_data(self, *, factory: Factory, timestamp: int) -> UniswapDayData:
        ...

    def update_pool_day_data(self, *, pool: Pool, timestamp: int) -> PoolDayData:
        ...

    def update_pool_hour_data(self, *, pool: Pool, timestamp: int) -> PoolHourData:
        ...

    def update_pool_five_minute_data(self, *, pool: Pool, timestamp: int) -> PoolFiveMinuteData:
        ...

    def update_token_day_data(
        self,
        *,
        token: Token,
        eth_price_usd: Decimal,
        timestamp: int,
    ) -> TokenDayData:
        ...

    def update_token_hour_data(
        self,
        *,
        token: Token,
        eth_price_usd: Decimal,
        timestamp: int,
    ) -> TokenHourData:
        ...

    def update_tick_day_data(self, *, tick: Tick, timestamp: int) -> TickDayData:
        ...

    def update_tick_hour_data(self, *, tick: Tick, timestamp: int) -> TickHourData:
        ...

    def update_tick_five_minute_data(self, *, tick: Tick, timestamp: int) -> TickFiveMinuteData:
        ...
