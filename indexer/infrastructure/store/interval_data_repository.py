from __future__ import annotations

from decimal import Decimal
from typing import TypeVar

from indexer.application.ports.entity_store_port import EntityStorePort
from indexer.domain.entities.interval_data import (
    PoolDayData,
    PoolFiveMinuteData,
    PoolHourData,
    PoolIntervalData,
    TickDayData,
    TickFiveMinuteData,
    TickHourData,
    TickIntervalData,
    TokenDayData,
    TokenHourData,
    TokenIntervalData,
    UniswapDayData,
)
from indexer.domain.entities.pool import Pool
from indexer.domain.entities.protocol import Factory
from indexer.domain.entities.tick import Tick
from indexer.domain.entities.token import Token


DAY_SECONDS = 86400
HOUR_SECONDS = 3600
FIVE_MINUTE_SECONDS = 300

PoolBucketT = TypeVar("PoolBucketT", bound=PoolIntervalData)
TokenBucketT = TypeVar("TokenBucketT", bound=TokenIntervalData)
TickBucketT = TypeVar("TickBucketT", bound=TickIntervalData)


def bucket_index(timestamp: int, period_seconds: int) -> int:
    return timestamp // period_seconds


class StoreIntervalDataRepository:
    """Get-or-create time buckets in the entity store and refresh their snapshots."""

    def __init__(self, store: EntityStorePort):
        self._store = store

    def update_uniswap_day_data(self, *, factory: Factory, timestamp: int) -> UniswapDayData:
        day_id = bucket_index(timestamp, DAY_SECONDS)
        day_data = self._store.load(UniswapDayData, str(day_id))
        if day_data is None:
            day_data = UniswapDayData(id=str(day_id), date=day_id * DAY_SECONDS)
        day_data.tvl_usd = factory.total_value_locked_usd
        day_data.tx_count = factory.tx_count
        self._store.save(day_data)
        return day_data

    def update_pool_day_data(self, *, pool: Pool, timestamp: int) -> PoolDayData:
        return self._update_pool_bucket(PoolDayData, pool=pool, timestamp=timestamp, period_seconds=DAY_SECONDS)

    def update_pool_hour_data(self, *, pool: Pool, timestamp: int) -> PoolHourData:
        return self._update_pool_bucket(PoolHourData, pool=pool, timestamp=timestamp, period_seconds=HOUR_SECONDS)

    def update_pool_five_minute_data(self, *, pool: Pool, timestamp: int) -> PoolFiveMinuteData:
        return self._update_pool_bucket(
            PoolFiveMinuteData, pool=pool, timestamp=timestamp, period_seconds=FIVE_MINUTE_SECONDS
        )

    def update_token_day_data(self, *, token: Token, eth_price_usd: Decimal, timestamp: int) -> TokenDayData:
        return self._update_token_bucket(
            TokenDayData, token=token, eth_price_usd=eth_price_usd, timestamp=timestamp, period_seconds=DAY_SECONDS
        )

    def update_token_hour_data(self, *, token: Token, eth_price_usd: Decimal, timestamp: int) -> TokenHourData:
        return self._update_token_bucket(
            TokenHourData, token=token, eth_price_usd=eth_price_usd, timestamp=timestamp, period_seconds=HOUR_SECONDS
        )

    def update_tick_day_data(self, *, tick: Tick, timestamp: int) -> TickDayData:
        return self._update_tick_bucket(TickDayData, tick=tick, timestamp=timestamp, period_seconds=DAY_SECONDS)

    def update_tick_hour_data(self, *, tick: Tick, timestamp: int) -> TickHourData:
        return self._update_tick_bucket(TickHourData, tick=tick, timestamp=timestamp, period_seconds=HOUR_SECONDS)

    def update_tick_five_minute_data(self, *, tick: Tick, timestamp: int) -> TickFiveMinuteData:
        return self._update_tick_bucket(
            TickFiveMinuteData, tick=tick, timestamp=timestamp, period_seconds=FIVE_MINUTE_SECONDS
        )

    def _update_pool_bucket(
        self,
        kind: type[PoolBucketT],
        *,
        pool: Pool,
        timestamp: int,
        period_seconds: int,
    ) -> PoolBucketT:
        index = bucket_index(timestamp, period_seconds)
        bucket_id = f"{pool.id}-{index}"
        bucket = self._store.load(kind, bucket_id)
        if bucket is None:
            bucket = kind(
                id=bucket_id,
                period_start=index * period_seconds,
                pool=pool.id,
                open=pool.token0_price,
                high=pool.token0_price,
                low=pool.token0_price,
                close=pool.token0_price,
            )

        if pool.token0_price > bucket.high:
            bucket.high = pool.token0_price
        if pool.token0_price < bucket.low:
            bucket.low = pool.token0_price
        bucket.close = pool.token0_price
        bucket.liquidity = pool.liquidity
        bucket.sqrt_price = pool.sqrt_price
        bucket.tick = pool.tick
        bucket.fee_growth_global0_x128 = pool.fee_growth_global0_x128
        bucket.fee_growth_global1_x128 = pool.fee_growth_global1_x128
        bucket.token0_price = pool.token0_price
        bucket.token1_price = pool.token1_price
        bucket.tvl_usd = pool.total_value_locked_usd
        bucket.tx_count += 1
        self._store.save(bucket)
        return bucket

    def _update_token_bucket(
        self,
        kind: type[TokenBucketT],
        *,
        token: Token,
        eth_price_usd: Decimal,
        timestamp: int,
        period_seconds: int,
    ) -> TokenBucketT:
        index = bucket_index(timestamp, period_seconds)
        bucket_id = f"{token.id}-{index}"
        price_usd = token.derived_eth * eth_price_usd
        bucket = self._store.load(kind, bucket_id)
        if bucket is None:
            bucket = kind(
                id=bucket_id,
                period_start=index * period_seconds,
                token=token.id,
                open=price_usd,
                high=price_usd,
                low=price_usd,
                close=price_usd,
            )

        if price_usd > bucket.high:
            bucket.high = price_usd
        if price_usd < bucket.low:
            bucket.low = price_usd
        bucket.close = price_usd
        bucket.price_usd = price_usd
        bucket.total_value_locked = token.total_value_locked
        bucket.total_value_locked_usd = token.total_value_locked_usd
        self._store.save(bucket)
        return bucket

    def _update_tick_bucket(
        self,
        kind: type[TickBucketT],
        *,
        tick: Tick,
        timestamp: int,
        period_seconds: int,
    ) -> TickBucketT:
        index = bucket_index(timestamp, period_seconds)
        bucket_id = f"{tick.id}-{index}"
        bucket = self._store.load(kind, bucket_id)
        if bucket is None:
            bucket = kind(
                id=bucket_id,
                period_start=index * period_seconds,
                pool=tick.pool_address,
                tick=tick.id,
                tick_idx=tick.tick_idx,
                starting_volume_token0=tick.volume_token0,
                starting_volume_token1=tick.volume_token1,
                starting_volume_usd=tick.volume_usd,
                starting_fees_token0=tick.fees_token0,
                starting_fees_token1=tick.fees_token1,
                starting_fees_usd=tick.fees_usd,
            )

        bucket.liquidity_gross = tick.liquidity_gross
        bucket.liquidity_net = tick.liquidity_net
        self._store.save(bucket)
        return bucket
