from __future__ import annotations

from decimal import Decimal

from indexer.domain.entities.interval_data import (
    PoolIntervalData,
    TickIntervalData,
    TokenIntervalData,
    UniswapDayData,
)
from indexer.domain.entities.tick import Tick


def bucket_delta(*, running: Decimal, starting: Decimal) -> Decimal:
    return running - starting


def add_protocol_swap_volume(
    day_data: UniswapDayData,
    *,
    volume_eth: Decimal,
    volume_usd: Decimal,
    untracked_volume_usd: Decimal,
    fees_usd: Decimal,
) -> None:
    day_data.volume_eth += volume_eth
    day_data.volume_usd += volume_usd
    day_data.volume_usd_untracked += untracked_volume_usd
    day_data.fees_usd += fees_usd


def add_pool_swap_volume(
    bucket: PoolIntervalData,
    *,
    amount0_abs: Decimal,
    amount1_abs: Decimal,
    volume_usd: Decimal,
    fees_usd: Decimal,
) -> None:
    bucket.volume_token0 += amount0_abs
    bucket.volume_token1 += amount1_abs
    bucket.volume_usd += volume_usd
    bucket.fees_usd += fees_usd


def add_token_swap_volume(
    bucket: TokenIntervalData,
    *,
    amount_abs: Decimal,
    volume_usd: Decimal,
    untracked_volume_usd: Decimal,
    fees_usd: Decimal,
) -> None:
    bucket.volume += amount_abs
    bucket.volume_usd += volume_usd
    bucket.untracked_volume_usd += untracked_volume_usd
    bucket.fees_usd += fees_usd


def refresh_tick_bucket(bucket: TickIntervalData, tick: Tick) -> None:
    bucket.volume_token0 = bucket_delta(running=tick.volume_token0, starting=bucket.starting_volume_token0)
    bucket.volume_token1 = bucket_delta(running=tick.volume_token1, starting=bucket.starting_volume_token1)
    bucket.volume_usd = bucket_delta(running=tick.volume_usd, starting=bucket.starting_volume_usd)
    bucket.fees_token0 = bucket_delta(running=tick.fees_token0, starting=bucket.starting_fees_token0)
    bucket.fees_token1 = bucket_delta(running=tick.fees_token1, starting=bucket.starting_fees_token1)
    bucket.fees_usd = bucket_delta(running=tick.fees_usd, starting=bucket.starting_fees_usd)
