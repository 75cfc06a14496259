from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from indexer.domain.entities.protocol import ZERO


@dataclass
class UniswapDayData:
    id: str
    date: int
    volume_eth: Decimal = ZERO
    volume_usd: Decimal = ZERO
    volume_usd_untracked: Decimal = ZERO
    fees_usd: Decimal = ZERO
    tx_count: int = 0
    tvl_usd: Decimal = ZERO


@dataclass
class PoolIntervalData:
    id: str
    period_start: int
    pool: str
    liquidity: int = 0
    sqrt_price: int = 0
    tick: int | None = None
    fee_growth_global0_x128: int = 0
    fee_growth_global1_x128: int = 0
    token0_price: Decimal = ZERO
    token1_price: Decimal = ZERO
    tvl_usd: Decimal = ZERO
    volume_token0: Decimal = ZERO
    volume_token1: Decimal = ZERO
    volume_usd: Decimal = ZERO
    fees_usd: Decimal = ZERO
    tx_count: int = 0
    open: Decimal = ZERO
    high: Decimal = ZERO
    low: Decimal = ZERO
    close: Decimal = ZERO


@dataclass
class PoolDayData(PoolIntervalData):
    pass


@dataclass
class PoolHourData(PoolIntervalData):
    pass


@dataclass
class PoolFiveMinuteData(PoolIntervalData):
    pass


@dataclass
class TokenIntervalData:
    id: str
    period_start: int
    token: str
    volume: Decimal = ZERO
    volume_usd: Decimal = ZERO
    untracked_volume_usd: Decimal = ZERO
    fees_usd: Decimal = ZERO
    total_value_locked: Decimal = ZERO
    total_value_locked_usd: Decimal = ZERO
    price_usd: Decimal = ZERO
    open: Decimal = ZERO
    high: Decimal = ZERO
    low: Decimal = ZERO
    close: Decimal = ZERO


@dataclass
class TokenDayData(TokenIntervalData):
    pass


@dataclass
class TokenHourData(TokenIntervalData):
    pass


@dataclass
class TickIntervalData:
    """Bucket for one tick; running fields are ``cumulative - starting``."""

    id: str
    period_start: int
    pool: str
    tick: str
    tick_idx: int
    liquidity_gross: int = 0
    liquidity_net: int = 0
    starting_volume_token0: Decimal = ZERO
    starting_volume_token1: Decimal = ZERO
    starting_volume_usd: Decimal = ZERO
    starting_fees_token0: Decimal = ZERO
    starting_fees_token1: Decimal = ZERO
    starting_fees_usd: Decimal = ZERO
    volume_token0: Decimal = ZERO
    volume_token1: Decimal = ZERO
    volume_usd: Decimal = ZERO
    fees_token0: Decimal = ZERO
    fees_token1: Decimal = ZERO
    fees_usd: Decimal = ZERO


@dataclass
class TickDayData(TickIntervalData):
    pass


@dataclass
class TickHourData(TickIntervalData):
    pass


@dataclass
class TickFiveMinuteData(TickIntervalData):
    pass
