from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from indexer.domain.entities.protocol import ZERO


@dataclass
class Pool:
    id: str
    token0: str
    token1: str
    fee_tier: int
    created_at_timestamp: int = 0
    created_at_block_number: int = 0
    liquidity: int = 0
    sqrt_price: int = 0
    tick: int | None = None
    fee_growth_global0_x128: int = 0
    fee_growth_global1_x128: int = 0
    token0_price: Decimal = ZERO
    token1_price: Decimal = ZERO
    volume_token0: Decimal = ZERO
    volume_token1: Decimal = ZERO
    volume_usd: Decimal = ZERO
    untracked_volume_usd: Decimal = ZERO
    fees_usd: Decimal = ZERO
    tx_count: int = 0
    total_value_locked_token0: Decimal = ZERO
    total_value_locked_token1: Decimal = ZERO
    total_value_locked_eth: Decimal = ZERO
    total_value_locked_usd: Decimal = ZERO
