from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from indexer.domain.entities.protocol import ZERO


def tick_id(pool_address: str, tick_idx: int) -> str:
    return f"{pool_address}#{tick_idx}"


@dataclass
class Tick:
    id: str
    pool_address: str
    tick_idx: int
    created_at_timestamp: int = 0
    created_at_block_number: int = 0
    liquidity_gross: int = 0
    liquidity_net: int = 0
    price0: Decimal = Decimal("1")
    price1: Decimal = Decimal("1")
    fee_growth_outside0_x128: int = 0
    fee_growth_outside1_x128: int = 0
    volume_token0: Decimal = ZERO
    volume_token1: Decimal = ZERO
    volume_usd: Decimal = ZERO
    fees_token0: Decimal = ZERO
    fees_token1: Decimal = ZERO
    fees_usd: Decimal = ZERO
