from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from indexer.domain.entities.protocol import ZERO


@dataclass
class Token:
    id: str
    symbol: str
    name: str
    decimals: int
    volume: Decimal = ZERO
    volume_usd: Decimal = ZERO
    untracked_volume_usd: Decimal = ZERO
    fees_usd: Decimal = ZERO
    tx_count: int = 0
    total_value_locked: Decimal = ZERO
    total_value_locked_usd: Decimal = ZERO
    derived_eth: Decimal = ZERO
    whitelist_pools: list[str] = field(default_factory=list)
