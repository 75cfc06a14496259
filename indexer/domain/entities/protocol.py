from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


ZERO = Decimal("0")
BUNDLE_ID = "1"


@dataclass
class Bundle:
    id: str = BUNDLE_ID
    eth_price_usd: Decimal = ZERO


@dataclass
class Factory:
    id: str
    tx_count: int = 0
    total_volume_usd: Decimal = ZERO
    total_volume_eth: Decimal = ZERO
    total_fees_usd: Decimal = ZERO
    total_fees_eth: Decimal = ZERO
    untracked_volume_usd: Decimal = ZERO
    total_value_locked_usd: Decimal = ZERO
    total_value_locked_eth: Decimal = ZERO
    owner: str | None = None
