from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


def event_record_id(transaction_id: str, pool_tx_count: int) -> str:
    return f"{transaction_id}#{pool_tx_count}"


@dataclass
class Transaction:
    id: str
    block_number: int
    timestamp: int
    gas_used: int = 0
    gas_price: int = 0


@dataclass(frozen=True)
class Mint:
    id: str
    transaction: str
    timestamp: int
    pool: str
    token0: str
    token1: str
    owner: str
    sender: str | None
    origin: str
    amount: int
    amount0: Decimal
    amount1: Decimal
    amount_usd: Decimal
    tick_lower: int
    tick_upper: int
    log_index: int


@dataclass(frozen=True)
class Burn:
    id: str
    transaction: str
    timestamp: int
    pool: str
    token0: str
    token1: str
    owner: str | None
    origin: str
    amount: int
    amount0: Decimal
    amount1: Decimal
    amount_usd: Decimal
    tick_lower: int
    tick_upper: int
    log_index: int


@dataclass(frozen=True)
class Swap:
    id: str
    transaction: str
    timestamp: int
    pool: str
    token0: str
    token1: str
    sender: str
    recipient: str
    origin: str
    amount0: Decimal
    amount1: Decimal
    amount_usd: Decimal
    sqrt_price_x96: int
    tick: int
    log_index: int
