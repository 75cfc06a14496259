from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class EventContext:
    pool_address: str
    transaction_hash: str
    log_index: int
    block_number: int
    block_timestamp: int
    transaction_from: str
    gas_used: int = 0
    gas_price: int = 0


@dataclass(frozen=True)
class InitializeEvent:
    context: EventContext
    sqrt_price_x96: int
    tick: int


@dataclass(frozen=True)
class MintEvent:
    context: EventContext
    sender: str | None
    owner: str
    tick_lower: int
    tick_upper: int
    amount: int
    amount0: int
    amount1: int


@dataclass(frozen=True)
class BurnEvent:
    context: EventContext
    owner: str | None
    tick_lower: int
    tick_upper: int
    amount: int
    amount0: int
    amount1: int


@dataclass(frozen=True)
class SwapEvent:
    context: EventContext
    sender: str
    recipient: str
    amount0: int
    amount1: int
    sqrt_price_x96: int
    liquidity: int
    tick: int


@dataclass(frozen=True)
class FlashEvent:
    context: EventContext
    sender: str
    recipient: str
    amount0: int
    amount1: int
    paid0: int
    paid1: int


PoolEvent = Union[InitializeEvent, MintEvent, BurnEvent, SwapEvent, FlashEvent]
