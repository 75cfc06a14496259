from __future__ import annotations

import dataclasses
import json
from decimal import Decimal
from typing import Any

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
from indexer.domain.entities.protocol import Bundle, Factory
from indexer.domain.entities.tick import Tick
from indexer.domain.entities.token import Token
from indexer.domain.entities.transactions import Burn, Mint, Swap, Transaction


ENTITY_TYPES: dict[str, type] = {
    cls.__name__: cls
    for cls in (
        Bundle,
        Factory,
        Token,
        Pool,
        Tick,
        Transaction,
        Mint,
        Burn,
        Swap,
        UniswapDayData,
        PoolDayData,
        PoolHourData,
        PoolFiveMinuteData,
        TokenDayData,
        TokenHourData,
        TickDayData,
        TickHourData,
        TickFiveMinuteData,
    )
}

_DECIMAL_KEY = "$decimal"


def _encode_value(value: Any) -> Any:
    if isinstance(value, Decimal):
        return {_DECIMAL_KEY: str(value)}
    if isinstance(value, list):
        return [_encode_value(item) for item in value]
    return value


def _decode_value(value: Any) -> Any:
    if isinstance(value, dict) and _DECIMAL_KEY in value:
        return Decimal(value[_DECIMAL_KEY])
    if isinstance(value, list):
        return [_decode_value(item) for item in value]
    return value


def kind_of(record: Any) -> str:
    kind = type(record).__name__
    if kind not in ENTITY_TYPES:
        raise ValueError(f"Unsupported entity kind: {kind}")
    return kind


def map_record_to_payload(record: Any) -> str:
    fields = {field.name: _encode_value(getattr(record, field.name)) for field in dataclasses.fields(record)}
    return json.dumps(fields, sort_keys=True)


def map_payload_to_record(kind: str, payload: str) -> Any:
    cls = ENTITY_TYPES.get(kind)
    if cls is None:
        raise ValueError(f"Unsupported entity kind: {kind}")
    raw = json.loads(payload)
    known = {field.name for field in dataclasses.fields(cls)}
    return cls(**{name: _decode_value(value) for name, value in raw.items() if name in known})
