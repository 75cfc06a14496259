from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator

from indexer.application.dto.events import (
    BurnEvent,
    EventContext,
    FlashEvent,
    InitializeEvent,
    MintEvent,
    PoolEvent,
    SwapEvent,
)


def _lower(value: str | None) -> str | None:
    return value.lower() if isinstance(value, str) else value


class EventContextPayload(BaseModel):
    pool_address: str
    transaction_hash: str
    log_index: int = Field(ge=0)
    block_number: int = Field(ge=0)
    block_timestamp: int = Field(ge=0)
    transaction_from: str
    gas_used: int = 0
    gas_price: int = 0

    @field_validator("pool_address", "transaction_hash", "transaction_from")
    @classmethod
    def _lowercase(cls, value: str) -> str:
        return value.lower()

    def to_context(self) -> EventContext:
        return EventContext(**self.model_dump())


class InitializePayload(BaseModel):
    type: Literal["initialize"]
    context: EventContextPayload
    sqrt_price_x96: int = Field(gt=0)
    tick: int

    def to_event(self) -> InitializeEvent:
        return InitializeEvent(context=self.context.to_context(), sqrt_price_x96=self.sqrt_price_x96, tick=self.tick)


class MintPayload(BaseModel):
    type: Literal["mint"]
    context: EventContextPayload
    sender: str | None = None
    owner: str
    tick_lower: int
    tick_upper: int
    amount: int = Field(ge=0)
    amount0: int = Field(ge=0)
    amount1: int = Field(ge=0)

    @field_validator("sender", "owner")
    @classmethod
    def _lowercase(cls, value: str | None) -> str | None:
        return _lower(value)

    def to_event(self) -> MintEvent:
        return MintEvent(
            context=self.context.to_context(),
            sender=self.sender,
            owner=self.owner,
            tick_lower=self.tick_lower,
            tick_upper=self.tick_upper,
            amount=self.amount,
            amount0=self.amount0,
            amount1=self.amount1,
        )


class BurnPayload(BaseModel):
    type: Literal["burn"]
    context: EventContextPayload
    owner: str | None = None
    tick_lower: int
    tick_upper: int
    amount: int = Field(ge=0)
    amount0: int = Field(ge=0)
    amount1: int = Field(ge=0)

    @field_validator("owner")
    @classmethod
    def _lowercase(cls, value: str | None) -> str | None:
        return _lower(value)

    def to_event(self) -> BurnEvent:
        return BurnEvent(
            context=self.context.to_context(),
            owner=self.owner,
            tick_lower=self.tick_lower,
            tick_upper=self.tick_upper,
            amount=self.amount,
            amount0=self.amount0,
            amount1=self.amount1,
        )


class SwapPayload(BaseModel):
    type: Literal["swap"]
    context: EventContextPayload
    sender: str
    recipient: str
    amount0: int
    amount1: int
    sqrt_price_x96: int = Field(gt=0)
    liquidity: int = Field(ge=0)
    tick: int

    @field_validator("sender", "recipient")
    @classmethod
    def _lowercase(cls, value: str) -> str:
        return value.lower()

    def to_event(self) -> SwapEvent:
        return SwapEvent(
            context=self.context.to_context(),
            sender=self.sender,
            recipient=self.recipient,
            amount0=self.amount0,
            amount1=self.amount1,
            sqrt_price_x96=self.sqrt_price_x96,
            liquidity=self.liquidity,
            tick=self.tick,
        )


class FlashPayload(BaseModel):
    type: Literal["flash"]
    context: EventContextPayload
    sender: str
    recipient: str
    amount0: int = Field(ge=0)
    amount1: int = Field(ge=0)
    paid0: int = Field(ge=0)
    paid1: int = Field(ge=0)

    @field_validator("sender", "recipient")
    @classmethod
    def _lowercase(cls, value: str) -> str:
        return value.lower()

    def to_event(self) -> FlashEvent:
        return FlashEvent(
            context=self.context.to_context(),
            sender=self.sender,
            recipient=self.recipient,
            amount0=self.amount0,
            amount1=self.amount1,
            paid0=self.paid0,
            paid1=self.paid1,
        )


EventPayload = Annotated[
    Union[InitializePayload, MintPayload, BurnPayload, SwapPayload, FlashPayload],
    Field(discriminator="type"),
]

_EVENT_ADAPTER: TypeAdapter[EventPayload] = TypeAdapter(EventPayload)


def parse_event(payload: dict) -> PoolEvent:
    return _EVENT_ADAPTER.validate_python(payload).to_event()
