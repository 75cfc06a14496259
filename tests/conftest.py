from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

import pytest

from indexer.application.dto.events import EventContext
from indexer.core.config import Settings
from indexer.domain.entities.pool import Pool
from indexer.domain.entities.protocol import Bundle, Factory
from indexer.domain.entities.token import Token
from indexer.infrastructure.store.memory_entity_store import InMemoryEntityStore
from indexer.main import build_dispatcher


FACTORY = "0xfactory"
POOL = "0xpool"
TOKEN0 = "0xtoken0"
TOKEN1 = "0xtoken1"
# 2024-01-01T00:00:00Z
BLOCK_TIMESTAMP = 1704067200


class FakePoolContract:
    def __init__(self):
        self.fee_growth_globals: tuple[int, int] = (0, 0)
        self.tick_outside: dict[int, tuple[int, int]] = {}
        self.global_calls = 0
        self.tick_calls: list[int] = []

    def get_fee_growth_globals(self, *, pool_address: str, block_number: int | None = None) -> tuple[int, int]:
        _ = (pool_address, block_number)
        self.global_calls += 1
        return self.fee_growth_globals

    def get_tick_fee_growth_outside(
        self,
        *,
        pool_address: str,
        tick_idx: int,
        block_number: int | None = None,
    ) -> tuple[int, int]:
        _ = (pool_address, block_number)
        self.tick_calls.append(tick_idx)
        return self.tick_outside.get(tick_idx, (0, 0))


class FakePricing:
    def __init__(
        self,
        *,
        eth_price_usd: Decimal = Decimal("2000"),
        eth_per_token: dict[str, Decimal] | None = None,
        tracked_usd: Decimal | None = None,
    ):
        self.eth_price_usd = eth_price_usd
        self.eth_per_token = eth_per_token or {}
        self.tracked_usd = tracked_usd

    def get_eth_price_in_usd(self) -> Decimal:
        return self.eth_price_usd

    def find_eth_per_token(self, *, token: Token, eth_price_usd: Decimal) -> Decimal:
        _ = eth_price_usd
        return self.eth_per_token.get(token.id, token.derived_eth)

    def get_tracked_amount_usd(
        self,
        *,
        amount0: Decimal,
        token0: Token,
        amount1: Decimal,
        token1: Token,
        eth_price_usd: Decimal,
    ) -> Decimal:
        if self.tracked_usd is not None:
            return self.tracked_usd
        return amount0 * token0.derived_eth * eth_price_usd + amount1 * token1.derived_eth * eth_price_usd


def make_settings(**overrides) -> Settings:
    values = dict(
        database_dsn="",
        rpc_url="http://localhost:8545",
        rpc_timeout_seconds=1.0,
        rpc_max_retries=1,
        factory_address=FACTORY,
        max_tick_crossings=100,
        swap_excluded_pools=(),
        weth_address=TOKEN1,
        stablecoin_wrapped_native_pool=POOL,
        whitelist_tokens=(TOKEN0, TOKEN1),
        stable_coins=(TOKEN0,),
        minimum_eth_locked=Decimal("0"),
    )
    values.update(overrides)
    return Settings(**values)


def seed_pool(
    store: InMemoryEntityStore,
    *,
    fee_tier: int = 3000,
    tick: int | None = 0,
    sqrt_price: int = 2**96,
) -> None:
    """USDC-like token0 (6 decimals) against a WETH-like token1 at $2000/ETH."""
    store.save(Bundle(eth_price_usd=Decimal("2000")))
    store.save(Factory(id=FACTORY))
    store.save(
        Token(
            id=TOKEN0,
            symbol="USDC",
            name="USD Coin",
            decimals=6,
            derived_eth=Decimal("0.0005"),
            whitelist_pools=[POOL],
        )
    )
    store.save(
        Token(
            id=TOKEN1,
            symbol="WETH",
            name="Wrapped Ether",
            decimals=18,
            derived_eth=Decimal("1"),
            whitelist_pools=[POOL],
        )
    )
    store.save(
        Pool(
            id=POOL,
            token0=TOKEN0,
            token1=TOKEN1,
            fee_tier=fee_tier,
            tick=tick,
            sqrt_price=sqrt_price if tick is not None else 0,
        )
    )
    store.commit()


@dataclass
class IndexerHarness:
    pool_id = POOL
    factory_id = FACTORY
    token0_id = TOKEN0
    token1_id = TOKEN1

    store: InMemoryEntityStore
    pool_contract: FakePoolContract
    pricing: FakePricing
    settings: Settings
    tx_counter: list[int] = field(default_factory=lambda: [0])

    def __post_init__(self):
        self.dispatcher = build_dispatcher(
            self.settings,
            store=self.store,
            pool_contract=self.pool_contract,
            pricing=self.pricing,
        )

    def reconfigure(self, **overrides) -> None:
        self.settings = make_settings(**overrides)
        self.__post_init__()

    def reseed(self, **kwargs) -> None:
        seed_pool(self.store, **kwargs)

    def context(self, *, timestamp: int = BLOCK_TIMESTAMP, pool_address: str = POOL) -> EventContext:
        self.tx_counter[0] += 1
        number = self.tx_counter[0]
        return EventContext(
            pool_address=pool_address,
            transaction_hash=f"0xtx{number}",
            log_index=0,
            block_number=18_000_000 + number,
            block_timestamp=timestamp,
            transaction_from="0xorigin",
        )


@pytest.fixture
def store() -> InMemoryEntityStore:
    return InMemoryEntityStore()


@pytest.fixture
def pool_contract() -> FakePoolContract:
    return FakePoolContract()


@pytest.fixture
def pricing() -> FakePricing:
    return FakePricing()


@pytest.fixture
def harness(store, pool_contract, pricing) -> IndexerHarness:
    seed_pool(store)
    return IndexerHarness(
        store=store,
        pool_contract=pool_contract,
        pricing=pricing,
        settings=make_settings(),
    )
