from __future__ import annotations

from dataclasses import dataclass

from indexer.application.dto.events import EventContext
from indexer.application.ports.entity_store_port import EntityStorePort
from indexer.domain.entities.pool import Pool
from indexer.domain.entities.protocol import BUNDLE_ID, Bundle, Factory
from indexer.domain.entities.token import Token
from indexer.domain.entities.transactions import Transaction
from indexer.domain.exceptions import (
    BundleNotFoundError,
    FactoryNotFoundError,
    PoolNotFoundError,
    TokenNotFoundError,
)


@dataclass
class PoolState:
    bundle: Bundle
    factory: Factory | None
    pool: Pool
    token0: Token
    token1: Token


def load_bundle(store: EntityStorePort) -> Bundle:
    bundle = store.load(Bundle, BUNDLE_ID)
    if bundle is None:
        raise BundleNotFoundError(BUNDLE_ID)
    return bundle


def load_factory(store: EntityStorePort, *, factory_address: str) -> Factory:
    factory = store.load(Factory, factory_address)
    if factory is None:
        raise FactoryNotFoundError(factory_address)
    return factory


def load_pool(store: EntityStorePort, *, pool_address: str) -> Pool:
    pool = store.load(Pool, pool_address)
    if pool is None:
        raise PoolNotFoundError(pool_address)
    return pool


def load_token(store: EntityStorePort, *, token_address: str) -> Token:
    token = store.load(Token, token_address)
    if token is None:
        raise TokenNotFoundError(token_address)
    return token


def load_pool_state(
    store: EntityStorePort,
    *,
    pool_address: str,
    factory_address: str | None,
) -> PoolState:
    """Loads every record a handler needs, failing before anything is mutated."""
    pool = load_pool(store, pool_address=pool_address)
    return PoolState(
        bundle=load_bundle(store),
        factory=load_factory(store, factory_address=factory_address) if factory_address else None,
        pool=pool,
        token0=load_token(store, token_address=pool.token0),
        token1=load_token(store, token_address=pool.token1),
    )


def load_transaction(store: EntityStorePort, *, context: EventContext) -> Transaction:
    transaction = store.load(Transaction, context.transaction_hash)
    if transaction is None:
        transaction = Transaction(
            id=context.transaction_hash,
            block_number=context.block_number,
            timestamp=context.block_timestamp,
        )
    transaction.block_number = context.block_number
    transaction.timestamp = context.block_timestamp
    transaction.gas_used = context.gas_used
    transaction.gas_price = context.gas_price
    store.save(transaction)
    return transaction
