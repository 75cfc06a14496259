from __future__ import annotations

from decimal import Decimal

from indexer.domain.entities.pool import Pool
from indexer.domain.entities.protocol import Factory
from indexer.domain.entities.token import Token


# A handler that moves pool TVL calls detach_pool_tvl before touching the pool
# and reattach_pool_tvl after every pool/token mutation, in that order.


def detach_pool_tvl(*, factory: Factory, pool: Pool) -> None:
    factory.total_value_locked_eth = factory.total_value_locked_eth - pool.total_value_locked_eth


def pool_tvl_eth(*, pool: Pool, token0: Token, token1: Token) -> Decimal:
    return (
        pool.total_value_locked_token0 * token0.derived_eth
        + pool.total_value_locked_token1 * token1.derived_eth
    )


def reattach_pool_tvl(
    *,
    factory: Factory,
    pool: Pool,
    token0: Token,
    token1: Token,
    eth_price_usd: Decimal,
) -> None:
    pool.total_value_locked_eth = pool_tvl_eth(pool=pool, token0=token0, token1=token1)
    pool.total_value_locked_usd = pool.total_value_locked_eth * eth_price_usd

    factory.total_value_locked_eth = factory.total_value_locked_eth + pool.total_value_locked_eth
    factory.total_value_locked_usd = factory.total_value_locked_eth * eth_price_usd


def refresh_token_tvl_usd(*, token: Token, eth_price_usd: Decimal) -> None:
    token.total_value_locked_usd = token.total_value_locked * token.derived_eth * eth_price_usd
