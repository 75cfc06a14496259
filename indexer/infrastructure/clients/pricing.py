from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from indexer.application.ports.entity_store_port import EntityStorePort
from indexer.domain.entities.pool import Pool
from indexer.domain.entities.token import Token
from indexer.domain.services.univ3_math import safe_div


@dataclass(frozen=True)
class PricingSettings:
    weth_address: str
    stablecoin_wrapped_native_pool: str
    whitelist_tokens: tuple[str, ...]
    stable_coins: tuple[str, ...]
    minimum_eth_locked: Decimal


class StorePricingService:
    """Reference pricing derived from pool state already held in the entity store."""

    def __init__(self, *, store: EntityStorePort, settings: PricingSettings):
        self._store = store
        self._settings = settings
        self._whitelist = frozenset(address.lower() for address in settings.whitelist_tokens)
        self._stable_coins = frozenset(address.lower() for address in settings.stable_coins)

    def get_eth_price_in_usd(self) -> Decimal:
        # the stablecoin sits on the token0 side of the reference pool
        pool = self._store.load(Pool, self._settings.stablecoin_wrapped_native_pool)
        if pool is None:
            return Decimal("0")
        return pool.token0_price

    def find_eth_per_token(self, *, token: Token, eth_price_usd: Decimal) -> Decimal:
        if token.id == self._settings.weth_address:
            return Decimal("1")
        if token.id in self._stable_coins:
            return safe_div(Decimal("1"), eth_price_usd)

        largest_liquidity_eth = Decimal("0")
        price_so_far = Decimal("0")
        for pool_address in token.whitelist_pools:
            pool = self._store.load(Pool, pool_address)
            if pool is None or pool.liquidity <= 0:
                continue
            if pool.token0 == token.id:
                other = self._store.load(Token, pool.token1)
                if other is None:
                    continue
                eth_locked = pool.total_value_locked_token1 * other.derived_eth
                if eth_locked > largest_liquidity_eth and eth_locked > self._settings.minimum_eth_locked:
                    largest_liquidity_eth = eth_locked
                    price_so_far = pool.token1_price * other.derived_eth
            if pool.token1 == token.id:
                other = self._store.load(Token, pool.token0)
                if other is None:
                    continue
                eth_locked = pool.total_value_locked_token0 * other.derived_eth
                if eth_locked > largest_liquidity_eth and eth_locked > self._settings.minimum_eth_locked:
                    largest_liquidity_eth = eth_locked
                    price_so_far = pool.token0_price * other.derived_eth
        return price_so_far

    def get_tracked_amount_usd(
        self,
        *,
        amount0: Decimal,
        token0: Token,
        amount1: Decimal,
        token1: Token,
        eth_price_usd: Decimal,
    ) -> Decimal:
        price0_usd = token0.derived_eth * eth_price_usd
        price1_usd = token1.derived_eth * eth_price_usd
        token0_listed = token0.id in self._whitelist
        token1_listed = token1.id in self._whitelist

        if token0_listed and token1_listed:
            return amount0 * price0_usd + amount1 * price1_usd
        if token0_listed:
            return amount0 * price0_usd * Decimal("2")
        if token1_listed:
            return amount1 * price1_usd * Decimal("2")
        return Decimal("0")
