from __future__ import annotations

import json
import os
from dataclasses import dataclass
from decimal import Decimal

from dotenv import load_dotenv

from indexer.domain.services.tick_crossing import MAX_TICK_CROSSINGS


load_dotenv()


DEFAULT_FACTORY_ADDRESS = "0x1f98431c8ad98523631ae4a59f267346ea31f984"
DEFAULT_WETH_ADDRESS = "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"
DEFAULT_USDC_WETH_03_POOL = "0x8ad599c3a0ff1de082011efddc58f1908eb6e6d8"
DEFAULT_SWAP_EXCLUDED_POOLS = ["0x9663f2ca0454accad3e094448ea6f77443880454"]
DEFAULT_STABLE_COINS = [
    "0x6b175474e89094c44da98b954eedeac495271d0f",  # DAI
    "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48",  # USDC
    "0xdac17f958d2ee523a2206206994597c13d831ec7",  # USDT
]
DEFAULT_WHITELIST_TOKENS = [
    DEFAULT_WETH_ADDRESS,
    *DEFAULT_STABLE_COINS,
    "0x2260fac5e5542a773aa44fbcfedf7c193bc2c599",  # WBTC
]


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _json_list(name: str, default: list[str]) -> tuple[str, ...]:
    value = _env(name)
    if not value:
        return tuple(default)
    return tuple(str(item).lower() for item in json.loads(value))


@dataclass(frozen=True)
class Settings:
    database_dsn: str
    rpc_url: str
    rpc_timeout_seconds: float
    rpc_max_retries: int
    factory_address: str
    max_tick_crossings: int
    swap_excluded_pools: tuple[str, ...]
    weth_address: str
    stablecoin_wrapped_native_pool: str
    whitelist_tokens: tuple[str, ...]
    stable_coins: tuple[str, ...]
    minimum_eth_locked: Decimal


def get_settings() -> Settings:
    return Settings(
        database_dsn=_env("DATABASE_DSN", ""),
        rpc_url=_env("RPC_URL", ""),
        rpc_timeout_seconds=float(_env("RPC_TIMEOUT_SECONDS", "10")),
        rpc_max_retries=int(_env("RPC_MAX_RETRIES", "3")),
        factory_address=_env("FACTORY_ADDRESS", DEFAULT_FACTORY_ADDRESS).lower(),
        max_tick_crossings=int(_env("MAX_TICK_CROSSINGS", str(MAX_TICK_CROSSINGS))),
        swap_excluded_pools=_json_list("SWAP_EXCLUDED_POOLS", DEFAULT_SWAP_EXCLUDED_POOLS),
        weth_address=_env("WETH_ADDRESS", DEFAULT_WETH_ADDRESS).lower(),
        stablecoin_wrapped_native_pool=_env(
            "STABLECOIN_WRAPPED_NATIVE_POOL", DEFAULT_USDC_WETH_03_POOL
        ).lower(),
        whitelist_tokens=_json_list("WHITELIST_TOKENS", DEFAULT_WHITELIST_TOKENS),
        stable_coins=_json_list("STABLE_COINS", DEFAULT_STABLE_COINS),
        minimum_eth_locked=Decimal(_env("MINIMUM_ETH_LOCKED", "60")),
    )
