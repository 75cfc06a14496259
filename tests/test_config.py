from __future__ import annotations

from decimal import Decimal

from indexer.core.config import DEFAULT_FACTORY_ADDRESS, DEFAULT_SWAP_EXCLUDED_POOLS, get_settings
from indexer.domain.services.tick_crossing import MAX_TICK_CROSSINGS


def test_defaults_target_mainnet_deployment(monkeypatch):
    for name in ("FACTORY_ADDRESS", "MAX_TICK_CROSSINGS", "SWAP_EXCLUDED_POOLS", "MINIMUM_ETH_LOCKED"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.factory_address == DEFAULT_FACTORY_ADDRESS
    assert settings.max_tick_crossings == MAX_TICK_CROSSINGS == 100
    assert settings.swap_excluded_pools == tuple(DEFAULT_SWAP_EXCLUDED_POOLS)
    assert settings.minimum_eth_locked == Decimal("60")


def test_environment_overrides_are_normalized(monkeypatch):
    monkeypatch.setenv("FACTORY_ADDRESS", "0xABCDEF")
    monkeypatch.setenv("MAX_TICK_CROSSINGS", "25")
    monkeypatch.setenv("SWAP_EXCLUDED_POOLS", '["0xAAA", "0xbbb"]')

    settings = get_settings()

    assert settings.factory_address == "0xabcdef"
    assert settings.max_tick_crossings == 25
    assert settings.swap_excluded_pools == ("0xaaa", "0xbbb")
