from __future__ import annotations

from indexer.application.ports.entity_store_port import EntityStorePort
from indexer.application.ports.pool_contract_port import PoolContractPort
from indexer.application.ports.pricing_port import PricingPort
from indexer.application.use_cases.dispatch_event import EventDispatcher
from indexer.application.use_cases.handle_burn import HandleBurnUseCase
from indexer.application.use_cases.handle_flash import HandleFlashUseCase
from indexer.application.use_cases.handle_initialize import HandleInitializeUseCase
from indexer.application.use_cases.handle_mint import HandleMintUseCase
from indexer.application.use_cases.handle_swap import HandleSwapUseCase
from indexer.application.use_cases.position_change import PositionChangeApplier
from indexer.application.use_cases.tick_crossing_iterator import TickCrossingIterator
from indexer.application.use_cases.tick_state_resolver import TickStateResolver
from indexer.core.config import Settings, get_settings
from indexer.infrastructure.clients.pool_contract_client import (
    PoolContractClient,
    PoolContractClientSettings,
)
from indexer.infrastructure.clients.pricing import PricingSettings, StorePricingService
from indexer.infrastructure.db.engine import get_engine
from indexer.infrastructure.db.repositories.sql_entity_store import SqlEntityStore
from indexer.infrastructure.store.interval_data_repository import StoreIntervalDataRepository
from indexer.infrastructure.store.memory_entity_store import InMemoryEntityStore


def build_store(settings: Settings) -> EntityStorePort:
    if not settings.database_dsn:
        return InMemoryEntityStore()
    return SqlEntityStore(get_engine(settings.database_dsn), create_schema=True)


def build_pool_contract(settings: Settings) -> PoolContractPort:
    return PoolContractClient(
        PoolContractClientSettings(
            rpc_url=settings.rpc_url,
            timeout_seconds=settings.rpc_timeout_seconds,
            max_retries=settings.rpc_max_retries,
        )
    )


def build_dispatcher(
    settings: Settings | None = None,
    *,
    store: EntityStorePort | None = None,
    pool_contract: PoolContractPort | None = None,
    pricing: PricingPort | None = None,
) -> EventDispatcher:
    settings = settings or get_settings()
    store = store if store is not None else build_store(settings)
    pool_contract = pool_contract if pool_contract is not None else build_pool_contract(settings)

    if pricing is None:
        pricing = StorePricingService(
            store=store,
            settings=PricingSettings(
                weth_address=settings.weth_address,
                stablecoin_wrapped_native_pool=settings.stablecoin_wrapped_native_pool,
                whitelist_tokens=settings.whitelist_tokens,
                stable_coins=settings.stable_coins,
                minimum_eth_locked=settings.minimum_eth_locked,
            ),
        )
    interval_data = StoreIntervalDataRepository(store)
    resolver = TickStateResolver(store=store, pool_contract=pool_contract, interval_data=interval_data)
    position_change = PositionChangeApplier(store=store, interval_data=interval_data, resolver=resolver)

    return EventDispatcher(
        store=store,
        initialize=HandleInitializeUseCase(store=store, pricing=pricing, interval_data=interval_data),
        mint=HandleMintUseCase(
            store=store,
            position_change=position_change,
            factory_address=settings.factory_address,
        ),
        burn=HandleBurnUseCase(
            store=store,
            position_change=position_change,
            factory_address=settings.factory_address,
        ),
        swap=HandleSwapUseCase(
            store=store,
            pricing=pricing,
            pool_contract=pool_contract,
            interval_data=interval_data,
            tick_crossing=TickCrossingIterator(resolver=resolver, max_crossings=settings.max_tick_crossings),
            factory_address=settings.factory_address,
            excluded_pools=settings.swap_excluded_pools,
        ),
        flash=HandleFlashUseCase(store=store, pool_contract=pool_contract),
    )
