from __future__ import annotations

import logging
from typing import Any, Callable

from indexer.application.dto.events import (
    BurnEvent,
    FlashEvent,
    InitializeEvent,
    MintEvent,
    PoolEvent,
    SwapEvent,
)
from indexer.application.ports.entity_store_port import EntityStorePort
from indexer.application.use_cases.handle_burn import HandleBurnUseCase
from indexer.application.use_cases.handle_flash import HandleFlashUseCase
from indexer.application.use_cases.handle_initialize import HandleInitializeUseCase
from indexer.application.use_cases.handle_mint import HandleMintUseCase
from indexer.application.use_cases.handle_swap import HandleSwapUseCase
from indexer.domain.exceptions import DomainError, UnsupportedEventError


logger = logging.getLogger(__name__)


class EventDispatcher:
    """Runs one handler per event and commits or discards its writes as a unit."""

    def __init__(
        self,
        *,
        store: EntityStorePort,
        initialize: HandleInitializeUseCase,
        mint: HandleMintUseCase,
        burn: HandleBurnUseCase,
        swap: HandleSwapUseCase,
        flash: HandleFlashUseCase,
    ):
        self._store = store
        self._handlers: dict[type, Callable[[Any], Any]] = {
            InitializeEvent: initialize.execute,
            MintEvent: mint.execute,
            BurnEvent: burn.execute,
            SwapEvent: swap.execute,
            FlashEvent: flash.execute,
        }

    def dispatch(self, event: PoolEvent) -> bool:
        context = event.context
        try:
            handler = self._handlers.get(type(event))
            if handler is None:
                raise UnsupportedEventError(f"No handler for {type(event).__name__}.")
            handler(event)
        except DomainError as exc:
            self._store.rollback()
            logger.error(
                "event_dispatcher: dropped event=%s pool=%s tx=%s log_index=%s error=%s",
                type(event).__name__,
                context.pool_address,
                context.transaction_hash,
                context.log_index,
                exc,
            )
            return False
        except Exception:
            self._store.rollback()
            raise

        self._store.commit()
        return True

    def dispatch_all(self, events: list[PoolEvent]) -> int:
        applied = 0
        for event in events:
            if self.dispatch(event):
                applied += 1
        logger.info("event_dispatcher: batch_done received=%s applied=%s", len(events), applied)
        return applied
