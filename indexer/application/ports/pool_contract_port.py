from __future__ import annotations

from typing import Protocol


class PoolContractPort(Protocol):
    def get_fee_growth_globals(
        self,
        *,
        pool_address: str,
        block_number: int | None = None,
    ) -> tuple[int, int]:
        ...

    def get_tick_fee_growth_outside(
        self,
        *,
        pool_address: str,
        tick_idx: int,
        block_number: int | None = None,
    ) -> tuple[int, int]:
        ...
