from __future__ import annotations

from decimal import Decimal
from typing import Protocol

from indexer.domain.entities.token import Token


class PricingPort(Protocol):
    def get_eth_price_in_usd(self) -> Decimal:
        ...

    def find_eth_per_token(self, *, token: Token, eth_price_usd: Decimal) -> Decimal:
        ...

    def get_tracked_amount_usd(
        self,
        *,
        amount0: Decimal,
        token0: Token,
        amount1: Decimal,
        token1: Token,
        eth_price_usd: Decimal,
    ) -> Decimal:
        ...
