from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, localcontext


Q128 = 2**128
# x / 2**128 == x * 5**128 / 10**128, so 90 extra digits keep the quotient exact.
_Q128_EXTRA_DIGITS = 90


def q128_to_decimal(value: int | None) -> Decimal:
    if value is None:
        return Decimal("0")
    with localcontext() as ctx:
        ctx.prec = len(str(abs(value))) + _Q128_EXTRA_DIGITS
        return Decimal(value) / Decimal(Q128)


@dataclass(frozen=True)
class FeeGrowthPair:
    token0: int
    token1: int


def fee_growth_below(
    *,
    fee_growth_global: FeeGrowthPair,
    previous_outside: FeeGrowthPair | None,
    previous_tick_idx: int | None,
    tick_current: int | None,
) -> FeeGrowthPair:
    """Fee growth on the far side of the nearest initialized tick below.

    Without a previous tick the whole global accumulator counts as below.
    """
    if previous_outside is None or previous_tick_idx is None:
        return fee_growth_global
    if tick_current is not None and tick_current >= previous_tick_idx:
        return previous_outside
    return FeeGrowthPair(
        token0=fee_growth_global.token0 - previous_outside.token0,
        token1=fee_growth_global.token1 - previous_outside.token1,
    )


def fee_growth_above(
    *,
    fee_growth_global: FeeGrowthPair,
    outside: FeeGrowthPair,
    tick_idx: int,
    tick_current: int | None,
) -> FeeGrowthPair:
    if tick_current is not None and tick_current < tick_idx:
        return outside
    return FeeGrowthPair(
        token0=fee_growth_global.token0 - outside.token0,
        token1=fee_growth_global.token1 - outside.token1,
    )


def fee_growth_inside(
    *,
    fee_growth_global: FeeGrowthPair,
    below: FeeGrowthPair,
    above: FeeGrowthPair,
) -> FeeGrowthPair:
    return FeeGrowthPair(
        token0=fee_growth_global.token0 - below.token0 - above.token0,
        token1=fee_growth_global.token1 - below.token1 - above.token1,
    )


def fees_from_fee_growth(*, fee_growth: int, liquidity: int) -> Decimal:
    return q128_to_decimal(fee_growth * liquidity)
