from __future__ import annotations

from decimal import Decimal


MIN_TICK = -887282
Q192 = Decimal(2) ** 192
FEE_TIER_DENOMINATOR = Decimal("1000000")

FEE_TIER_TO_TICK_SPACING = {
    100: 1,
    500: 10,
    3000: 60,
    10000: 200,
}


def fee_tier_to_tick_spacing(fee_tier: int) -> int | None:
    return FEE_TIER_TO_TICK_SPACING.get(fee_tier)


def fee_fraction(fee_tier: int) -> Decimal:
    return Decimal(fee_tier) / FEE_TIER_DENOMINATOR


def safe_div(amount0: Decimal, amount1: Decimal) -> Decimal:
    if amount1 == 0:
        return Decimal("0")
    return amount0 / amount1


def exponent_to_decimal(decimals: int) -> Decimal:
    return Decimal(10) ** decimals


def convert_token_to_decimal(raw_amount: int, decimals: int) -> Decimal:
    if decimals == 0:
        return Decimal(raw_amount)
    return Decimal(raw_amount) / exponent_to_decimal(decimals)


def tick_prices(tick_idx: int) -> tuple[Decimal, Decimal]:
    # 1.0001^tick is token1 per token0
    price0 = Decimal("1.0001") ** tick_idx
    return price0, safe_div(Decimal("1"), price0)


def sqrt_price_x96_to_token_prices(
    sqrt_price_x96: int,
    token0_decimals: int,
    token1_decimals: int,
) -> tuple[Decimal, Decimal]:
    """Returns ``(token0_price, token1_price)``.

    ``token1_price`` is token1 per token0 adjusted for decimals and
    ``token0_price`` its inverse.
    """
    num = Decimal(sqrt_price_x96 * sqrt_price_x96)
    price1 = num / Q192 * exponent_to_decimal(token0_decimals) / exponent_to_decimal(token1_decimals)
    price0 = safe_div(Decimal("1"), price1)
    return price0, price1
