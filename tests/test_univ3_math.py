from __future__ import annotations

from decimal import Decimal

import pytest

from indexer.domain.services.univ3_math import (
    convert_token_to_decimal,
    fee_fraction,
    fee_tier_to_tick_spacing,
    safe_div,
    sqrt_price_x96_to_token_prices,
    tick_prices,
)


@pytest.mark.parametrize(
    ("fee_tier", "spacing"),
    [(100, 1), (500, 10), (3000, 60), (10000, 200), (2500, None)],
)
def test_fee_tier_to_tick_spacing(fee_tier, spacing):
    assert fee_tier_to_tick_spacing(fee_tier) == spacing


def test_fee_fraction_is_parts_per_million():
    assert fee_fraction(3000) == Decimal("0.003")
    assert fee_fraction(0) == Decimal("0")


def test_safe_div_returns_zero_for_zero_denominator():
    assert safe_div(Decimal("5"), Decimal("0")) == Decimal("0")
    assert safe_div(Decimal("5"), Decimal("2")) == Decimal("2.5")


def test_convert_token_to_decimal_scales_by_decimals():
    assert convert_token_to_decimal(1_500_000, 6) == Decimal("1.5")
    assert convert_token_to_decimal(-10**18, 18) == Decimal("-1")
    assert convert_token_to_decimal(42, 0) == Decimal("42")


def test_tick_prices_at_zero_are_parity():
    assert tick_prices(0) == (Decimal("1"), Decimal("1"))


def test_tick_prices_are_reciprocal():
    price0, price1 = tick_prices(600)
    assert price0 > 1
    assert (price0 * price1).quantize(Decimal("1.000000000000")) == Decimal("1.000000000000")


def test_sqrt_price_adjusts_for_token_decimals():
    token0_price, token1_price = sqrt_price_x96_to_token_prices(2**96, 6, 18)
    assert token1_price == Decimal("1e-12")
    assert token0_price == Decimal("1e12")


def test_sqrt_price_zero_gives_zero_prices():
    assert sqrt_price_x96_to_token_prices(0, 18, 18) == (Decimal("0"), Decimal("0"))
