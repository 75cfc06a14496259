from __future__ import annotations

from decimal import Decimal

from indexer.domain.services.fee_growth import (
    Q128,
    FeeGrowthPair,
    fee_growth_above,
    fee_growth_below,
    fee_growth_inside,
    fees_from_fee_growth,
    q128_to_decimal,
)


GLOBAL = FeeGrowthPair(token0=1000, token1=500)


class TestFeeGrowthBelow:
    def test_uses_previous_outside_when_current_tick_is_at_or_above_previous(self):
        below = fee_growth_below(
            fee_growth_global=GLOBAL,
            previous_outside=FeeGrowthPair(token0=100, token1=50),
            previous_tick_idx=-60,
            tick_current=-60,
        )
        assert below == FeeGrowthPair(token0=100, token1=50)

    def test_flips_previous_outside_when_current_tick_is_below_previous(self):
        below = fee_growth_below(
            fee_growth_global=GLOBAL,
            previous_outside=FeeGrowthPair(token0=100, token1=50),
            previous_tick_idx=-60,
            tick_current=-120,
        )
        assert below == FeeGrowthPair(token0=900, token1=450)

    def test_without_previous_tick_the_global_accumulator_counts_as_below(self):
        below = fee_growth_below(
            fee_growth_global=GLOBAL,
            previous_outside=None,
            previous_tick_idx=None,
            tick_current=0,
        )
        assert below == GLOBAL


class TestFeeGrowthAbove:
    def test_uses_outside_when_current_tick_is_below_tick(self):
        above = fee_growth_above(
            fee_growth_global=GLOBAL,
            outside=FeeGrowthPair(token0=200, token1=20),
            tick_idx=60,
            tick_current=0,
        )
        assert above == FeeGrowthPair(token0=200, token1=20)

    def test_flips_outside_when_current_tick_is_at_or_above_tick(self):
        above = fee_growth_above(
            fee_growth_global=GLOBAL,
            outside=FeeGrowthPair(token0=200, token1=20),
            tick_idx=60,
            tick_current=60,
        )
        assert above == FeeGrowthPair(token0=800, token1=480)


class TestFeeGrowthInside:
    def test_subtracts_below_and_above_from_global(self):
        inside = fee_growth_inside(
            fee_growth_global=GLOBAL,
            below=FeeGrowthPair(token0=100, token1=50),
            above=FeeGrowthPair(token0=200, token1=20),
        )
        assert inside == FeeGrowthPair(token0=700, token1=430)

    def test_keeps_sign_when_outside_values_exceed_global(self):
        inside = fee_growth_inside(
            fee_growth_global=FeeGrowthPair(token0=10, token1=10),
            below=FeeGrowthPair(token0=10, token1=0),
            above=FeeGrowthPair(token0=5, token1=0),
        )
        assert inside.token0 == -5


class TestQ128Codec:
    def test_exact_multiples_of_q128_decode_to_integers(self):
        assert q128_to_decimal(3 * Q128) == Decimal("3")

    def test_fractional_values_are_exact(self):
        assert q128_to_decimal(Q128 // 2) == Decimal("0.5")
        assert q128_to_decimal(1) * Decimal(Q128) == Decimal("1")

    def test_null_and_zero_decode_to_zero(self):
        assert q128_to_decimal(None) == Decimal("0")
        assert q128_to_decimal(0) == Decimal("0")

    def test_near_uint256_values_keep_every_digit(self):
        assert q128_to_decimal(2**256 - Q128) == Decimal(2**128 - 1)
        assert q128_to_decimal(5 * Q128 + Q128 // 4) == Decimal("5.25")

    def test_fees_scale_with_liquidity(self):
        assert fees_from_fee_growth(fee_growth=2 * Q128, liquidity=3) == Decimal("6")
