from __future__ import annotations


MAX_TICK_CROSSINGS = 100


def crossing_count(*, old_tick: int, new_tick: int, tick_spacing: int) -> int:
    return abs(old_tick - new_tick) // tick_spacing


def crossed_tick_indices(*, old_tick: int, new_tick: int, tick_spacing: int) -> list[int]:
    """Spacing-aligned ticks walked by a price move, in price order.

    The landing tick itself is left out; callers resolve it first.
    """
    modulo = old_tick % tick_spacing
    indices: list[int] = []
    if new_tick > old_tick:
        current = old_tick - modulo + tick_spacing
        while current <= new_tick:
            if current != new_tick:
                indices.append(current)
            current += tick_spacing
    elif new_tick < old_tick:
        current = old_tick - modulo
        while current >= new_tick:
            if current != new_tick:
                indices.append(current)
            current -= tick_spacing
    return indices
