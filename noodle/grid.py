"""Toroidal grid arithmetic."""

from .models import GridPosition


def wrap(value: int, size: int) -> int:
    """Bring a coordinate that stepped off one edge back in at the other."""
    if value < 0:
        return value + size
    if value > size - 1:
        return value - size
    return value


def step(head: GridPosition, delta: tuple[int, int], width: int, height: int) -> tuple[GridPosition, GridPosition]:
    """Advance one cell. Returns (wrapped, unwrapped) positions.

    The unwrapped position is only meaningful for solid-wall checks.
    """
    x, y = head.x + delta[0], head.y + delta[1]
    return GridPosition(wrap(x, width), wrap(y, height)), GridPosition(x, y)
