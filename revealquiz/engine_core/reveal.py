"""
Reveal Grid - Picks which cells of the overlay grid show the image.

The grid is grid_size x grid_size cells, indexed row-major from 0.
Selection is a full shuffle of all indices, keeping a prefix, so every
cell is equally likely and no index repeats.
"""

from __future__ import annotations
import random


def reveal_count(grid_size: int, reveal_percentage: int) -> int:
    """Number of cells visible at a reveal percentage (clamped to 0..100)."""
    percentage = min(max(reveal_percentage, 0), 100)
    return (grid_size * grid_size * percentage) // 100


def generate_reveal(
    grid_size: int,
    reveal_percentage: int,
    rng: random.Random | None = None,
) -> frozenset[int]:
    """
    Select the revealed cells for a reveal percentage.

    Args:
        grid_size: Cells per side, must be >= 1
        reveal_percentage: Target percentage; values outside 0..100 are clamped
        rng: Random source; the module-level generator if not provided

    Returns:
        Frozen set of revealed cell indices
    """
    if grid_size < 1:
        raise ValueError(f"grid_size must be >= 1, got {grid_size}")

    count = reveal_count(grid_size, reveal_percentage)
    if count == 0:
        return frozenset()

    cells = list(range(grid_size * grid_size))
    (rng or random).shuffle(cells)
    return frozenset(cells[:count])
