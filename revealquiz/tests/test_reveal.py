"""
Tests for reveal grid selection.
"""

import random

import pytest

from ..engine_core.reveal import generate_reveal, reveal_count


class TestRevealCount:
    """Tests for the number of revealed cells."""

    def test_floor_of_share(self):
        assert reveal_count(4, 30) == 4  # 4.8 -> 4
        assert reveal_count(4, 37) == 5  # 5.92 -> 5
        assert reveal_count(10, 55) == 55

    def test_clamped(self):
        assert reveal_count(4, -10) == 0
        assert reveal_count(4, 250) == 16


class TestGenerateReveal:
    """Tests for cell sampling."""

    @pytest.mark.parametrize("grid_size", [1, 2, 3, 4, 7])
    def test_size_and_range_for_all_percentages(self, grid_size):
        """Exact size, in-range indices, no duplicates."""
        rng = random.Random(grid_size)
        cell_count = grid_size * grid_size
        for percentage in range(0, 101):
            cells = generate_reveal(grid_size, percentage, rng)
            assert len(cells) == (cell_count * percentage) // 100
            assert all(0 <= c < cell_count for c in cells)

    def test_zero_is_empty(self):
        assert generate_reveal(4, 0) == frozenset()

    def test_full_reveal(self):
        assert generate_reveal(4, 100) == frozenset(range(16))

    def test_over_full_is_clamped(self):
        assert generate_reveal(3, 140) == frozenset(range(9))

    def test_same_seed_same_cells(self):
        first = generate_reveal(5, 40, random.Random(1234))
        second = generate_reveal(5, 40, random.Random(1234))
        assert first == second

    def test_every_cell_can_be_chosen(self):
        """Over many draws every index shows up."""
        rng = random.Random(99)
        seen = set()
        for _ in range(200):
            seen |= generate_reveal(4, 30, rng)
        assert seen == set(range(16))

    def test_invalid_grid_size(self):
        with pytest.raises(ValueError):
            generate_reveal(0, 50)
