"""Tests for the dynamic-programming seam search."""

import sys
import os
import itertools
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seamcarve.grid import Grid
from seamcarve.energy import compute_energy
from seamcarve.seam import find_vertical_seam, seam_cost
from seamcarve.errors import SeamLengthError


def energy_grid(rows):
    return Grid.from_tensor(torch.tensor(rows, dtype=torch.long))


def brute_force_min_cost(energy):
    """Cheapest connected top-to-bottom path, by enumerating every path."""
    W, H = energy.dimensions
    values = energy.as_tensor().tolist()
    best = None
    for start in range(W):
        for steps in itertools.product((-1, 0, 1), repeat=H - 1):
            col, total, valid = start, values[0][start], True
            for y, step in enumerate(steps, start=1):
                col += step
                if not 0 <= col < W:
                    valid = False
                    break
                total += values[y][col]
            if valid and (best is None or total < best):
                best = total
    return best


class TestFindVerticalSeam:
    def test_known_image(self, seam_test_image):
        seam = find_vertical_seam(compute_energy(seam_test_image))
        assert seam.tolist() == [3, 4, 3, 2, 2]

    def test_seam_follows_zero_energy_column(self):
        H, W = 20, 20
        energy = torch.ones(H, W, dtype=torch.long)
        energy[:, 10] = 0
        seam = find_vertical_seam(Grid.from_tensor(energy))
        assert (seam == 10).all(), f"Expected all 10, got {seam.tolist()}"

    def test_seam_follows_diagonal_valley(self):
        H, W = 20, 30
        energy = torch.full((H, W), 10, dtype=torch.long)
        for i in range(H):
            energy[i, 5 + i] = 0
        seam = find_vertical_seam(Grid.from_tensor(energy))
        assert seam.tolist() == [5 + i for i in range(H)]

    def test_seam_continuity_and_range(self):
        torch.manual_seed(42)
        energy = Grid.from_tensor(torch.randint(0, 1000, (50, 40)))
        seam = find_vertical_seam(energy)
        assert seam.shape == (50,)
        assert (seam >= 0).all() and (seam < 40).all()
        assert (seam[1:] - seam[:-1]).abs().max() <= 1

    def test_uniform_energy_goes_straight_down_from_first_column(self):
        seam = find_vertical_seam(energy_grid([[3] * 5] * 4))
        assert seam.tolist() == [0, 0, 0, 0]

    def test_tie_prefers_left_over_right(self):
        seam = find_vertical_seam(energy_grid([[9, 0, 9],
                                               [0, 5, 0]]))
        assert seam.tolist() == [1, 0]

    def test_tie_prefers_straight_over_diagonal(self):
        seam = find_vertical_seam(energy_grid([[9, 0, 9],
                                               [2, 2, 2]]))
        assert seam.tolist() == [1, 1]

    def test_single_column(self):
        seam = find_vertical_seam(energy_grid([[4], [2], [7]]))
        assert seam.tolist() == [0, 0, 0]

    def test_single_row_picks_first_minimum(self):
        seam = find_vertical_seam(energy_grid([[5, 1, 3, 1]]))
        assert seam.tolist() == [1]

    @pytest.mark.parametrize("W,H", [(3, 3), (4, 5), (5, 4), (2, 6)])
    def test_cost_matches_brute_force(self, W, H):
        gen = torch.Generator().manual_seed(W * 10 + H)
        for _ in range(20):
            energy = Grid.from_tensor(torch.randint(0, 20, (H, W), generator=gen))
            seam = find_vertical_seam(energy)
            assert seam_cost(energy, seam) == brute_force_min_cost(energy)


class TestSeamCost:
    def test_sums_cells_along_seam(self):
        energy = energy_grid([[1, 2, 3],
                              [4, 5, 6],
                              [7, 8, 9]])
        assert seam_cost(energy, [0, 1, 2]) == 1 + 5 + 9
        assert seam_cost(energy, torch.tensor([2, 2, 1])) == 3 + 6 + 8

    def test_invalid_seam_raises(self):
        energy = energy_grid([[1, 2], [3, 4]])
        with pytest.raises(IndexError):
            seam_cost(energy, [-1, 0])
        with pytest.raises(IndexError):
            seam_cost(energy, [0, 2])
        with pytest.raises(SeamLengthError):
            seam_cost(energy, [0])
