"""
Minimum-cost seam search.

A vertical seam holds one column index per row, and consecutive rows differ
by at most one column. The optimal seam is found by bottom-up dynamic
programming over the energy grid.
"""

import torch

from .grid import Grid, SeamLike, check_seam


def find_vertical_seam(energy: Grid) -> torch.Tensor:
    """
    Find the top-to-bottom seam with the lowest total energy.

    cost[x, H-1] = energy[x, H-1]
    cost[x, y]   = energy[x, y] + min(cost[x, y+1], cost[x-1, y+1], cost[x+1, y+1])

    Ties prefer straight down, then left, then right: a diagonal neighbor
    only replaces the current choice when it is strictly cheaper. The seam
    starts at the lowest column index with minimal cost in the top row.

    Args:
        energy: Energy grid with width >= 1 and height >= 1

    Returns:
        Seam indices (H,) with the column for each row, top to bottom
    """
    W, H = energy.dimensions
    values = energy.as_tensor().long()
    blocked = torch.iinfo(torch.long).max

    cost = torch.zeros(H, W, dtype=torch.long)
    path = torch.zeros(H, W, dtype=torch.long)
    cols = torch.arange(W)

    cost[H - 1] = values[H - 1]
    for y in range(H - 2, -1, -1):
        below = cost[y + 1]
        best_cost = below.clone()
        best_col = cols.clone()

        # Left neighbor (x-1, y+1)
        left = torch.full((W,), blocked, dtype=torch.long)
        left[1:] = below[:-1]
        take = left < best_cost
        best_cost = torch.where(take, left, best_cost)
        best_col = torch.where(take, cols - 1, best_col)

        # Right neighbor (x+1, y+1), compared against the updated minimum
        right = torch.full((W,), blocked, dtype=torch.long)
        right[:-1] = below[1:]
        take = right < best_cost
        best_cost = torch.where(take, right, best_cost)
        best_col = torch.where(take, cols + 1, best_col)

        path[y] = best_col
        cost[y] = values[y] + best_cost

    seam = torch.zeros(H, dtype=torch.long)
    # Lowest column index among the cheapest starting cells
    seam[0] = torch.nonzero(cost[0] == cost[0].min())[0, 0]
    for y in range(H - 1):
        seam[y + 1] = path[y, seam[y]]

    return seam


def seam_cost(energy: Grid, seam: SeamLike) -> int:
    """Total energy of the cells a seam passes through."""
    seam = check_seam(seam, *energy.dimensions)
    rows = torch.arange(seam.shape[0])
    return int(energy.as_tensor()[rows, seam].long().sum())
