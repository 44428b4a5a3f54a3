"""
Energy functions for seam carving.

The energy of a pixel is the squared RGB difference between its vertical
neighbors plus the squared RGB difference between its horizontal neighbors:

    E(x, y) = ||I(x, y-1) - I(x, y+1)||^2 + ||I(x-1, y) - I(x+1, y)||^2

Neighbor lookups wrap around the image edges (toroidal boundary), so every
pixel including the border ones has a well-defined energy.
"""

import logging

import torch

from .grid import Grid, SeamLike, check_seam

logger = logging.getLogger(__name__)


def _squared_diff(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    """Sum over channels of the squared signed difference."""
    return ((a.long() - b.long()) ** 2).sum(dim=-1)


def compute_energy(pixels: Grid) -> Grid:
    """
    Compute the energy of every pixel.

    Args:
        pixels: Pixel grid (element shape (3,))

    Returns:
        Energy grid of the same dimensions, dtype int64
    """
    image = pixels.as_tensor()

    # Rolling by +1 along an axis brings the previous row/column into place
    above = torch.roll(image, shifts=1, dims=0)
    below = torch.roll(image, shifts=-1, dims=0)
    left = torch.roll(image, shifts=1, dims=1)
    right = torch.roll(image, shifts=-1, dims=1)

    energy = _squared_diff(above, below) + _squared_diff(left, right)
    return Grid.from_tensor(energy)


def _energy_at(image: torch.Tensor, xs: torch.Tensor, ys: torch.Tensor) -> torch.Tensor:
    """Energy at the given (x, y) coordinates of an (H, W, 3) tensor."""
    H, W = image.shape[0], image.shape[1]
    above = image[(ys - 1) % H, xs]
    below = image[(ys + 1) % H, xs]
    left = image[ys, (xs - 1) % W]
    right = image[ys, (xs + 1) % W]
    return _squared_diff(above, below) + _squared_diff(left, right)


def update_energy(energy: Grid, pixels: Grid, seam: SeamLike):
    """
    Refresh an energy grid in place after a seam removal.

    The seam must already have been removed from both ``pixels`` and
    ``energy``. Only cells whose neighborhood can have changed are
    recomputed:

    - in every row, the columns just left and right of the removed pixel
    - in the first and last row, every column between the seam's leftmost
      and rightmost position, since those rows are vertical neighbors of
      each other through the wrap-around

    The result is identical to ``compute_energy(pixels)``.

    Args:
        energy: Energy grid, already shrunk by the seam
        pixels: Pixel grid, already shrunk by the seam
        seam: The removed seam (pre-removal column per row)

    Raises:
        ValueError: if the grids have different dimensions
        SeamLengthError: if len(seam) != height
        IndexError: if a seam entry is outside the pre-removal width
    """
    if energy.dimensions != pixels.dimensions:
        raise ValueError(
            f"energy and pixel grids differ in size: "
            f"{energy.dimensions} vs {pixels.dimensions}")
    W, H = pixels.dimensions
    # Columns refer to the grid before removal, one column wider
    seam = check_seam(seam, W + 1, H)

    rows = torch.arange(H)
    xs = [(seam - 1) % W, seam % W]
    ys = [rows, rows]

    lo = int(seam.min())
    hi = min(int(seam.max()), W - 1)
    span = torch.arange(lo, hi + 1)
    for edge_row in {0, H - 1}:
        xs.append(span)
        ys.append(torch.full_like(span, edge_row))

    xs = torch.cat(xs)
    ys = torch.cat(ys)

    image = pixels.as_tensor()
    energy.as_tensor()[ys, xs] = _energy_at(image, xs, ys).to(energy.dtype)
    logger.debug(f"Updated {xs.numel()} energy cells after seam removal")
