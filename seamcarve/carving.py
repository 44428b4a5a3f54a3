"""
High-level resizing that orchestrates energy, seam search and seam edits.

Width is changed with vertical seams. Height is changed by transposing the
grids, running the same width machinery, and transposing back.
"""

import logging
from typing import List, Optional, Tuple

import torch

from .energy import compute_energy, update_energy
from .errors import BoundsViolation, CapacityError
from .grid import Grid
from .seam import find_vertical_seam

logger = logging.getLogger(__name__)


def shrink_width(image: Grid, n_seams: int,
                 energy: Optional[Grid] = None) -> Tuple[Grid, Grid]:
    """
    Remove n_seams vertical seams from an image in place.

    Each iteration finds the cheapest seam, removes it from both the pixel
    grid and the energy grid, then refreshes only the energy cells the
    removal affected.

    Args:
        image: Pixel grid, modified in place
        n_seams: Number of seams to remove (< image.width)
        energy: Energy grid matching ``image``; computed if None

    Returns:
        (image, energy) after the removals

    Raises:
        BoundsViolation: if n_seams is negative or would leave no columns
    """
    if n_seams < 0 or n_seams >= image.width:
        raise BoundsViolation(
            f"cannot remove {n_seams} seams from an image of width {image.width}")
    if energy is None:
        energy = compute_energy(image)

    for i in range(n_seams):
        seam = find_vertical_seam(energy)
        image.remove_seam(seam)
        energy.remove_seam(seam)
        update_energy(energy, image, seam)

        if (i + 1) % 50 == 0:
            logger.debug(f"  Removed {i + 1}/{n_seams} seams, width now {image.width}")

    return image, energy


def find_seams(image: Grid, n_seams: int) -> List[torch.Tensor]:
    """
    Find the n_seams cheapest seams in sequence without losing pixel data.

    Seams are found on a working copy: after each one is found it is removed
    from the copy, and a position map kept in lockstep translates its columns
    back to the untouched image.

    Args:
        image: Pixel grid (not modified)
        n_seams: Number of seams (<= image.width)

    Returns:
        List of seams in ``image`` column coordinates, in discovery order
    """
    working = image.copy()
    positions = Grid.positions(*image.dimensions)
    energy = compute_energy(working)
    rows = torch.arange(image.height)

    seams = []
    for i in range(n_seams):
        seam = find_vertical_seam(energy)
        seams.append(positions.as_tensor()[rows, seam, 0].clone())

        # The last seam never needs to be carved out of the working copy
        if i < n_seams - 1:
            working.remove_seam(seam)
            positions.remove_seam(seam)
            energy.remove_seam(seam)
            update_energy(energy, working, seam)

    return seams


def grow_width(image: Grid, n_seams: int) -> Grid:
    """
    Widen an image by duplicating its n_seams cheapest seams.

    Args:
        image: Pixel grid (not modified)
        n_seams: Number of columns to add

    Returns:
        New pixel grid of width image.width + n_seams

    Raises:
        BoundsViolation: if n_seams is negative
        CapacityError: if more seams are requested than the image has columns
    """
    if n_seams < 0:
        raise BoundsViolation(f"cannot insert a negative number of seams: {n_seams}")
    if n_seams > image.width:
        raise CapacityError(
            f"cannot insert {n_seams} seams into an image with only "
            f"{image.width} distinct seams available")

    seams = find_seams(image, n_seams)
    grown = image.copy()
    grown.insert_seams(seams)
    return grown


def _resize_width(image: Grid, target: int, energy: Optional[Grid],
                  axis: str) -> Tuple[Grid, Optional[Grid]]:
    """Run one width pass; returns the new image and its energy if still valid."""
    width = image.width
    if target < width:
        logger.info(f"Removing {width - target} {axis} seams to reach {target}")
        return shrink_width(image, width - target, energy)
    if target > width:
        logger.info(f"Inserting {target - width} {axis} seams to reach {target}")
        return grow_width(image, target - width), None
    return image, energy


def resize(image: Grid, target_width: int, target_height: int,
           allow_growth: bool = True) -> Grid:
    """
    Content-aware resize of a pixel grid to (target_width, target_height).

    The width pass runs to completion before the height pass starts, and the
    height pass works on the intermediate result.

    Args:
        image: Pixel grid (not modified)
        target_width: Desired width (>= 1)
        target_height: Desired height (>= 1)
        allow_growth: If False, any target larger than the source is rejected

    Returns:
        Resized pixel grid; ``image`` itself if no change is needed

    Raises:
        BoundsViolation: for non-positive targets, an empty image, or growth
                         when allow_growth is False
        CapacityError: if a dimension would need more than double its size
    """
    if target_width < 1 or target_height < 1:
        raise BoundsViolation(
            f"target dimensions must be positive, got {target_width}x{target_height}")
    width, height = image.dimensions
    if width < 1 or height < 1:
        raise BoundsViolation(f"cannot resize an empty image ({width}x{height})")

    if (target_width, target_height) == (width, height):
        return image

    # Reject impossible requests before any seam is touched
    for target, current in ((target_width, width), (target_height, height)):
        if target > current and not allow_growth:
            raise BoundsViolation(
                f"target dimension exceeds source dimension, got {target} and {current}")
        if target - current > current:
            raise CapacityError(
                f"cannot grow {current} to {target}: only {current} distinct "
                f"seams are available")

    logger.info(f"Original size: {(width, height)}")
    carved = image.copy()

    carved, energy = _resize_width(carved, target_width, None, 'vertical')

    if target_height != height:
        carved.transpose()
        if energy is not None:
            energy.transpose()
        carved, energy = _resize_width(carved, target_height, energy,
                                       'horizontal')
        carved.transpose()

    logger.info(f"Resized size: {carved.dimensions}")
    return carved
