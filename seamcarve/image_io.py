"""
Conversion between image files and pixel grids.
"""

from pathlib import Path

import numpy as np
import torch
from PIL import Image

from .grid import Grid

# Energy value that maps to full white in energy previews
ENERGY_SCALING = 2000.0


def image_to_grid(img: Image.Image) -> Grid:
    """Convert a PIL image to an RGB uint8 pixel grid."""
    img_array = np.array(img.convert('RGB'), dtype=np.uint8)
    return Grid.from_tensor(torch.from_numpy(img_array))


def grid_to_image(grid: Grid) -> Image.Image:
    """Convert an RGB pixel grid back to a PIL image."""
    img_array = grid.as_tensor().to(torch.uint8).cpu().numpy()
    return Image.fromarray(img_array)


def load_image(path) -> Grid:
    """Load an image file as a pixel grid."""
    with Image.open(path) as img:
        return image_to_grid(img)


def save_image(grid: Grid, path):
    """Save a pixel grid; the format follows the file extension."""
    grid_to_image(grid).save(path)


def carved_path(path) -> Path:
    """Output path for a carved image: ``dir/<stem>_carved<suffix>``."""
    path = Path(path)
    return path.with_name(f"{path.stem}_carved{path.suffix}")


def energy_image(energy: Grid, scaling: float = ENERGY_SCALING) -> Image.Image:
    """
    Render an energy grid as a grayscale image.

    Each value is mapped to ``value / scaling * 255`` and clipped to 255,
    so energies at or above ``scaling`` appear white.
    """
    values = energy.as_tensor().double().cpu().numpy()
    gray = np.clip(values / scaling * 255.0, 0, 255).astype(np.uint8)
    return Image.fromarray(gray)
