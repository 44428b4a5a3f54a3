"""
Content-aware image resizing by seam carving.

Seams are found by dynamic programming over a toroidal gradient energy
(Avidan & Shamir 2007), with the energy kept up to date incrementally as
seams are removed.
"""

__version__ = "0.1.0"

from .errors import (SeamCarvingError, ConstructionError, SeamLengthError,
                     CapacityError, BoundsViolation)
from .grid import Grid
from .energy import compute_energy, update_energy
from .seam import find_vertical_seam, seam_cost
from .carving import resize, shrink_width, grow_width, find_seams
from .image_io import (image_to_grid, grid_to_image, load_image, save_image,
                       carved_path, energy_image)

__all__ = [
    'SeamCarvingError',
    'ConstructionError',
    'SeamLengthError',
    'CapacityError',
    'BoundsViolation',
    'Grid',
    'compute_energy',
    'update_energy',
    'find_vertical_seam',
    'seam_cost',
    'resize',
    'shrink_width',
    'grow_width',
    'find_seams',
    'image_to_grid',
    'grid_to_image',
    'load_image',
    'save_image',
    'carved_path',
    'energy_image',
]
