"""
Exception types raised by the seam carving core.

Every error is local and deterministic: a failing operation leaves its
grids untouched and raises immediately.
"""


class SeamCarvingError(ValueError):
    """Base class for all seam carving errors."""


class ConstructionError(SeamCarvingError):
    """Buffer length is incompatible with the declared grid width."""


class SeamLengthError(SeamCarvingError):
    """A seam's length does not match the grid's current height."""


class CapacityError(SeamCarvingError):
    """Growth needs more distinct seams than the image can provide."""


class BoundsViolation(SeamCarvingError):
    """Target dimensions are outside what the resize strategy supports."""
