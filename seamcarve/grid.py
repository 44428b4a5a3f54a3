"""
Dense 2-D grid over a flat tensor buffer.

A grid stores ``width * height`` elements in a tensor of shape
(width * height, *element_shape). Logical coordinate (x, y) is
(column, row) and lives at flat offset ``x + y * width``.

The same class backs every grid in the package:
- pixel grids: uint8, element shape (3,)
- energy grids: int64, scalar elements
- position maps: int64, element shape (2,) holding (original_x, original_y)
"""

import torch
from typing import Sequence, Tuple, Union

from .errors import ConstructionError, SeamLengthError


SeamLike = Union[torch.Tensor, Sequence[int]]


def check_seam(seam: SeamLike, width: int, height: int) -> torch.Tensor:
    """
    Validate a seam against grid dimensions and return it as a long tensor.

    Raises:
        SeamLengthError: if len(seam) != height
        IndexError: if an entry is outside [0, width)
    """
    seam = torch.as_tensor(seam, dtype=torch.long).reshape(-1)
    if seam.shape[0] != height:
        raise SeamLengthError(
            f"seam length should be equal to grid height, "
            f"got {seam.shape[0]} and {height}")
    if seam.numel() and (seam.min() < 0 or seam.max() >= width):
        raise IndexError(
            f"seam column out of range for width {width}: {seam.tolist()}")
    return seam


class Grid:
    """
    Rectangular grid addressed by (x, y).

    Transposition physically reorders the buffer, so indexing is always
    plain row-major and seam removal never needs to know which axis the
    grid originally came from.
    """

    def __init__(self, width: int, data):
        """
        Args:
            width: Number of columns (>= 1)
            data: Flat buffer (tensor or nested sequence) whose first
                  dimension is width * height

        Raises:
            ConstructionError: if the buffer length is not a multiple of width
        """
        data = torch.as_tensor(data)
        if data.dim() == 0:
            raise ConstructionError("grid data must be at least one-dimensional")
        if width < 1:
            raise ConstructionError(f"grid width must be positive, got {width}")
        if data.shape[0] % width != 0:
            raise ConstructionError(
                f"length of data ({data.shape[0]}) and width ({width}) "
                f"are not compatible")
        self._width = int(width)
        self.data = data.contiguous()

    @classmethod
    def from_tensor(cls, tensor: torch.Tensor) -> 'Grid':
        """Build a grid from a (height, width, *element_shape) tensor."""
        if tensor.dim() < 2:
            raise ConstructionError(
                f"expected a (H, W, ...) tensor, got shape {tuple(tensor.shape)}")
        H, W = tensor.shape[0], tensor.shape[1]
        return cls(W, tensor.reshape(H * W, *tensor.shape[2:]))

    @classmethod
    def positions(cls, width: int, height: int) -> 'Grid':
        """Position map where every cell holds its own (x, y) coordinate."""
        ys, xs = torch.meshgrid(torch.arange(height), torch.arange(width),
                                indexing='ij')
        return cls.from_tensor(torch.stack([xs, ys], dim=-1))

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self.data.shape[0] // self._width

    @property
    def size(self) -> int:
        return self.data.shape[0]

    @property
    def dimensions(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def element_shape(self) -> Tuple[int, ...]:
        return tuple(self.data.shape[1:])

    @property
    def dtype(self) -> torch.dtype:
        return self.data.dtype

    def as_tensor(self) -> torch.Tensor:
        """(height, width, *element_shape) view sharing this grid's storage."""
        return self.data.view(self.height, self.width, *self.element_shape)

    def copy(self) -> 'Grid':
        return Grid(self._width, self.data.clone())

    def __getitem__(self, index: Tuple[int, int]) -> torch.Tensor:
        x, y = index
        return self.data[x + y * self._width]

    def __setitem__(self, index: Tuple[int, int], value):
        x, y = index
        self.data[x + y * self._width] = torch.as_tensor(value, dtype=self.data.dtype)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (self.dimensions == other.dimensions
                and self.element_shape == other.element_shape
                and torch.equal(self.data, other.data))

    __hash__ = None

    def __repr__(self) -> str:
        return (f"Grid(width={self.width}, height={self.height}, "
                f"dtype={self.dtype}, element_shape={self.element_shape})")

    def transpose(self):
        """
        Swap rows and columns in place.

        The element at (x, y) before the call is at (y, x) afterwards.
        """
        H, W = self.height, self.width
        transposed = self.as_tensor().transpose(0, 1).contiguous()
        self.data = transposed.reshape(W * H, *self.element_shape)
        self._width = H

    def _check_seam(self, seam: SeamLike) -> torch.Tensor:
        return check_seam(seam, self.width, self.height)

    def remove_seam(self, seam: SeamLike):
        """
        Remove one element per row in place.

        Args:
            seam: Column index per row, length == height

        Raises:
            SeamLengthError: if len(seam) != height
            IndexError: if a seam entry is outside [0, width)
            ValueError: if the grid is only one column wide
        """
        seam = self._check_seam(seam)
        if self.width == 1:
            raise ValueError("cannot remove a seam from a grid of width 1")

        H, W = self.height, self.width
        keep = torch.ones(H, W, dtype=torch.bool)
        keep[torch.arange(H), seam] = False
        # Boolean indexing walks rows in order, so row/column order survives
        self.data = self.as_tensor()[keep].reshape(H * (W - 1), *self.element_shape)
        self._width = W - 1

    def insert_seams(self, seams: Sequence[SeamLike], blend: bool = True):
        """
        Insert k seams in one pass, growing the width by k.

        Seams are given in this grid's current coordinates. In each row the
        marked columns are visited left to right and a new element is placed
        immediately to the left of every marked column, so earlier insertions
        never shift the columns recorded for later ones.

        Args:
            seams: k seams, each with one column per row
            blend: If True, the new element is the average of the marked
                   element and its left neighbor; otherwise a copy of the
                   marked element

        Raises:
            SeamLengthError: if any seam's length != height
            ValueError: if two seams mark the same element
        """
        checked = [self._check_seam(seam) for seam in seams]
        k = len(checked)
        if k == 0:
            return

        H, W = self.height, self.width
        rows = torch.arange(H)
        marks = torch.zeros(H, W, dtype=torch.bool)
        for seam in checked:
            marks[rows, seam] = True
        if int(marks.sum()) != k * H:
            raise ValueError("seams to insert must not share any element")

        grid = self.as_tensor()
        if blend:
            left = torch.cat([grid[:, :1], grid[:, :-1]], dim=1)
            if grid.dtype.is_floating_point:
                inserted = (left + grid) / 2
            else:
                inserted = (left.long() + grid.long()) // 2
            inserted = inserted.to(grid.dtype)
        else:
            inserted = grid

        # Number of insertions at or before each column in its row
        shift = torch.cumsum(marks.long(), dim=1)
        cols = torch.arange(W).unsqueeze(0).expand(H, W)
        row_idx = rows.unsqueeze(1).expand(H, W)

        out = torch.zeros(H, W + k, *self.element_shape, dtype=grid.dtype)
        out[row_idx, cols + shift] = grid
        out[row_idx[marks], (cols + shift - 1)[marks]] = inserted[marks]

        self.data = out.reshape(H * (W + k), *self.element_shape)
        self._width = W + k
