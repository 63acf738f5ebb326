"""Bounds-safe sampling of RGGB Bayer images."""

from dataclasses import dataclass

import numpy as np

from .config import DemosaicParameters
from .contracts import check_dimensions
from .errors import Violation, ViolationKind, report


@dataclass(frozen=True)
class BayerImage:
  """Read-only view of a row-major single channel RGGB mosaic.

  (even row, even col) is red, (odd row, odd col) is blue, the rest green.
  """

  data: np.ndarray
  n_rows: int
  n_cols: int
  max_val: int

  @classmethod
  def from_buffer(
    cls, bayer: np.ndarray, params: DemosaicParameters, operation: str = 'BayerImage', *, validated: bool = False
  ) -> 'BayerImage':
    """Wrap a contiguous buffer. Dimensions are checked unless the caller already validated them."""
    if not validated:
      check_dimensions(params, operation)
    return cls(bayer.reshape(-1), params.n_rows, params.n_cols, params.max_val)

  def rows(self) -> np.ndarray:
    """The buffer as an (n_rows, n_cols) view."""
    return self.data.reshape(self.n_rows, self.n_cols)


def reflect(index: int, size: int) -> int:
  """Map an out of range index to the nearest in-range index of the same parity."""
  if index < 0:
    return (-index) % 2
  if index >= size:
    return size - 2 + (index % 2)
  return index


def sample(image: BayerImage, row: int, col: int) -> int:
  """
  Get a sample, reflecting out of bounds coordinates onto the closest
  in-bounds pixel of the same Bayer color.

  Reflection keeps parity rather than mirroring geometrically, so the
  kernels always see the color they expect at each offset.
  """
  if image is None:
    report(Violation(ViolationKind.NULL_BUFFER, 'image', None, 'image is not None', 'sample'))
  return int(image.data[reflect(row, image.n_rows) * image.n_cols + reflect(col, image.n_cols)])


__all__ = ['BayerImage', 'reflect', 'sample']
