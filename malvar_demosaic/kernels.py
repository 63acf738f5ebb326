"""Malvar-He-Cutler interpolation kernels.

H. S. Malvar, Li-wei He and R. Cutler, "High-quality linear interpolation for
demosaicing of Bayer-patterned color images", ICASSP 2004.
See also P. Getreuer, "Malvar-He-Cutler Linear Image Demosaicking", IPOL 2011.

Every kernel has a 5x5 support and integer weights. A kernel is evaluated as
an integer dot product, divided by its divisor with truncation toward zero,
then saturated to [0, max_val]. Negative weights can push the sum outside the
valid range, saturation is ordinary processing rather than an error.
"""

from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

# 28 * 0xFFFF is the largest possible magnitude of any kernel sum
ACCUMULATOR_DTYPE = np.int32


@dataclass(frozen=True)
class Kernel:
  name: str
  taps: tuple[tuple[int, int, int], ...]  # (row offset, col offset, weight)
  divisor: int

  def weights(self) -> np.ndarray:
    """The kernel as a dense 5x5 array, for display and testing."""
    dense = np.zeros((5, 5), dtype=ACCUMULATOR_DTYPE)
    for d_row, d_col, weight in self.taps:
      dense[d_row + 2, d_col + 2] = weight
    return dense


# G at R and B locations
#       -1
#       +2
# -1 +2 +4 +2 -1
#       +2
#       -1
GREEN_AT_NONGREEN = Kernel(
  'green_at_nongreen',
  (
    (-2, 0, -1),
    (-1, 0, +2),
    (0, -2, -1),
    (0, -1, +2),
    (0, 0, +4),
    (0, +1, +2),
    (0, +2, -1),
    (+1, 0, +2),
    (+2, 0, -1),
  ),
  8,
)

# R at green in R row, B at green in B row
#       +1
#    -2     -2
# -2 +8 +10 +8 -2
#    -2     -2
#       +1
RED_BLUE_FROM_ROW = Kernel(
  'red_blue_from_row',
  (
    (-2, 0, +1),
    (-1, -1, -2),
    (-1, +1, -2),
    (0, -2, -2),
    (0, -1, +8),
    (0, 0, +10),
    (0, +1, +8),
    (0, +2, -2),
    (+1, -1, -2),
    (+1, +1, -2),
    (+2, 0, +1),
  ),
  16,
)

# R at green in B row, B at green in R row
#       -2
#    -2 +8 -2
# +1   +10    +1
#    -2 +8 -2
#       -2
RED_BLUE_FROM_COLUMN = Kernel(
  'red_blue_from_column',
  (
    (-2, 0, -2),
    (-1, -1, -2),
    (-1, 0, +8),
    (-1, +1, -2),
    (0, -2, +1),
    (0, 0, +10),
    (0, +2, +1),
    (+1, -1, -2),
    (+1, 0, +8),
    (+1, +1, -2),
    (+2, 0, -2),
  ),
  16,
)

# R at B locations, B at R locations
#       -3
#    +4    +4
# -3   +12    -3
#    +4    +4
#       -3
RED_BLUE_FROM_OPPOSITE = Kernel(
  'red_blue_from_opposite',
  (
    (-2, 0, -3),
    (-1, -1, +4),
    (-1, +1, +4),
    (0, -2, -3),
    (0, 0, +12),
    (0, +2, -3),
    (+1, -1, +4),
    (+1, +1, +4),
    (+2, 0, -3),
  ),
  16,
)

KERNELS = (GREEN_AT_NONGREEN, RED_BLUE_FROM_ROW, RED_BLUE_FROM_COLUMN, RED_BLUE_FROM_OPPOSITE)


def truncate_divide(total: int, divisor: int) -> int:
  """Integer division rounding toward zero."""
  if total < 0:
    return -(-total // divisor)
  return total // divisor


def truncate_divide_array(total: np.ndarray, divisor: int) -> np.ndarray:
  return np.where(total < 0, -(-total // divisor), total // divisor)


def saturate(value: int, max_val: int) -> int:
  """Constrain to [0, max_val], inclusive."""
  if value >= max_val:
    return max_val
  if value <= 0:
    return 0
  return value


def reduce_depth(values: np.ndarray, max_val: int, shift: int) -> np.ndarray:
  """
  Saturate to [0, max_val] and right shift, in one pass.

  The ceiling is shifted once up front, so values at or above max_val map
  straight to `max_val >> shift` rather than being shifted before the clamp.
  """
  ceiling = max_val >> shift
  return np.where(values >= max_val, ceiling, np.where(values <= 0, 0, values >> shift))


def evaluate(kernel: Kernel, sample_at: Callable[[int, int], int], row: int, col: int, max_val: int) -> int:
  """
  Evaluate a kernel at one pixel.

  Args:
      kernel: The kernel to apply
      sample_at: Returns the sample at (row, col), handling out of bounds coordinates
      row: Row of the output pixel
      col: Column of the output pixel
      max_val: Saturation ceiling

  Returns:
      Interpolated value in [0, max_val]
  """
  total = 0
  for d_row, d_col, weight in kernel.taps:
    total += sample_at(row + d_row, col + d_col) * weight
  return saturate(truncate_divide(total, kernel.divisor), max_val)


def evaluate_window(kernel: Kernel, window: np.ndarray, start: int, stop: int) -> np.ndarray:
  """
  Evaluate a kernel along the center row of a 5-row window, without bounds checks.

  Args:
      kernel: The kernel to apply
      window: (5, n_cols) accumulator-typed rows, centered on the output row
      start: First output column, must be >= 2
      stop: End of the output columns (exclusive), must be <= n_cols - 2

  Returns:
      Truncated quotients for columns start, start + 2, ... < stop, not saturated
  """
  total = np.zeros(len(range(start, stop, 2)), dtype=ACCUMULATOR_DTYPE)
  for d_row, d_col, weight in kernel.taps:
    total += window[2 + d_row, start + d_col : stop + d_col : 2] * weight
  return truncate_divide_array(total, kernel.divisor)


__all__ = [
  'ACCUMULATOR_DTYPE',
  'GREEN_AT_NONGREEN',
  'KERNELS',
  'RED_BLUE_FROM_COLUMN',
  'RED_BLUE_FROM_OPPOSITE',
  'RED_BLUE_FROM_ROW',
  'Kernel',
  'evaluate',
  'evaluate_window',
  'reduce_depth',
  'saturate',
  'truncate_divide',
  'truncate_divide_array',
]
