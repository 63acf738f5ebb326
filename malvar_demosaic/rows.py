"""Row traversal: a boundary-safe path and a vectorized interior path.

Both paths evaluate the same kernel table. The safe path reads every sample
through `sample`, which reflects out of bounds coordinates. The fast path is
used for rows at least two away from the top and bottom edges: it handles the
two columns at each side with the safe composer and evaluates all interior
columns at once from numpy slices of the five rows around the output row.
The two paths produce identical output.
"""

from functools import partial

import numpy as np

from .composer import PHASE_KERNELS, Phase, Pixel, compose, project_luma, row_phases
from .config import DemosaicParameters
from .formats import Conversion
from .kernels import ACCUMULATOR_DTYPE, evaluate_window, reduce_depth
from .sampler import BayerImage, sample


def uses_safe_path(row: int, n_rows: int) -> bool:
  """Rows whose kernel support would cross the top or bottom edge."""
  return row < 2 or row >= n_rows - 2


def depth_shift(conversion: Conversion, params: DemosaicParameters) -> int:
  return params.rshift if conversion.depth_reducing else 0


def luma_weights(conversion: Conversion, params: DemosaicParameters) -> tuple[float, float, float] | None:
  if not conversion.mono:
    return None
  assert params.coefs is not None
  return params.coefs.normalized()


def _emit(out_row: np.ndarray, col: int, pixel: Pixel, weights: tuple[float, float, float] | None) -> None:
  if weights is None:
    out_row[col] = pixel
  else:
    out_row[col] = project_luma(pixel, weights)


def _compose_safe(
  image: BayerImage,
  row: int,
  cols: range | tuple[int, ...],
  out_row: np.ndarray,
  shift: int,
  weights: tuple[float, float, float] | None,
) -> None:
  sample_at = partial(sample, image)
  phases = row_phases(row)
  for col in cols:
    _emit(out_row, col, compose(sample_at, phases[col % 2], row, col, image.max_val, shift), weights)


def safe_row(
  conversion: Conversion, image: BayerImage, params: DemosaicParameters, row: int, out_row: np.ndarray
) -> None:
  """
  Demosaic one row reading every sample through the reflecting sampler.

  Args:
      conversion: Output format
      image: Input mosaic
      params: Demosaic parameters, already validated
      row: Row to demosaic
      out_row: (n_cols, 3) view for RGB, (n_cols,) for mono
  """
  weights = luma_weights(conversion, params)
  _compose_safe(image, row, range(image.n_cols), out_row, depth_shift(conversion, params), weights)


def _interior_channels(
  window: np.ndarray, phase: Phase, start: int, stop: int, max_val: int, shift: int
) -> list[np.ndarray]:
  channels = []
  for kernel in PHASE_KERNELS[phase]:
    if kernel is None:
      channels.append(window[2, start:stop:2] >> shift)
    else:
      channels.append(reduce_depth(evaluate_window(kernel, window, start, stop), max_val, shift))
  return channels


def _project_luma_interior(channels: list[np.ndarray], weights: tuple[float, float, float]) -> np.ndarray:
  # same operation order as project_luma, so results match bit for bit
  red, green, blue = channels
  w_red, w_green, w_blue = weights
  return w_red * red + w_green * green + w_blue * blue + 0.5


def fast_row(
  conversion: Conversion, image: BayerImage, params: DemosaicParameters, row: int, out_row: np.ndarray
) -> None:
  """Demosaic an interior row, 2 <= row < n_rows - 2."""
  assert not uses_safe_path(row, image.n_rows), f'row {row} needs the safe path'

  n_cols = image.n_cols
  shift = depth_shift(conversion, params)
  weights = luma_weights(conversion, params)

  # left and right edges
  _compose_safe(image, row, (0, 1, n_cols - 2, n_cols - 1), out_row, shift, weights)

  window = image.rows()[row - 2 : row + 3].astype(ACCUMULATOR_DTYPE)
  stop = n_cols - 2
  for offset, phase in enumerate(row_phases(row)):
    start = 2 + offset
    if start >= stop:
      continue

    channels = _interior_channels(window, phase, start, stop, image.max_val, shift)
    if weights is None:
      out_row[start:stop:2] = np.stack(channels, axis=-1).astype(out_row.dtype)
    else:
      out_row[start:stop:2] = _project_luma_interior(channels, weights).astype(out_row.dtype)


def fill_row(
  conversion: Conversion, image: BayerImage, params: DemosaicParameters, row: int, out_row: np.ndarray
) -> None:
  if uses_safe_path(row, image.n_rows):
    safe_row(conversion, image, params, row, out_row)
  else:
    fast_row(conversion, image, params, row, out_row)


def row_view(conversion: Conversion, buffer: np.ndarray, n_cols: int) -> np.ndarray:
  """Reshape a contiguous output row without copying."""
  if conversion.mono:
    return buffer.reshape(n_cols)
  return buffer.reshape(n_cols, conversion.channels)


__all__ = ['depth_shift', 'fast_row', 'fill_row', 'luma_weights', 'row_view', 'safe_row', 'uses_safe_path']
