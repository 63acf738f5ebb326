"""Malvar demosaicing of RGGB Bayer images into RGB or mono.

Every conversion has a row entry point, for consumers that work row by row
(such as streaming encoders), and a full-image entry point that fills the
whole output by demosaicing each row in order. All buffers are caller-owned
numpy arrays; outputs are fully overwritten.
"""

import logging

from beartype import beartype
import numpy as np

from .config import DemosaicParameters
from .contracts import validate
from .formats import Conversion
from .rows import fill_row, row_view
from .sampler import BayerImage

logger = logging.getLogger(__name__)


def demosaic_row(
  conversion: Conversion,
  bayer: np.ndarray | None,
  params: DemosaicParameters | None,
  row: int,
  output_row: np.ndarray | None,
  operation: str | None = None,
) -> None:
  """
  Demosaic one row of a Bayer image.

  The row index selects the Bayer phases (even rows are red-green, odd rows
  green-blue) and whether the row is close enough to the top or bottom edge
  to need bounds-safe sampling.

  Args:
      conversion: Input/output format
      bayer: Flat Bayer buffer of n_rows * n_cols samples
      params: Dimensions, max_val, shift and luma coefficients
      row: Row to demosaic, 0 <= row < n_rows
      output_row: Contiguous buffer of n_cols * channels output samples
      operation: Name reported on precondition violations
  """
  operation = operation or f'demosaic_row_{conversion.name}'
  validate(conversion, bayer, params, output_row, operation, row=row)
  assert bayer is not None and params is not None and output_row is not None

  image = BayerImage.from_buffer(bayer, params, operation, validated=True)
  fill_row(conversion, image, params, row, row_view(conversion, output_row, params.n_cols))


def demosaic_image(
  conversion: Conversion,
  bayer: np.ndarray | None,
  params: DemosaicParameters | None,
  output: np.ndarray | None,
  operation: str | None = None,
) -> None:
  """
  Demosaic a whole Bayer image, row by row.

  Args:
      conversion: Input/output format
      bayer: Flat Bayer buffer of n_rows * n_cols samples
      params: Dimensions, max_val, shift and luma coefficients
      output: Contiguous buffer of n_rows * n_cols * channels output samples
      operation: Name reported on precondition violations
  """
  operation = operation or f'demosaic_{conversion.name}'
  validate(conversion, bayer, params, output, operation)
  assert bayer is not None and params is not None and output is not None

  logger.debug('%s: %dx%d, max_val=%d', operation, params.n_cols, params.n_rows, params.max_val)

  image = BayerImage.from_buffer(bayer, params, operation, validated=True)
  if conversion.mono:
    rows = output.reshape(params.n_rows, params.n_cols)
  else:
    rows = output.reshape(params.n_rows, params.n_cols, conversion.channels)

  for row in range(params.n_rows):
    fill_row(conversion, image, params, row, rows[row])


# 16-bit to 16-bit RGB
@beartype
def demosaic_row_rgb16(
  bayer: np.ndarray | None, params: DemosaicParameters | None, row: int, output_row: np.ndarray | None
) -> None:
  """
  Demosaic a row of a 16-bit Bayer image into 16-bit RGB.

  Args:
      bayer: Input uint16 Bayer image, n_rows * n_cols samples
      params: Dimensions and maximum value of the image
      row: The row to demosaic
      output_row: uint16 output of n_cols RGB pixels, e.g. shape (n_cols, 3)
  """
  demosaic_row(Conversion.rgb16, bayer, params, row, output_row, 'demosaic_row_rgb16')


@beartype
def demosaic_rgb16(bayer: np.ndarray | None, params: DemosaicParameters | None, output: np.ndarray | None) -> None:
  """
  Demosaic a 16-bit Bayer image into 16-bit RGB.

  Args:
      bayer: Input uint16 Bayer image, n_rows * n_cols samples
      params: Dimensions and maximum value of the image
      output: uint16 output image, e.g. shape (n_rows, n_cols, 3)
  """
  demosaic_image(Conversion.rgb16, bayer, params, output, 'demosaic_rgb16')


# 8-bit to 8-bit RGB
@beartype
def demosaic_row_rgb8(
  bayer: np.ndarray | None, params: DemosaicParameters | None, row: int, output_row: np.ndarray | None
) -> None:
  """Demosaic a row of an 8-bit Bayer image into 8-bit RGB. max_val must be <= 255."""
  demosaic_row(Conversion.rgb8, bayer, params, row, output_row, 'demosaic_row_rgb8')


@beartype
def demosaic_rgb8(bayer: np.ndarray | None, params: DemosaicParameters | None, output: np.ndarray | None) -> None:
  """Demosaic an 8-bit Bayer image into 8-bit RGB. max_val must be <= 255."""
  demosaic_image(Conversion.rgb8, bayer, params, output, 'demosaic_rgb8')


# 16-bit to 8-bit RGB
@beartype
def demosaic_row_rgb16to8(
  bayer: np.ndarray | None, params: DemosaicParameters | None, row: int, output_row: np.ndarray | None
) -> None:
  """
  Demosaic a row of a 16-bit Bayer image into 8-bit RGB.

  Every channel is saturated to max_val and then shifted right by rshift,
  so rshift must be >= 0 and max_val >> rshift must fit in 8 bits.
  """
  demosaic_row(Conversion.rgb16to8, bayer, params, row, output_row, 'demosaic_row_rgb16to8')


@beartype
def demosaic_rgb16to8(
  bayer: np.ndarray | None, params: DemosaicParameters | None, output: np.ndarray | None
) -> None:
  """Demosaic a 16-bit Bayer image into 8-bit RGB, see `demosaic_row_rgb16to8`."""
  demosaic_image(Conversion.rgb16to8, bayer, params, output, 'demosaic_rgb16to8')


# 16-bit to 16-bit mono
@beartype
def demosaic_row_mono16(
  bayer: np.ndarray | None, params: DemosaicParameters | None, row: int, output_row: np.ndarray | None
) -> None:
  """
  Demosaic a row of a 16-bit Bayer image into 16-bit mono.

  The interpolated RGB pixel is projected with the normalized luma
  coefficients and rounded half up. Coefficients must each lie in [0, 1].
  """
  demosaic_row(Conversion.mono16, bayer, params, row, output_row, 'demosaic_row_mono16')


@beartype
def demosaic_mono16(bayer: np.ndarray | None, params: DemosaicParameters | None, output: np.ndarray | None) -> None:
  demosaic_image(Conversion.mono16, bayer, params, output, 'demosaic_mono16')


# 8-bit to 8-bit mono
@beartype
def demosaic_row_mono8(
  bayer: np.ndarray | None, params: DemosaicParameters | None, row: int, output_row: np.ndarray | None
) -> None:
  demosaic_row(Conversion.mono8, bayer, params, row, output_row, 'demosaic_row_mono8')


@beartype
def demosaic_mono8(bayer: np.ndarray | None, params: DemosaicParameters | None, output: np.ndarray | None) -> None:
  demosaic_image(Conversion.mono8, bayer, params, output, 'demosaic_mono8')


# 16-bit to 8-bit mono
@beartype
def demosaic_row_mono16to8(
  bayer: np.ndarray | None, params: DemosaicParameters | None, row: int, output_row: np.ndarray | None
) -> None:
  """Demosaic a row of a 16-bit Bayer image into 8-bit mono, shifting before the luma projection."""
  demosaic_row(Conversion.mono16to8, bayer, params, row, output_row, 'demosaic_row_mono16to8')


@beartype
def demosaic_mono16to8(
  bayer: np.ndarray | None, params: DemosaicParameters | None, output: np.ndarray | None
) -> None:
  demosaic_image(Conversion.mono16to8, bayer, params, output, 'demosaic_mono16to8')


ROW_ENTRY_POINTS = {
  Conversion.rgb16: demosaic_row_rgb16,
  Conversion.rgb8: demosaic_row_rgb8,
  Conversion.rgb16to8: demosaic_row_rgb16to8,
  Conversion.mono16: demosaic_row_mono16,
  Conversion.mono8: demosaic_row_mono8,
  Conversion.mono16to8: demosaic_row_mono16to8,
}

IMAGE_ENTRY_POINTS = {
  Conversion.rgb16: demosaic_rgb16,
  Conversion.rgb8: demosaic_rgb8,
  Conversion.rgb16to8: demosaic_rgb16to8,
  Conversion.mono16: demosaic_mono16,
  Conversion.mono8: demosaic_mono8,
  Conversion.mono16to8: demosaic_mono16to8,
}


__all__ = [
  'IMAGE_ENTRY_POINTS',
  'ROW_ENTRY_POINTS',
  'demosaic_image',
  'demosaic_mono8',
  'demosaic_mono16',
  'demosaic_mono16to8',
  'demosaic_rgb8',
  'demosaic_rgb16',
  'demosaic_rgb16to8',
  'demosaic_row',
  'demosaic_row_mono8',
  'demosaic_row_mono16',
  'demosaic_row_mono16to8',
  'demosaic_row_rgb8',
  'demosaic_row_rgb16',
  'demosaic_row_rgb16to8',
]
