"""Precondition checks shared by every public demosaic operation.

Each public entry point validates once per call, before any sample is read.
A failed check is reported through the fault hook and never returns.
"""

from typing import Any

import numpy as np

from .config import U8_MAX, DemosaicParameters
from .errors import Violation, ViolationKind, report
from .formats import Conversion


def check(condition: bool, kind: ViolationKind, field: str, value: Any, expression: str, operation: str) -> None:
  if not condition:
    report(Violation(kind=kind, field=field, value=value, expression=expression, operation=operation))


def check_dimensions(params: DemosaicParameters, operation: str) -> None:
  """At least 2x2, even number of rows and columns."""
  dim = ViolationKind.DIMENSION
  check(params.n_cols >= 2, dim, 'n_cols', params.n_cols, 'n_cols >= 2', operation)
  check(params.n_rows >= 2, dim, 'n_rows', params.n_rows, 'n_rows >= 2', operation)
  check(params.n_cols % 2 == 0, dim, 'n_cols', params.n_cols, 'n_cols % 2 == 0', operation)
  check(params.n_rows % 2 == 0, dim, 'n_rows', params.n_rows, 'n_rows % 2 == 0', operation)


def check_buffer(
  buffer: np.ndarray, name: str, dtype: np.dtype, size: int, operation: str, *, writeable: bool = False
) -> None:
  layout = ViolationKind.BUFFER_LAYOUT
  check(buffer.dtype == dtype, ViolationKind.DTYPE, name, str(buffer.dtype), f'{name}.dtype == {dtype}', operation)
  check(buffer.size == size, layout, name, buffer.size, f'{name}.size == {size}', operation)
  check(buffer.flags.c_contiguous, layout, name, buffer.shape, f'{name} is C-contiguous', operation)
  if writeable:
    check(buffer.flags.writeable, layout, name, buffer.shape, f'{name} is writeable', operation)


def check_luma(params: DemosaicParameters, operation: str) -> None:
  luma = ViolationKind.LUMA_COEFFICIENT
  coefs = params.coefs
  check(coefs is not None, luma, 'coefs', None, 'coefs is not None', operation)
  assert coefs is not None

  for name in ('red', 'green', 'blue'):
    value = getattr(coefs, name)
    check(0.0 <= value <= 1.0, luma, f'coefs.{name}', value, f'0 <= coefs.{name} <= 1', operation)

  total = sum(coefs.normalized())
  check(total < 1.0, luma, 'coefs', total, 'sum(normalized coefs) < 1', operation)


def validate(
  conversion: Conversion,
  bayer: np.ndarray | None,
  params: DemosaicParameters | None,
  output: np.ndarray | None,
  operation: str,
  row: int | None = None,
) -> None:
  """
  Validate the arguments of a row or full-image demosaic call.

  Args:
      conversion: The input/output format of the operation
      bayer: Flat input Bayer buffer
      params: Demosaic parameters
      output: Output buffer, one row if `row` is given, else the whole image
      operation: Name of the public operation, reported on failure
      row: Row index for row entry points
  """
  null = ViolationKind.NULL_BUFFER
  output_name = 'output' if row is None else 'output_row'
  check(bayer is not None, null, 'bayer', None, 'bayer is not None', operation)
  check(params is not None, null, 'params', None, 'params is not None', operation)
  check(output is not None, null, output_name, None, f'{output_name} is not None', operation)
  assert bayer is not None and params is not None and output is not None

  check_dimensions(params, operation)

  if row is not None:
    check(0 <= row < params.n_rows, ViolationKind.ROW_RANGE, 'row', row, f'0 <= row < {params.n_rows}', operation)

  check_buffer(bayer, 'bayer', conversion.input_dtype, params.n_pixels, operation)
  output_size = (params.n_cols if row is not None else params.n_pixels) * conversion.channels
  check_buffer(output, output_name, conversion.output_dtype, output_size, operation, writeable=True)

  if conversion.eight_bit_input:
    check(
      params.max_val <= U8_MAX, ViolationKind.MAX_VALUE, 'max_val', params.max_val, f'max_val <= {U8_MAX}', operation
    )

  if conversion.depth_reducing:
    check(params.rshift >= 0, ViolationKind.SHIFT, 'rshift', params.rshift, 'rshift >= 0', operation)
    check(
      (params.max_val >> params.rshift) <= U8_MAX,
      ViolationKind.SHIFT,
      'rshift',
      (params.max_val, params.rshift),
      f'(max_val >> rshift) <= {U8_MAX}',
      operation,
    )

  if conversion.mono:
    check_luma(params, operation)


__all__ = ['check', 'check_buffer', 'check_dimensions', 'check_luma', 'validate']
