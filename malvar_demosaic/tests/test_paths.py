"""Test that the vectorized interior path matches the bounds-safe path exactly."""

import numpy as np
import pytest

from malvar_demosaic import Conversion, DemosaicParameters, get_preset
from malvar_demosaic.demosaic import IMAGE_ENTRY_POINTS
from malvar_demosaic.rows import fast_row, row_view, safe_row, uses_safe_path
from malvar_demosaic.sampler import BayerImage

SHAPES = [(2, 2), (4, 4), (6, 6), (6, 8), (8, 6), (10, 4), (12, 18)]


def make_case(
  conversion: Conversion, n_rows: int, n_cols: int, seed: int = 0, max_val: int = 0x0FFF, extreme: bool = False
) -> tuple[np.ndarray, DemosaicParameters]:
  if conversion.eight_bit_input:
    max_val = min(max_val, 0xFF)
  rshift = max(max_val.bit_length() - 8, 0) if conversion.depth_reducing else 0
  params = DemosaicParameters(
    n_rows=n_rows, n_cols=n_cols, max_val=max_val, rshift=rshift, coefs=get_preset('ccir601')
  )

  rng = np.random.default_rng(seed)
  if extreme:
    # only black and full scale samples, the worst case for over and undershoot
    values = rng.integers(0, 2, size=n_rows * n_cols) * max_val
  else:
    values = rng.integers(0, max_val + 1, size=n_rows * n_cols)
  return values.astype(conversion.input_dtype), params


def empty_output(conversion: Conversion, params: DemosaicParameters) -> np.ndarray:
  return np.full(params.n_pixels * conversion.channels, 0xAA, dtype=conversion.output_dtype)


def safe_reference(conversion: Conversion, bayer: np.ndarray, params: DemosaicParameters) -> np.ndarray:
  """Demosaic every row through the bounds-safe path."""
  image = BayerImage.from_buffer(bayer, params)
  output = empty_output(conversion, params)
  rows = output.reshape(params.n_rows, -1)
  for row in range(params.n_rows):
    safe_row(conversion, image, params, row, row_view(conversion, rows[row], params.n_cols))
  return output


def test_safe_path_rows():
  assert uses_safe_path(0, 10)
  assert uses_safe_path(1, 10)
  assert not uses_safe_path(2, 10)
  assert not uses_safe_path(7, 10)
  assert uses_safe_path(8, 10)
  assert uses_safe_path(9, 10)

  # every row of a 4-row image is within two rows of an edge
  assert all(uses_safe_path(row, 4) for row in range(4))


@pytest.mark.parametrize('conversion', list(Conversion), ids=lambda c: c.name)
@pytest.mark.parametrize('shape', SHAPES, ids=lambda s: f'{s[0]}x{s[1]}')
def test_paths_match(conversion, shape):
  """Full image output is identical to running the safe path on every row."""
  n_rows, n_cols = shape
  bayer, params = make_case(conversion, n_rows, n_cols, seed=n_rows * 100 + n_cols)

  output = empty_output(conversion, params)
  IMAGE_ENTRY_POINTS[conversion](bayer, params, output)

  np.testing.assert_array_equal(output, safe_reference(conversion, bayer, params))


@pytest.mark.parametrize('conversion', list(Conversion), ids=lambda c: c.name)
def test_fast_row_matches_safe_row(conversion):
  """Row by row comparison for interior rows, including the edge columns."""
  bayer, params = make_case(conversion, 10, 14, seed=7)
  image = BayerImage.from_buffer(bayer, params)

  for row in range(2, params.n_rows - 2):
    fast = empty_output(conversion, params)[: params.n_cols * conversion.channels]
    safe = fast.copy()
    fast_row(conversion, image, params, row, row_view(conversion, fast, params.n_cols))
    safe_row(conversion, image, params, row, row_view(conversion, safe, params.n_cols))
    np.testing.assert_array_equal(fast, safe, err_msg=f'row {row}')


def test_fast_row_rejects_edge_rows():
  bayer, params = make_case(Conversion.rgb16, 8, 8)
  image = BayerImage.from_buffer(bayer, params)
  out_row = np.zeros((8, 3), dtype=np.uint16)
  with pytest.raises(AssertionError):
    fast_row(Conversion.rgb16, image, params, 1, out_row)


@pytest.mark.parametrize('conversion', list(Conversion), ids=lambda c: c.name)
@pytest.mark.parametrize('extreme', [False, True], ids=['random', 'extreme'])
def test_paths_match_full_scale(conversion, extreme):
  """Full 16-bit range, where the kernel sums are largest."""
  bayer, params = make_case(conversion, 8, 10, seed=3, max_val=0xFFFF, extreme=extreme)

  output = empty_output(conversion, params)
  IMAGE_ENTRY_POINTS[conversion](bayer, params, output)

  np.testing.assert_array_equal(output, safe_reference(conversion, bayer, params))


@pytest.mark.parametrize('conversion', list(Conversion), ids=lambda c: c.name)
@pytest.mark.parametrize('extreme', [False, True], ids=['random', 'extreme'])
def test_saturation_bound(conversion, extreme):
  """No output sample exceeds max_val, or max_val >> rshift after depth reduction."""
  bayer, params = make_case(conversion, 24, 32, seed=11, extreme=extreme)

  output = empty_output(conversion, params)
  IMAGE_ENTRY_POINTS[conversion](bayer, params, output)

  ceiling = params.max_val >> params.rshift if conversion.depth_reducing else params.max_val
  assert int(output.max()) <= ceiling
  if extreme and not conversion.mono:
    # black and white input overshoots and undershoots, so both limits are reached
    assert int(output.max()) == ceiling
    assert int(output.min()) == 0
