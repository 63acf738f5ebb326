"""Test the interpolation kernels and integer arithmetic helpers."""

import numpy as np
import pytest

from malvar_demosaic.composer import PHASE_KERNELS, Phase, Pixel, compose, project_luma
from malvar_demosaic.kernels import (
  ACCUMULATOR_DTYPE,
  GREEN_AT_NONGREEN,
  KERNELS,
  RED_BLUE_FROM_COLUMN,
  RED_BLUE_FROM_OPPOSITE,
  RED_BLUE_FROM_ROW,
  evaluate,
  evaluate_window,
  reduce_depth,
  saturate,
  truncate_divide,
  truncate_divide_array,
)


def test_kernel_weights():
  """Each kernel sums to its divisor and is point symmetric."""
  for kernel in KERNELS:
    weights = kernel.weights()
    assert weights.sum() == kernel.divisor, kernel.name
    np.testing.assert_array_equal(weights, weights[::-1, ::-1])

  np.testing.assert_array_equal(GREEN_AT_NONGREEN.weights()[2], [-1, 2, 4, 2, -1])
  np.testing.assert_array_equal(RED_BLUE_FROM_ROW.weights()[2], [-2, 8, 10, 8, -2])
  np.testing.assert_array_equal(RED_BLUE_FROM_COLUMN.weights()[:, 2], [-2, 8, 10, 8, -2])
  np.testing.assert_array_equal(RED_BLUE_FROM_COLUMN.weights(), RED_BLUE_FROM_ROW.weights().T)
  assert RED_BLUE_FROM_OPPOSITE.weights()[2, 2] == 12


def test_phase_kernels():
  """Exactly the native channel of each phase is sampled directly."""
  assert PHASE_KERNELS[Phase.RED][0] is None
  assert PHASE_KERNELS[Phase.GREEN_RED_ROW][1] is None
  assert PHASE_KERNELS[Phase.GREEN_BLUE_ROW][1] is None
  assert PHASE_KERNELS[Phase.BLUE][2] is None

  for kernels in PHASE_KERNELS.values():
    assert sum(kernel is None for kernel in kernels) == 1


def test_accumulator_range():
  """The accumulator holds sums of full scale 16-bit samples without wrapping."""
  total = np.array([0xFFFF], dtype=ACCUMULATOR_DTYPE) + 0xFFFE
  assert total[0] == 131069

  # largest positive weight sum of any kernel
  largest = max(int(np.clip(kernel.weights(), 0, None).sum()) for kernel in KERNELS)
  assert largest * 0xFFFF <= np.iinfo(ACCUMULATOR_DTYPE).max


@pytest.mark.parametrize('kernel', KERNELS, ids=lambda k: k.name)
def test_all_max_window(kernel):
  window = np.full((5, 12), 0xFFFF, dtype=ACCUMULATOR_DTYPE)
  values = evaluate_window(kernel, window, 2, 10)
  assert values.shape == (4,)
  np.testing.assert_array_equal(values, 0xFFFF)

  assert evaluate(kernel, lambda row, col: 0xFFFF, 0, 0, 0xFFFF) == 0xFFFF


def test_truncate_divide():
  assert truncate_divide(17, 8) == 2
  assert truncate_divide(-17, 8) == -2
  assert truncate_divide(-7, 8) == 0
  assert truncate_divide(16, 16) == 1

  totals = np.array([17, -17, -7, 0, 31], dtype=ACCUMULATOR_DTYPE)
  np.testing.assert_array_equal(truncate_divide_array(totals, 8), [2, -2, 0, 0, 3])


def test_saturate():
  assert saturate(-5, 4095) == 0
  assert saturate(0, 4095) == 0
  assert saturate(100, 4095) == 100
  assert saturate(4095, 4095) == 4095
  assert saturate(5000, 4095) == 4095


def test_reduce_depth():
  """Saturates to max_val, then shifts; the ceiling maps to max_val >> shift."""
  values = np.array([-20, 0, 15, 16, 4094, 4095, 9000], dtype=ACCUMULATOR_DTYPE)
  np.testing.assert_array_equal(reduce_depth(values, 4095, 4), [0, 0, 0, 1, 255, 255, 255])
  np.testing.assert_array_equal(reduce_depth(values, 4095, 0), [0, 0, 15, 16, 4094, 4095, 4095])

  # a ceiling that is not a multiple of the shift step
  np.testing.assert_array_equal(reduce_depth(np.array([1000, 999]), 1000, 2), [250, 249])


def test_evaluate_saturates():
  """A bright red site surrounded by dark samples drives green negative."""
  def sample_at(row, col):
    return 4095 if (row, col) == (0, 2) else 0

  # the -1 tap at (0, +2) is the only non-zero sample
  assert evaluate(GREEN_AT_NONGREEN, sample_at, 0, 0, 4095) == 0

  def bright_center(row, col):
    return 4095 if (row, col) == (0, 0) else 0

  # 12 * 4095 / 16 and 4 * 4095 / 8, truncated
  assert evaluate(RED_BLUE_FROM_OPPOSITE, bright_center, 0, 0, 4095) == 3071
  assert evaluate(GREEN_AT_NONGREEN, bright_center, 0, 0, 4095) == 2047


def test_evaluate_window_matches_evaluate():
  rng = np.random.default_rng(1)
  rows = rng.integers(0, 4096, size=(5, 20), dtype=np.int64)

  for kernel in KERNELS:
    window = rows.astype(ACCUMULATOR_DTYPE)
    fast = evaluate_window(kernel, window, 2, 18)
    for i, col in enumerate(range(2, 18, 2)):
      expected = evaluate(kernel, lambda r, c: int(rows[r + 2, c]), 0, col, 1 << 20)
      assert max(int(fast[i]), 0) == expected


def test_compose_flat_field():
  def sample_at(row, col):
    if row % 2 == 0 and col % 2 == 0:
      return 1000
    if row % 2 == 1 and col % 2 == 1:
      return 3000
    return 2000

  for phase, (row, col) in zip(Phase, [(0, 0), (0, 1), (1, 0), (1, 1)], strict=True):
    assert compose(sample_at, phase, row, col, 4095) == Pixel(1000, 2000, 3000)
    assert compose(sample_at, phase, row, col, 4095, shift=4) == Pixel(62, 125, 187)


def test_project_luma():
  assert project_luma(Pixel(0, 0, 0), (0.3, 0.6, 0.1)) == 0
  assert project_luma(Pixel(100, 100, 100), (0.25, 0.25, 0.25)) == 75
  # rounds half up
  assert project_luma(Pixel(1, 0, 0), (0.5, 0.0, 0.0)) == 1
  assert project_luma(Pixel(1, 0, 0), (0.49, 0.0, 0.0)) == 0
