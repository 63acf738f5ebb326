"""Combine raw samples and kernel outputs into RGB pixels by Bayer phase."""

from collections.abc import Callable
from enum import Enum
from typing import NamedTuple

from .kernels import (
  GREEN_AT_NONGREEN,
  RED_BLUE_FROM_COLUMN,
  RED_BLUE_FROM_OPPOSITE,
  RED_BLUE_FROM_ROW,
  Kernel,
  evaluate,
)


class Phase(Enum):
  RED = 0
  GREEN_RED_ROW = 1
  GREEN_BLUE_ROW = 2
  BLUE = 3


class Pixel(NamedTuple):
  red: int
  green: int
  blue: int


# per phase, the kernel for each of (red, green, blue), None for the native channel
PHASE_KERNELS: dict[Phase, tuple[Kernel | None, Kernel | None, Kernel | None]] = {
  Phase.RED: (None, GREEN_AT_NONGREEN, RED_BLUE_FROM_OPPOSITE),
  Phase.GREEN_RED_ROW: (RED_BLUE_FROM_ROW, None, RED_BLUE_FROM_COLUMN),
  Phase.GREEN_BLUE_ROW: (RED_BLUE_FROM_COLUMN, None, RED_BLUE_FROM_ROW),
  Phase.BLUE: (RED_BLUE_FROM_OPPOSITE, GREEN_AT_NONGREEN, None),
}


def phase_at(row: int, col: int) -> Phase:
  if row % 2 == 0:
    return Phase.RED if col % 2 == 0 else Phase.GREEN_RED_ROW
  return Phase.GREEN_BLUE_ROW if col % 2 == 0 else Phase.BLUE


def row_phases(row: int) -> tuple[Phase, Phase]:
  """The two phases alternating along a row, starting at column 0."""
  if row % 2 == 0:
    return (Phase.RED, Phase.GREEN_RED_ROW)
  return (Phase.GREEN_BLUE_ROW, Phase.BLUE)


def compose(
  sample_at: Callable[[int, int], int], phase: Phase, row: int, col: int, max_val: int, shift: int = 0
) -> Pixel:
  """
  Interpolate the RGB pixel at (row, col).

  Args:
      sample_at: Returns the sample at (row, col)
      phase: Bayer phase of (row, col)
      row: Row of the pixel
      col: Column of the pixel
      max_val: Saturation ceiling for interpolated channels
      shift: Right shift applied to every channel after saturation

  Returns:
      The composed pixel
  """
  channels = [
    sample_at(row, col) if kernel is None else evaluate(kernel, sample_at, row, col, max_val)
    for kernel in PHASE_KERNELS[phase]
  ]
  return Pixel(*(value >> shift for value in channels))


def project_luma(pixel: Pixel, weights: tuple[float, float, float]) -> int:
  """Weighted sum of the channels, rounded half up. No clamp, weights sum below 1."""
  red, green, blue = weights
  return int(red * pixel.red + green * pixel.green + blue * pixel.blue + 0.5)


__all__ = ['PHASE_KERNELS', 'Phase', 'Pixel', 'compose', 'phase_at', 'project_luma', 'row_phases']
