"""The supported input/output sample formats."""

from dataclasses import dataclass
from enum import Enum

import numpy as np


@dataclass(frozen=True)
class Format:
  input_dtype: type[np.unsignedinteger]
  output_dtype: type[np.unsignedinteger]
  channels: int
  depth_reducing: bool


class Conversion(Enum):
  rgb16 = Format(np.uint16, np.uint16, 3, False)
  rgb8 = Format(np.uint8, np.uint8, 3, False)
  rgb16to8 = Format(np.uint16, np.uint8, 3, True)
  mono16 = Format(np.uint16, np.uint16, 1, False)
  mono8 = Format(np.uint8, np.uint8, 1, False)
  mono16to8 = Format(np.uint16, np.uint8, 1, True)

  @property
  def input_dtype(self) -> np.dtype:
    return np.dtype(self.value.input_dtype)

  @property
  def output_dtype(self) -> np.dtype:
    return np.dtype(self.value.output_dtype)

  @property
  def channels(self) -> int:
    return self.value.channels

  @property
  def mono(self) -> bool:
    return self.value.channels == 1

  @property
  def depth_reducing(self) -> bool:
    return self.value.depth_reducing

  @property
  def eight_bit_input(self) -> bool:
    return self.input_dtype == np.uint8


__all__ = ['Conversion', 'Format']
