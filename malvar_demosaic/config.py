"""Parameter models for demosaicing calls."""

from pathlib import Path
from typing import Annotated

from beartype import beartype
from pydantic import BaseModel, GetCoreSchemaHandler
from pydantic_core import core_schema

I32_MIN = -(2**31)
I32_MAX = 2**31 - 1
U16_MAX = 0xFFFF
U8_MAX = 0xFF

# added to the coefficient sum before normalizing, guards against all-zero weights
LUMA_EPSILON = 0.000001


class Validator:
  """Base class for all field validators."""
  description: str


class Int(Validator):
  def __init__(self, range: tuple[int, int], description: str):
    self.range = range
    self.description = description

  def __get_pydantic_core_schema__(self, _source_type, _handler: GetCoreSchemaHandler):
    def validate(v: int):
      if isinstance(v, bool) or (isinstance(v, float) and not v.is_integer()):
        raise ValueError(f'{v!r} is not an integer')
      v = int(v)
      if not (self.range[0] <= v <= self.range[1]):
        raise ValueError(f'{v} not in [{self.range[0]}, {self.range[1]}]')
      return v
    return core_schema.no_info_plain_validator_function(validate)


class LumaCoefficients(BaseModel, frozen=True):
  """Weights for projecting RGB onto a single luma channel.

  Each weight should lie in [0, 1]; this is checked when a mono conversion
  runs, not here, so that bad weights reach the fault hook.
  """

  red: float
  green: float
  blue: float

  def normalized(self) -> tuple[float, float, float]:
    """Weights scaled to sum to just under 1. Recomputed on every call."""
    total = self.red + self.green + self.blue + LUMA_EPSILON
    return (self.red / total, self.green / total, self.blue / total)


class DemosaicParameters(BaseModel, frozen=True):
  n_rows: Annotated[int, Int(range=(I32_MIN, I32_MAX), description='Rows in the Bayer image')]
  n_cols: Annotated[int, Int(range=(I32_MIN, I32_MAX), description='Columns in the Bayer image')]

  # no input sample may exceed this, and no output will, i.e. 0x0FFF for 12-bit data
  max_val: Annotated[int, Int(range=(0, U16_MAX), description='Maximum sample value')]

  # right shift when reducing 16-bit input to 8-bit output, i.e. 4 for 12 to 8 bits
  rshift: Annotated[int, Int(range=(I32_MIN, I32_MAX), description='Depth reduction shift')] = 0

  coefs: LumaCoefficients | None = None

  @property
  def n_pixels(self) -> int:
    return self.n_rows * self.n_cols

  @beartype
  def save_json(self, path: Path) -> None:
    """Save parameters to a JSON file."""
    path.write_text(self.model_dump_json(indent=2))

  @classmethod
  @beartype
  def load_json(cls, path: Path) -> 'DemosaicParameters':
    """Load parameters from a JSON file."""
    return cls.model_validate_json(path.read_text())


__all__ = [
  'I32_MAX',
  'I32_MIN',
  'LUMA_EPSILON',
  'U16_MAX',
  'U8_MAX',
  'DemosaicParameters',
  'Int',
  'LumaCoefficients',
  'Validator',
]
