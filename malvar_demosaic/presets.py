"""Luma coefficient presets."""

from beartype import beartype

from .config import LumaCoefficients


@beartype
def get_preset(name: str) -> LumaCoefficients:
  """Get luma coefficients by name."""
  if name not in presets:
    raise ValueError(f'Unknown preset: {name}. Available: {list(presets.keys())}')
  return presets[name]


# ITU-R BT.601 (CCIR 601)
ccir601 = LumaCoefficients(red=0.299, green=0.587, blue=0.114)

# ITU-R BT.709
rec709 = LumaCoefficients(red=0.2126, green=0.7152, blue=0.0722)

# green sites only, half of the mosaic is already green
green = LumaCoefficients(red=0.0, green=1.0, blue=0.0)

equal = LumaCoefficients(red=1.0, green=1.0, blue=1.0)

presets: dict[str, LumaCoefficients] = {
  'ccir601': ccir601,
  'equal': equal,
  'green': green,
  'rec709': rec709,
}
