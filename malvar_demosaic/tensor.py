"""torch interface to the Malvar demosaic.

Bayer tensors follow the (H, W, 1) convention used for raw images elsewhere.
Unlike the numpy entry points, these functions allocate their output.
"""

from beartype import beartype
import numpy as np
import torch

from .config import DemosaicParameters
from .demosaic import IMAGE_ENTRY_POINTS
from .errors import Violation, ViolationKind, report
from .formats import Conversion


def _to_numpy(image: torch.Tensor, dtype: np.dtype, operation: str) -> np.ndarray:
  image = image.detach().cpu()
  if image.numel() > 0:
    low, high = int(image.min()), int(image.max())
    limit = int(np.iinfo(dtype).max)
    if low < 0 or high > limit:
      report(Violation(ViolationKind.DTYPE, 'image', (low, high), f'0 <= image <= {limit}', operation))

  if image.dtype == torch.uint8:
    array = image.numpy()
  else:
    # widen first, numpy interop for unsigned 16-bit tensors varies between torch releases
    array = image.to(torch.int32).numpy()
  return np.ascontiguousarray(array.reshape(image.shape[0], image.shape[1]), dtype=dtype)


def _to_tensor(output: np.ndarray) -> torch.Tensor:
  if output.dtype == np.uint8:
    return torch.from_numpy(output)
  return torch.from_numpy(output.astype(np.int32))


@beartype
def malvar_demosaic(
  image: torch.Tensor, params: DemosaicParameters, conversion: Conversion = Conversion.rgb16
) -> torch.Tensor:
  """
  Apply Malvar demosaic to an RGGB Bayer image tensor.

  Args:
      image: Integer Bayer tensor (H, W, 1) or (H, W), H == n_rows and W == n_cols
      params: Dimensions, max_val, shift and luma coefficients
      conversion: Input/output format

  Returns:
      CPU tensor (H, W, 3) for RGB conversions or (H, W) for mono,
      uint8 for 8-bit outputs and int32 holding the 16-bit values otherwise
  """
  assert image.dim() == 2 or (image.dim() == 3 and image.size(2) == 1), 'Input must be (H, W) or (H, W, 1)'
  assert not image.is_floating_point(), f'Input must be an integer tensor, got {image.dtype}'

  expected_shape = (params.n_rows, params.n_cols)
  if tuple(image.shape[:2]) != expected_shape:
    raise RuntimeError(f'Malvar input shape {tuple(image.shape)} != expected {expected_shape}')

  bayer = _to_numpy(image, conversion.input_dtype, 'malvar_demosaic')
  if conversion.mono:
    output = np.empty(expected_shape, dtype=conversion.output_dtype)
  else:
    output = np.empty((*expected_shape, conversion.channels), dtype=conversion.output_dtype)

  IMAGE_ENTRY_POINTS[conversion](bayer, params, output)
  return _to_tensor(output)


class Malvar:
  """Malvar demosaic for a fixed image size and conversion."""

  @beartype
  def __init__(self, params: DemosaicParameters, conversion: Conversion = Conversion.rgb16):
    self.params = params
    self.conversion = conversion

  def __repr__(self) -> str:
    return f'Malvar({self.params.n_cols}x{self.params.n_rows}, {self.conversion.name}, max_val={self.params.max_val})'

  @property
  def image_size(self) -> tuple[int, int]:
    return (self.params.n_cols, self.params.n_rows)

  def process(self, image: torch.Tensor) -> torch.Tensor:
    return malvar_demosaic(image, self.params, self.conversion)


__all__ = ['Malvar', 'malvar_demosaic']
