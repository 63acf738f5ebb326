"""Malvar-He-Cutler demosaicing of RGGB Bayer images."""

# Import all modules
from . import (
  bayer,
  composer,
  config,
  contracts,
  demosaic,
  errors,
  formats,
  kernels,
  presets,
  rows,
  sampler,
  tensor,
)
from .config import DemosaicParameters, LumaCoefficients
from .demosaic import (
  demosaic_mono8,
  demosaic_mono16,
  demosaic_mono16to8,
  demosaic_rgb8,
  demosaic_rgb16,
  demosaic_rgb16to8,
  demosaic_row_mono8,
  demosaic_row_mono16,
  demosaic_row_mono16to8,
  demosaic_row_rgb8,
  demosaic_row_rgb16,
  demosaic_row_rgb16to8,
)
from .errors import (
  PreconditionViolation,
  Violation,
  ViolationKind,
  abort_on_violation,
  fault_hook,
  log_violation,
  raise_violation,
  set_fault_hook,
)
from .formats import Conversion
from .presets import get_preset
from .tensor import Malvar, malvar_demosaic

__version__ = '0.1.0'

__all__ = [
  # Parameters
  'Conversion',
  'DemosaicParameters',
  'LumaCoefficients',
  # torch interface
  'Malvar',
  'malvar_demosaic',
  # Errors and fault hooks
  'PreconditionViolation',
  'Violation',
  'ViolationKind',
  'abort_on_violation',
  # Submodules
  'bayer',
  'composer',
  'config',
  'contracts',
  'demosaic',
  # Full image demosaicing
  'demosaic_mono8',
  'demosaic_mono16',
  'demosaic_mono16to8',
  'demosaic_rgb8',
  'demosaic_rgb16',
  'demosaic_rgb16to8',
  # Row demosaicing
  'demosaic_row_mono8',
  'demosaic_row_mono16',
  'demosaic_row_mono16to8',
  'demosaic_row_rgb8',
  'demosaic_row_rgb16',
  'demosaic_row_rgb16to8',
  'errors',
  'fault_hook',
  'formats',
  'get_preset',
  'kernels',
  'log_violation',
  'presets',
  'raise_violation',
  'rows',
  'sampler',
  'set_fault_hook',
  'tensor',
]
