"""RGGB mosaic helpers for numpy arrays."""

from beartype import beartype
import numpy as np


def stack_bayer(bayer_image: np.ndarray) -> np.ndarray:
  """(H, W) mosaic to (H/2, W/2, 4) planes in R, G, G, B order."""
  return np.stack((
    bayer_image[0::2, 0::2],   # Red
    bayer_image[0::2, 1::2],   # Green
    bayer_image[1::2, 0::2],   # Green
    bayer_image[1::2, 1::2],   # Blue
  ), axis=-1)


def expand_bayer(x: np.ndarray) -> np.ndarray:
  h, w = x.shape[0], x.shape[1]
  result = np.zeros((h * 2, w * 2), dtype=x.dtype)

  result[0::2, 0::2] = x[..., 0]    # Red
  result[0::2, 1::2] = x[..., 1]    # Green
  result[1::2, 0::2] = x[..., 2]    # Green
  result[1::2, 1::2] = x[..., 3]    # Blue
  return result


@beartype
def rgb_to_bayer(rgb: np.ndarray) -> np.ndarray:
  """Sample an RGB image into an RGGB mosaic.

  Args:
      rgb: Array of shape (H, W, 3), H and W even

  Returns:
      Mosaic of shape (H, W), same dtype
  """
  assert rgb.ndim == 3 and rgb.shape[2] == 3, f'Input must be (H, W, 3), got {rgb.shape}'

  stacked = np.stack((
    rgb[0::2, 0::2, 0],  # R (even rows, even cols)
    rgb[0::2, 1::2, 1],  # G (even rows, odd cols)
    rgb[1::2, 0::2, 1],  # G (odd rows, even cols)
    rgb[1::2, 1::2, 2],  # B (odd rows, odd cols)
  ), axis=-1)

  return expand_bayer(stacked)


@beartype
def flat_field(n_rows: int, n_cols: int, rgb: tuple[int, int, int], dtype: type = np.uint16) -> np.ndarray:
  """A mosaic where every 2x2 tile encodes the same (red, green, blue)."""
  tile = np.array([[rgb[0], rgb[1]], [rgb[1], rgb[2]]], dtype=dtype)
  return np.tile(tile, (n_rows // 2, n_cols // 2))


def extract_bayer_channels(bayer_data: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
  red, green1, green2, blue = np.moveaxis(stack_bayer(bayer_data), -1, 0)
  return (
    red.flatten(),
    np.concatenate([green1.flatten(), green2.flatten()]),
    blue.flatten(),
  )


def get_channel_statistics(bayer_data: np.ndarray) -> tuple[float, float, float, float, float, float]:
  r_channel, g_channel, b_channel = extract_bayer_channels(bayer_data)
  return (
    float(np.mean(r_channel)),
    float(np.mean(g_channel)),
    float(np.mean(b_channel)),
    float(np.std(r_channel)),
    float(np.std(g_channel)),
    float(np.std(b_channel)),
  )


__all__ = [
  'expand_bayer',
  'extract_bayer_channels',
  'flat_field',
  'get_channel_statistics',
  'rgb_to_bayer',
  'stack_bayer',
]
