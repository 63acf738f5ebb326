import argparse
from collections.abc import Callable
import time

import numpy as np

from malvar_demosaic import Conversion, DemosaicParameters, get_preset
from malvar_demosaic.bayer import get_channel_statistics, rgb_to_bayer
from malvar_demosaic.demosaic import IMAGE_ENTRY_POINTS
from malvar_demosaic.rows import row_view, safe_row
from malvar_demosaic.sampler import BayerImage


def benchmark(name: str, func: Callable, *args, warmup_iters: int = 1, bench_iters: int = 5) -> float:
  # Warmup
  for _ in range(warmup_iters):
    func(*args)

  start = time.perf_counter()
  for _ in range(bench_iters):
    func(*args)
  elapsed_ms = (time.perf_counter() - start) * 1000.0

  rate = (1000.0 * bench_iters) / elapsed_ms
  print(f'{name:<14}: {bench_iters} iterations in {elapsed_ms:.1f}ms at {rate:.2f} images/sec')
  return rate


def random_mosaic(n_rows: int, n_cols: int, max_val: int, seed: int = 0) -> np.ndarray:
  rng = np.random.default_rng(seed)
  truth = rng.integers(0, max_val, size=(n_rows, n_cols, 3), dtype=np.uint16)
  return rgb_to_bayer(truth)


def safe_image(conversion: Conversion, bayer: np.ndarray, params: DemosaicParameters, output: np.ndarray):
  """Whole image through the bounds-safe path only, as a baseline."""
  image = BayerImage.from_buffer(bayer, params)
  rows = output.reshape(params.n_rows, -1)
  for row in range(params.n_rows):
    safe_row(conversion, image, params, row, row_view(conversion, rows[row], params.n_cols))


def run_benchmark(n_rows: int, n_cols: int, max_val: int, rshift: int, warmup_iters: int, bench_iters: int,
                  include_safe: bool):
  params = DemosaicParameters(
    n_rows=n_rows, n_cols=n_cols, max_val=max_val, rshift=rshift, coefs=get_preset('ccir601')
  )
  bayer16 = random_mosaic(n_rows, n_cols, max_val)
  params8 = params.model_copy(update={'max_val': max_val >> rshift})
  bayer8 = (bayer16 >> rshift).astype(np.uint8)

  r_mean, g_mean, b_mean, *_ = get_channel_statistics(bayer16)
  print(f'Image size: {n_cols}x{n_rows}')
  print(f'Max value: {max_val}, shift: {rshift}')
  print(f'Channel means: R {r_mean:.1f} G {g_mean:.1f} B {b_mean:.1f}')
  print(f'Warmup iterations: {warmup_iters}')
  print(f'Benchmark iterations: {bench_iters}')
  print()

  print('=== Full image ===')
  for conversion in Conversion:
    bayer, conversion_params = (bayer8, params8) if conversion.eight_bit_input else (bayer16, params)
    output = np.empty(n_rows * n_cols * conversion.channels, dtype=conversion.output_dtype)
    benchmark(conversion.name, IMAGE_ENTRY_POINTS[conversion], bayer, conversion_params, output,
              warmup_iters=warmup_iters, bench_iters=bench_iters)

  if include_safe:
    print()
    print('=== Safe path only ===')
    for conversion in (Conversion.rgb16, Conversion.mono16):
      output = np.empty(n_rows * n_cols * conversion.channels, dtype=conversion.output_dtype)
      benchmark(conversion.name, safe_image, conversion, bayer16, params, output,
                warmup_iters=0, bench_iters=1)


def main():
  parser = argparse.ArgumentParser(description='Benchmark Malvar demosaicing on a synthetic mosaic')
  parser.add_argument('--rows', type=int, default=960, help='Number of rows (default: 960)')
  parser.add_argument('--cols', type=int, default=960, help='Number of columns (default: 960)')
  parser.add_argument('--max-val', type=int, default=0x0FFF, help='Maximum sample value (default: 4095)')
  parser.add_argument('--rshift', type=int, default=4, help='Shift for 16 to 8 bit conversions (default: 4)')
  parser.add_argument('--warmup-iters', type=int, default=1, help='Number of warmup iterations (default: 1)')
  parser.add_argument('--bench-iters', type=int, default=5, help='Number of benchmark iterations (default: 5)')
  parser.add_argument('--safe', action='store_true', help='Also time the bounds-safe path on every row')

  args = parser.parse_args()

  run_benchmark(args.rows, args.cols, args.max_val, args.rshift,
                args.warmup_iters, args.bench_iters, args.safe)


if __name__ == '__main__':
  main()
