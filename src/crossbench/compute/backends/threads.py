"""Thread-pool backend: the per-cell program run on host threads with NumPy."""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import jax
import numpy as np

from crossbench.codec.buffer import VALUE_CHANNEL, pixels_from_values
from crossbench.core.errors import AcceleratorUnavailableError

from .base import ParallelComputeBackend

logger = logging.getLogger(__name__)

# Upper bound on the temporary products held by one task
_BAND_ELEMENTS = 1 << 22


class ThreadPoolBackend(ParallelComputeBackend):
    """Computes output cells in bands of rows on a pool of host threads.

    Buffers stay on the JAX CPU device; NumPy releases the GIL inside its
    kernels, so bands run in parallel.

    Args:
        max_workers: Number of worker threads (default: CPU count)
    """

    name = "threads"

    def __init__(self, max_workers: int | None = None) -> None:
        super().__init__()
        if max_workers is not None and max_workers <= 0:
            raise ValueError(f"max_workers must be positive, got {max_workers}")
        try:
            self._device = jax.devices("cpu")[0]
        except RuntimeError as e:
            raise AcceleratorUnavailableError(f"JAX CPU device is unavailable: {e}") from e

        self.max_workers = max_workers or os.cpu_count() or 1
        self._a: np.ndarray | None = None
        self._b_t: np.ndarray | None = None

    @property
    def device(self) -> Any:
        return self._device

    def _configure(self, a_pixels: jax.Array, b_pixels: jax.Array, size: int) -> None:
        self._a = np.asarray(jax.device_get(a_pixels[..., VALUE_CHANNEL]), dtype=np.float32)
        # Column j of b becomes a contiguous row
        b = np.asarray(jax.device_get(b_pixels[..., VALUE_CHANNEL]), dtype=np.float32)
        self._b_t = np.ascontiguousarray(b.T)

    def _compute_band(self, out: np.ndarray, start: int, stop: int) -> None:
        assert self._a is not None and self._b_t is not None
        products = self._a[start:stop, None, :] * self._b_t[None, :, :]
        out[start:stop] = products.sum(axis=-1, dtype=np.float32)

    def _execute(self, a_pixels: jax.Array, b_pixels: jax.Array, size: int) -> jax.Array:
        out = np.empty((size, size), dtype=np.float32)
        rows_per_band = max(1, _BAND_ELEMENTS // (size * size))
        bands = [(start, min(start + rows_per_band, size)) for start in range(0, size, rows_per_band)]

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = [pool.submit(self._compute_band, out, start, stop) for start, stop in bands]
            for future in futures:
                future.result()

        logger.debug(f"Computed N={size} in {len(bands)} band(s) on {self.max_workers} thread(s)")
        return jax.device_put(pixels_from_values(out), self._device)

    def unbind(self) -> None:
        super().unbind()
        self._a = None
        self._b_t = None
