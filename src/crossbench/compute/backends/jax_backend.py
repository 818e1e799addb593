"""JAX backend: the per-cell program vmapped over the output grid and compiled with XLA."""

from __future__ import annotations

import logging
from typing import Any, Callable

import jax
import jax.numpy as jnp

from crossbench.codec.buffer import ALPHA, SENTINEL, VALUE_CHANNEL
from crossbench.core.errors import AcceleratorUnavailableError

from .base import ParallelComputeBackend

logger = logging.getLogger(__name__)


def cell_program(a: jax.Array, b: jax.Array, i: jax.Array, j: jax.Array) -> jax.Array:
    """Value of output cell ``(i, j)``: ``sum_k a[i, k] * b[k, j]`` in float32."""
    return jnp.sum(a[i, :] * b[:, j])


def grid_program(a_pixels: jax.Array, b_pixels: jax.Array) -> jax.Array:
    """Run :func:`cell_program` for every output cell and pack the result as pixels."""
    a = a_pixels[..., VALUE_CHANNEL].astype(jnp.float32)
    b = b_pixels[..., VALUE_CHANNEL].astype(jnp.float32)
    idx = jnp.arange(a.shape[0])

    per_row = jax.vmap(cell_program, in_axes=(None, None, None, 0))
    per_grid = jax.vmap(per_row, in_axes=(None, None, 0, None))
    values = per_grid(a, b, idx, idx).astype(jnp.float16)

    sentinel = jnp.full_like(values, SENTINEL)
    alpha = jnp.full_like(values, ALPHA)
    return jnp.stack([values, sentinel, sentinel, alpha], axis=-1)


class JaxBackend(ParallelComputeBackend):
    """Runs the matmul program on a JAX device (CPU, GPU or TPU).

    The configure step compiles the program ahead of time for the bound size,
    so compilation is reported as configuration cost and never as compute.
    Compiled programs are cached per size.

    Args:
        platform: JAX platform to use ("cpu", "gpu", "tpu"); None for the default device

    Raises:
        AcceleratorUnavailableError: If the requested platform cannot be initialized
    """

    name = "jax"

    def __init__(self, platform: str | None = None) -> None:
        super().__init__()
        try:
            devices = jax.devices(platform) if platform else jax.devices()
        except RuntimeError as e:
            raise AcceleratorUnavailableError(f"JAX platform '{platform}' is unavailable: {e}") from e
        if not devices:
            raise AcceleratorUnavailableError(f"JAX reported no devices for platform '{platform}'")

        self.platform = platform
        self._device = devices[0]
        self._compiled: dict[int, Callable[..., Any]] = {}
        logger.debug(f"JAX backend using {self._device}")

    @property
    def device(self) -> Any:
        return self._device

    def _configure(self, a_pixels: jax.Array, b_pixels: jax.Array, size: int) -> None:
        if size in self._compiled:
            logger.debug(f"Reusing compiled program for N={size}")
            return
        self._compiled[size] = jax.jit(grid_program).lower(a_pixels, b_pixels).compile()
        logger.debug(f"Compiled program for N={size} on {self._device}")

    def _execute(self, a_pixels: jax.Array, b_pixels: jax.Array, size: int) -> jax.Array:
        return self._compiled[size](a_pixels, b_pixels)
