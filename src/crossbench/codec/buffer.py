"""Conversion between host matrices and the accelerator's pixel-grid buffers.

The accelerator consumes 4-channel half-precision grids (an RGBA float16
texture). A matrix element is stored in the red channel; green and blue hold
a sentinel and alpha is fully opaque. None of the other channels are read
back.

Precision contract
------------------
This is a lossy boundary. Encoding rounds every float32 value to the nearest
float16, so ``decode(encode(m))`` matches ``m`` only up to one float16 unit in
the last place per element (see :func:`rounding_tolerance`). Values outside
the float16 range cannot be encoded. Any backend ported to another compute
API must keep this contract or document its own.
"""

from __future__ import annotations

import logging
from typing import Any

import chex
import jax
import numpy as np

from crossbench.core.errors import EncodeError
from crossbench.core.types import Matrix
from crossbench.utils.memory import get_array_memory_mb

logger = logging.getLogger(__name__)

CHANNELS = 4
VALUE_CHANNEL = 0
SENTINEL = 0.0
ALPHA = 1.0
DEFAULT_MAX_DIMENSION = 4096

_HALF_MAX = float(np.finfo(np.float16).max)


class AcceleratorBuffer:
    """Device-resident half-precision pixel grid of shape ``(N, N, 4)``.

    Buffers are single-run resources: use them as context managers (or call
    :meth:`release`) so the device memory is freed on every exit path.
    """

    def __init__(self, pixels: jax.Array) -> None:
        chex.assert_rank(pixels, 3)
        chex.assert_axis_dimension(pixels, 2, CHANNELS)
        self._pixels = pixels
        self._released = False

    @property
    def pixels(self) -> jax.Array:
        if self._released:
            raise EncodeError("Accelerator buffer has already been released")
        return self._pixels

    @property
    def shape(self) -> tuple[int, ...]:
        return tuple(self._pixels.shape)

    @property
    def size(self) -> int:
        return int(self._pixels.shape[0])

    @property
    def device(self) -> Any:
        return next(iter(self._pixels.devices()))

    @property
    def memory_mb(self) -> float:
        return get_array_memory_mb(self._pixels)

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        """Free the device memory. Safe to call more than once."""
        if self._released:
            return
        self._released = True
        if not self._pixels.is_deleted():
            self._pixels.delete()

    def __enter__(self) -> AcceleratorBuffer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "released" if self._released else f"{self.memory_mb:.2f}MB"
        return f"AcceleratorBuffer(size={self.size}, {state})"


def rounding_tolerance(matrix: Matrix) -> np.ndarray:
    """Per-element bound on the codec round-trip error: one float16 ULP."""
    half = np.asarray(matrix, dtype=np.float32).astype(np.float16)
    return np.abs(np.spacing(half)).astype(np.float32)


def pixels_from_values(values: np.ndarray) -> np.ndarray:
    """Lay out a 2-D array of values as an RGBA float16 grid on the host."""
    size = values.shape[0]
    grid = np.empty((size, size, CHANNELS), dtype=np.float16)
    grid[..., VALUE_CHANNEL] = values
    grid[..., 1:3] = SENTINEL
    grid[..., 3] = ALPHA
    return grid


class BufferCodec:
    """Encodes matrices into accelerator buffers and decodes them back.

    Args:
        max_dimension: Largest matrix dimension the accelerator accepts
        device: Default JAX device for encoded buffers (None = default device)
    """

    def __init__(self, max_dimension: int = DEFAULT_MAX_DIMENSION, device: Any = None) -> None:
        if max_dimension <= 0:
            raise ValueError(f"max_dimension must be positive, got {max_dimension}")
        self.max_dimension = max_dimension
        self.device = device

    def _check_dimension(self, size: int) -> int:
        if size <= 0:
            raise EncodeError(f"Matrix size must be positive, got {size}")
        if size > self.max_dimension:
            raise EncodeError(
                f"Matrix size {size} exceeds the accelerator's maximum dimension ({self.max_dimension})"
            )
        return int(size)

    def encode(self, matrix: Matrix, device: Any = None) -> AcceleratorBuffer:
        """Encode a square float32 matrix into a device-resident buffer.

        Blocks until the buffer is resident on the device.

        Raises:
            EncodeError: If the matrix is not square, is too large, or holds
                values outside the float16 range
        """
        values = np.asarray(matrix, dtype=np.float32)
        if values.ndim != 2 or values.shape[0] != values.shape[1]:
            raise EncodeError(f"Only square matrices can be encoded, got shape {values.shape}")
        size = self._check_dimension(values.shape[0])

        if not np.all(np.abs(values) <= _HALF_MAX):
            raise EncodeError(f"Matrix values must lie within the float16 range (|x| <= {_HALF_MAX:g})")

        grid = pixels_from_values(values)
        pixels = jax.device_put(grid, device if device is not None else self.device)
        pixels.block_until_ready()

        buffer = AcceleratorBuffer(pixels)
        logger.debug(f"Encoded {size}x{size} matrix ({buffer.memory_mb:.2f}MB) on {buffer.device}")
        return buffer

    def decode(self, buffer: AcceleratorBuffer, size: int) -> Matrix:
        """Read the value channel of a buffer back into a float32 matrix.

        Raises:
            EncodeError: If ``size`` is out of range or does not match the buffer
        """
        size = self._check_dimension(size)
        if buffer.shape != (size, size, CHANNELS):
            raise EncodeError(f"Buffer of shape {buffer.shape} does not hold a {size}x{size} matrix")

        values = jax.device_get(buffer.pixels[..., VALUE_CHANNEL])
        return np.array(values, dtype=np.float32, order="C")
