"""Contract shared by every parallel compute backend.

A backend runs one fixed program: for each output cell ``(i, j)`` it computes
``sum_k a[i, k] * b[k, j]`` from the value channel of two bound input buffers
and writes the result into an output buffer cell. Cells are independent and
carry no ordering guarantee. The protocol has three steps, matching the
timed phases of an accelerated multiply:

1. ``bind_buffers``: bind the two inputs and the scalar size (configure)
2. ``dispatch``: run the program over all cells and block until done (compute)
3. ``read_output``: hand the output buffer to the caller (transfer-out)

``unbind`` drops the binding and frees any output the caller never took.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import jax

from crossbench.codec.buffer import CHANNELS, AcceleratorBuffer
from crossbench.core.errors import DimensionMismatchError, RunFailure


class ParallelComputeBackend(ABC):
    """Base class for accelerator backends."""

    name: str = "base"

    def __init__(self) -> None:
        self._inputs: tuple[AcceleratorBuffer, AcceleratorBuffer] | None = None
        self._size: int | None = None
        self._output: AcceleratorBuffer | None = None

    @property
    @abstractmethod
    def device(self) -> Any:
        """JAX device on which input and output buffers must live."""

    @abstractmethod
    def _configure(self, a_pixels: jax.Array, b_pixels: jax.Array, size: int) -> None:
        """Prepare the program for ``size`` with the given inputs."""

    @abstractmethod
    def _execute(self, a_pixels: jax.Array, b_pixels: jax.Array, size: int) -> jax.Array:
        """Run the program over every cell and return the resident output grid."""

    @property
    def is_bound(self) -> bool:
        return self._inputs is not None

    def bind_buffers(self, a: AcceleratorBuffer, b: AcceleratorBuffer, size: int) -> None:
        expected = (size, size, CHANNELS)
        if a.shape != expected or b.shape != expected:
            raise DimensionMismatchError(f"Buffers {a.shape} and {b.shape} do not match bound size {size}")

        self.unbind()
        self._configure(a.pixels, b.pixels, size)
        self._inputs = (a, b)
        self._size = size

    def dispatch(self, size_x: int, size_y: int) -> None:
        if self._inputs is None or self._size is None:
            raise RunFailure("dispatch() called before bind_buffers()")
        if (size_x, size_y) != (self._size, self._size):
            raise DimensionMismatchError(
                f"Dispatch grid {size_x}x{size_y} does not match bound size {self._size}x{self._size}"
            )
        if self._output is not None:
            self._output.release()

        a, b = self._inputs
        pixels = self._execute(a.pixels, b.pixels, self._size)
        pixels.block_until_ready()
        self._output = AcceleratorBuffer(pixels)

    def read_output(self) -> AcceleratorBuffer:
        """Return the output buffer; the caller becomes responsible for releasing it."""
        if self._output is None:
            raise RunFailure("read_output() called before dispatch()")
        output, self._output = self._output, None
        return output

    def unbind(self) -> None:
        self._inputs = None
        self._size = None
        if self._output is not None:
            self._output.release()
            self._output = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(device={self.device})"
