"""General-purpose (host CPU) matrix multiplication."""

from __future__ import annotations

import logging
import time
from typing import Literal

import numpy as np

from crossbench.core.matrix import check_operands
from crossbench.core.types import Matrix

logger = logging.getLogger(__name__)

TransposeMode = bool | Literal["auto"]

DEFAULT_TRANSPOSE_MIN_SIZE = 256


def multiply_ordered(a: Matrix, b: Matrix, transpose: bool = False) -> Matrix:
    """Compute ``C = A x B`` in float32 with the summation order fixed to ``k = 0..N-1``.

    The product is built one k-plane at a time: step ``k`` adds the rank-1
    term ``A[:, k] * B[k, :]`` to every cell, so each ``C[i][j]`` sees
    ``A[i][k] * B[k][j]`` added in increasing ``k`` exactly as in the triple
    loop, with float32 rounding after every multiply and every add.

    ``A[:, k]`` is a strided column read. With ``transpose=True`` A is copied
    to a contiguous transpose first so both k-slices are sequential rows.
    The result is bit-identical either way.
    """
    size = check_operands(a, b)
    lhs = np.asarray(a, dtype=np.float32)
    rhs = np.ascontiguousarray(b, dtype=np.float32)

    if transpose:
        columns = np.ascontiguousarray(lhs.T)
    else:
        columns = lhs.T  # strided view

    result = np.zeros((size, size), dtype=np.float32)
    term = np.empty((size, size), dtype=np.float32)
    for k in range(size):
        np.multiply(columns[k][:, None], rhs[k][None, :], out=term)
        np.add(result, term, out=result)
    return result


class GeneralComputeStrategy:
    """Multiplies matrices on the host CPU and times the multiply.

    Args:
        transpose: Pre-transpose the column-read operand. ``"auto"`` applies it
            from ``transpose_min_size`` upward, where cache misses start to dominate.
        transpose_min_size: Size threshold used by ``"auto"``
    """

    name = "general"

    def __init__(self, transpose: TransposeMode = "auto", transpose_min_size: int = DEFAULT_TRANSPOSE_MIN_SIZE) -> None:
        if transpose not in (True, False, "auto"):
            raise ValueError(f"transpose must be True, False or 'auto', got {transpose!r}")
        self.transpose = transpose
        self.transpose_min_size = transpose_min_size

    def uses_transpose(self, size: int) -> bool:
        if self.transpose == "auto":
            return size >= self.transpose_min_size
        return bool(self.transpose)

    def multiply(self, a: Matrix, b: Matrix) -> tuple[Matrix, float]:
        """Multiply ``a`` by ``b``.

        Returns:
            Tuple of (product, elapsed wall-clock milliseconds of the multiply)

        Raises:
            DimensionMismatchError: If the operands are not equal-sized squares
        """
        size = check_operands(a, b)
        transpose = self.uses_transpose(size)

        start = time.perf_counter()
        result = multiply_ordered(a, b, transpose=transpose)
        elapsed_ms = (time.perf_counter() - start) * 1000.0

        logger.debug(f"General multiply N={size} (transpose={transpose}): {elapsed_ms:.2f}ms")
        return result, elapsed_ms
