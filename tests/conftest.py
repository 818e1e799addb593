import os

os.environ.setdefault("MPLBACKEND", "Agg")

from datetime import datetime  # noqa: E402
from typing import Callable  # noqa: E402

import numpy as np  # noqa: E402
import pytest  # noqa: E402

from crossbench.core.results import BenchmarkResult  # noqa: E402


@pytest.fixture
def seed() -> int:
    return 0


@pytest.fixture
def integer_operands() -> tuple[np.ndarray, np.ndarray]:
    """2x2 operands with an exactly representable product."""
    a = np.array([[1.0, 2.0], [3.0, 4.0]], dtype=np.float32)
    b = np.array([[5.0, 6.0], [7.0, 8.0]], dtype=np.float32)
    return a, b


@pytest.fixture
def make_result() -> Callable[..., BenchmarkResult]:
    """Factory for results with explicit timings."""

    def _make(size: int, general: float, accelerated: float, compute: float | None = None) -> BenchmarkResult:
        return BenchmarkResult(
            matrix_size=size,
            general_time_ms=general,
            accelerated_total_ms=accelerated,
            accelerated_compute_ms=accelerated if compute is None else compute,
            memory_allocated_mb=0.0,
            timestamp=datetime(2025, 1, 1, 12, 0, 0),
        )

    return _make
