"""Crossover analysis over benchmark history."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from crossbench.core.results import BenchmarkResult


def _sorted_by_size(history: Sequence[BenchmarkResult]) -> list[BenchmarkResult]:
    return sorted(history, key=lambda result: result.matrix_size)


def crossover(history: Sequence[BenchmarkResult]) -> int | None:
    """Smallest benchmarked size at which the accelerated path beat the general path.

    Compares end-to-end accelerated time (transfers included) against general
    time. Only observed sizes are considered: the answer is advisory and says
    nothing about sizes between the benchmarked ones.

    Args:
        history: Benchmark results in any order (not modified)

    Returns:
        The crossover size, or None if the accelerated path never won
    """
    for result in _sorted_by_size(history):
        if result.accelerated_total_ms < result.general_time_ms:
            return result.matrix_size
    return None


@dataclass(frozen=True)
class ScalabilityChartData:
    """Time-versus-size series for both paths, ready for plotting."""

    general_points: tuple[tuple[int, float], ...]
    accelerated_points: tuple[tuple[int, float], ...]
    compute_points: tuple[tuple[int, float], ...]
    crossover_size: int | None = None

    @classmethod
    def from_history(cls, history: Sequence[BenchmarkResult]) -> ScalabilityChartData:
        ordered = _sorted_by_size(history)
        return cls(
            general_points=tuple((r.matrix_size, r.general_time_ms) for r in ordered),
            accelerated_points=tuple((r.matrix_size, r.accelerated_total_ms) for r in ordered),
            compute_points=tuple((r.matrix_size, r.accelerated_compute_ms) for r in ordered),
            crossover_size=crossover(ordered),
        )

    @property
    def is_empty(self) -> bool:
        return not self.general_points
