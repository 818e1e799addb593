"""Result types produced by benchmark runs."""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator

from pydantic import ConfigDict, NonNegativeFloat

from .errors import RunFailure
from .types import BaseModel

PHASES = ("transfer_in", "configure", "compute", "transfer_out")
"""Phases of an accelerated multiply, in execution order."""


class PhaseTimings(BaseModel):
    """Wall-clock duration of each phase of an accelerated multiply, in milliseconds."""

    model_config = ConfigDict(frozen=True)

    transfer_in_ms: NonNegativeFloat
    configure_ms: NonNegativeFloat
    compute_ms: NonNegativeFloat
    transfer_out_ms: NonNegativeFloat

    @property
    def total_ms(self) -> float:
        """End-to-end accelerated cost, including transfers and configuration."""
        return self.transfer_in_ms + self.configure_ms + self.compute_ms + self.transfer_out_ms

    @property
    def transfer_ms(self) -> float:
        return self.transfer_in_ms + self.transfer_out_ms


class PhaseTimer:
    """Records each accelerated phase exactly once.

    Example:
        >>> timer = PhaseTimer()
        >>> with timer.phase("transfer_in"):
        ...     upload()
        >>> timings = timer.finalize()  # after all four phases
    """

    def __init__(self) -> None:
        self._elapsed_ms: dict[str, float] = {}

    @contextmanager
    def phase(self, name: str) -> Iterator[None]:
        if name not in PHASES:
            raise ValueError(f"Unknown phase '{name}'. Known phases: {', '.join(PHASES)}")
        if name in self._elapsed_ms:
            raise RunFailure(f"Phase '{name}' was already recorded for this run")

        start = time.perf_counter()
        yield
        self._elapsed_ms[name] = (time.perf_counter() - start) * 1000.0

    def finalize(self) -> PhaseTimings:
        missing = [name for name in PHASES if name not in self._elapsed_ms]
        if missing:
            raise RunFailure(f"Phases not recorded: {', '.join(missing)}")
        return PhaseTimings(**{f"{name}_ms": self._elapsed_ms[name] for name in PHASES})


@dataclass(frozen=True)
class BenchmarkResult:
    """Outcome of one completed benchmark run.

    Both measurements are always present: a run whose accelerated path fails
    never produces a result.
    """

    matrix_size: int
    general_time_ms: float
    accelerated_total_ms: float
    accelerated_compute_ms: float
    memory_allocated_mb: float
    """Accounting estimate (three float32 matrices), not a measured allocation."""

    timestamp: datetime = field(default_factory=datetime.now)
    phase_timings: PhaseTimings | None = None
    backend: str | None = None

    def __post_init__(self) -> None:
        if self.matrix_size <= 0:
            raise ValueError(f"matrix_size must be positive, got {self.matrix_size}")
        for name in ("general_time_ms", "accelerated_total_ms", "accelerated_compute_ms", "memory_allocated_mb"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")
        if self.accelerated_compute_ms > self.accelerated_total_ms:
            raise ValueError(
                f"accelerated_compute_ms ({self.accelerated_compute_ms}) cannot exceed "
                f"accelerated_total_ms ({self.accelerated_total_ms})"
            )

    @classmethod
    def from_timings(
        cls,
        matrix_size: int,
        general_time_ms: float,
        timings: PhaseTimings,
        memory_allocated_mb: float,
        timestamp: datetime | None = None,
        backend: str | None = None,
    ) -> BenchmarkResult:
        return cls(
            matrix_size=matrix_size,
            general_time_ms=general_time_ms,
            accelerated_total_ms=timings.total_ms,
            accelerated_compute_ms=timings.compute_ms,
            memory_allocated_mb=memory_allocated_mb,
            timestamp=timestamp if timestamp is not None else datetime.now(),
            phase_timings=timings,
            backend=backend,
        )

    @property
    def transfer_overhead_ms(self) -> float:
        return self.accelerated_total_ms - self.accelerated_compute_ms

    @property
    def transfer_overhead_percent(self) -> float:
        if self.accelerated_total_ms == 0:
            return 0.0
        return 100.0 * self.transfer_overhead_ms / self.accelerated_total_ms

    @property
    def speedup(self) -> float:
        """How many times faster the accelerated path is (0 when it took no time)."""
        if self.accelerated_total_ms == 0:
            return 0.0
        return self.general_time_ms / self.accelerated_total_ms

    def speedup_message(self) -> str:
        speedup = self.speedup
        if speedup == 0:
            return "No accelerated measurement"
        if speedup > 1:
            return f"Accelerator is {speedup:.2f}x faster"
        if speedup < 1:
            return f"General path is {1 / speedup:.2f}x faster"
        return "Same performance"

    def to_log_string(self) -> str:
        lines = [
            f"[{self.timestamp:%Y-%m-%d %H:%M:%S}] Benchmark N={self.matrix_size} completed.",
            f"General time: {self.general_time_ms:.2f}ms",
            f"Accelerated time: {self.accelerated_total_ms:.2f}ms "
            f"(compute: {self.accelerated_compute_ms:.2f}ms, transfer: {self.transfer_overhead_ms:.2f}ms, "
            f"{self.transfer_overhead_percent:.1f}% overhead)",
            f"Speedup: {self.speedup:.2f}x ({self.speedup_message()})",
            f"Memory (estimated): {self.memory_allocated_mb:.2f}MB",
        ]
        return "\n".join(lines)
