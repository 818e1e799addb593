"""Tests for phase timings and benchmark results."""

import dataclasses
import time
from datetime import datetime

import pytest
from pydantic import ValidationError

from crossbench.core.errors import RunFailure
from crossbench.core.results import PHASES, BenchmarkResult, PhaseTimer, PhaseTimings


def _timings(transfer_in=1.0, configure=2.0, compute=3.0, transfer_out=4.0) -> PhaseTimings:
    return PhaseTimings(
        transfer_in_ms=transfer_in,
        configure_ms=configure,
        compute_ms=compute,
        transfer_out_ms=transfer_out,
    )


class TestPhaseTimings:
    """Tests for PhaseTimings."""

    def test_total_is_sum_of_phases(self):
        """total_ms should be the sum of the four phases."""
        timings = _timings()
        assert timings.total_ms == pytest.approx(10.0)
        assert timings.transfer_ms == pytest.approx(5.0)

    def test_negative_duration_rejected(self):
        """Negative durations should fail validation."""
        with pytest.raises(ValidationError):
            _timings(compute=-0.1)

    def test_timings_are_frozen(self):
        """Timings should not be mutable after construction."""
        timings = _timings()
        with pytest.raises(ValidationError):
            timings.compute_ms = 0.0


class TestPhaseTimer:
    """Tests for PhaseTimer."""

    def test_records_every_phase(self):
        """A timer with all four phases should finalize into non-negative timings."""
        timer = PhaseTimer()
        for name in PHASES:
            with timer.phase(name):
                time.sleep(0.001)

        timings = timer.finalize()

        assert timings.transfer_in_ms > 0
        assert timings.configure_ms > 0
        assert timings.compute_ms > 0
        assert timings.transfer_out_ms > 0

    def test_phase_recorded_twice_fails(self):
        """Each phase may be recorded only once per run."""
        timer = PhaseTimer()
        with timer.phase("compute"):
            pass

        with pytest.raises(RunFailure, match="already recorded"):
            with timer.phase("compute"):
                pass

    def test_missing_phase_fails(self):
        """Finalizing with an unrecorded phase should fail."""
        timer = PhaseTimer()
        with timer.phase("transfer_in"):
            pass

        with pytest.raises(RunFailure, match="configure"):
            timer.finalize()

    def test_failed_phase_is_not_recorded(self):
        """A phase whose body raises should leave no measurement."""
        timer = PhaseTimer()
        with pytest.raises(RuntimeError):
            with timer.phase("compute"):
                raise RuntimeError("boom")

        with pytest.raises(RunFailure, match="compute"):
            timer.finalize()

    def test_unknown_phase_rejected(self):
        """Only the four known phases can be timed."""
        with pytest.raises(ValueError):
            with PhaseTimer().phase("warmup"):
                pass


class TestBenchmarkResult:
    """Tests for BenchmarkResult and its derived metrics."""

    def test_transfer_overhead(self, make_result):
        """Overhead should be total minus compute."""
        result = make_result(256, general=100.0, accelerated=50.0, compute=20.0)

        assert result.transfer_overhead_ms == pytest.approx(30.0)
        assert result.transfer_overhead_percent == pytest.approx(60.0)

    def test_speedup(self, make_result):
        """Speedup should be general time over accelerated total time."""
        result = make_result(256, general=100.0, accelerated=25.0)
        assert result.speedup == pytest.approx(4.0)

    def test_zero_accelerated_time(self, make_result):
        """Percent and speedup should be exactly 0 when accelerated time is 0."""
        result = make_result(8, general=5.0, accelerated=0.0)

        assert result.speedup == 0.0
        assert result.transfer_overhead_percent == 0.0
        assert result.transfer_overhead_ms == 0.0

    def test_from_timings(self):
        """from_timings should take total and compute from the phase breakdown."""
        timings = _timings()
        result = BenchmarkResult.from_timings(
            matrix_size=64,
            general_time_ms=20.0,
            timings=timings,
            memory_allocated_mb=0.05,
            backend="jax",
        )

        assert result.accelerated_total_ms == pytest.approx(timings.total_ms)
        assert result.accelerated_compute_ms == pytest.approx(3.0)
        assert result.transfer_overhead_ms == pytest.approx(7.0)
        assert result.phase_timings == timings
        assert result.backend == "jax"
        assert isinstance(result.timestamp, datetime)

    def test_result_is_frozen(self, make_result):
        """Results should never be mutated after construction."""
        result = make_result(64, general=1.0, accelerated=1.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.general_time_ms = 2.0  # type: ignore[misc]

    def test_negative_time_rejected(self, make_result):
        """Negative durations should be rejected."""
        with pytest.raises(ValueError):
            make_result(64, general=-1.0, accelerated=1.0)

    def test_compute_exceeding_total_rejected(self, make_result):
        """Compute time cannot exceed the end-to-end time."""
        with pytest.raises(ValueError, match="cannot exceed"):
            make_result(64, general=1.0, accelerated=1.0, compute=2.0)

    def test_non_positive_size_rejected(self, make_result):
        """Results are keyed by a positive matrix size."""
        with pytest.raises(ValueError):
            make_result(0, general=1.0, accelerated=1.0)

    @pytest.mark.parametrize(
        "general, accelerated, expected",
        [
            (100.0, 25.0, "Accelerator is 4.00x faster"),
            (25.0, 100.0, "General path is 4.00x faster"),
            (10.0, 10.0, "Same performance"),
            (10.0, 0.0, "No accelerated measurement"),
        ],
    )
    def test_speedup_message(self, make_result, general, accelerated, expected):
        """The verdict should name the faster path."""
        assert make_result(64, general=general, accelerated=accelerated).speedup_message() == expected

    def test_log_string(self, make_result):
        """The summary should mention size, both timings and the speedup."""
        text = make_result(512, general=200.0, accelerated=80.0, compute=50.0).to_log_string()

        assert "[2025-01-01 12:00:00] Benchmark N=512 completed." in text
        assert "General time: 200.00ms" in text
        assert "compute: 50.00ms, transfer: 30.00ms" in text
        assert "Speedup: 2.50x" in text
