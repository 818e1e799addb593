"""Lifecycle states published by the benchmark orchestrator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from .results import BenchmarkResult


@dataclass(frozen=True)
class Idle:
    """Ready to start a run."""


@dataclass(frozen=True)
class Computing:
    """A run for ``size`` is in flight."""

    size: int


@dataclass(frozen=True)
class Success:
    """A run completed; ``history`` is a snapshot including ``result``."""

    result: BenchmarkResult
    history: tuple[BenchmarkResult, ...] = ()


@dataclass(frozen=True)
class Error:
    """A run for ``size`` failed; no result was recorded."""

    message: str
    size: int


BenchmarkState: TypeAlias = Idle | Computing | Success | Error

IDLE = Idle()
