"""Platform module for running benchmarks and broadcasting their state."""

from .orchestrator import BenchmarkOrchestrator
from .state_channel import StateChannel

__all__ = ["BenchmarkOrchestrator", "StateChannel"]
