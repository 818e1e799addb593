"""crossbench: CPU vs accelerator crossover benchmark for dense matrix multiplication.

Times square matmul on a general-purpose path (host NumPy) and on a parallel
accelerator path (a JAX device behind a half-precision buffer boundary),
phase by phase, and derives the size at which the accelerator wins.

Main Programmatic API:
    - BenchmarkOrchestrator: Run benchmarks and observe their state
    - create_config: Create benchmark configurations easily
    - crossover: Crossover size from benchmark history

Example:
    >>> from crossbench import BenchmarkOrchestrator, crossover
    >>> with BenchmarkOrchestrator(seed=0) as orchestrator:
    ...     orchestrator.run_sweep([64, 256, 1024])
    ...     print(crossover(orchestrator.history))
"""

__version__ = "0.1.0"

from crossbench.analysis.scalability import ScalabilityChartData, crossover
from crossbench.configs.builder import create_config
from crossbench.core.results import BenchmarkResult, PhaseTimings
from crossbench.core.state import BenchmarkState, Computing, Error, Idle, Success
from crossbench.platform import BenchmarkOrchestrator, StateChannel

__all__ = [
    "BenchmarkOrchestrator",
    "StateChannel",
    "create_config",
    "crossover",
    "ScalabilityChartData",
    "BenchmarkResult",
    "PhaseTimings",
    "BenchmarkState",
    "Computing",
    "Error",
    "Idle",
    "Success",
]
