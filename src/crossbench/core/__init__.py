from .errors import (
    AcceleratorUnavailableError,
    BenchmarkError,
    DimensionMismatchError,
    EncodeError,
    InvalidSeedError,
    InvalidSizeError,
    RunFailure,
)
from .matrix import SEED_LIMIT, check_operands, check_seed, generate_matrix, generate_matrix_pair
from .results import PHASES, BenchmarkResult, PhaseTimer, PhaseTimings
from .state import IDLE, BenchmarkState, Computing, Error, Idle, Success
from .types import BaseModel, Matrix, PRNGKey

__all__ = [
    "AcceleratorUnavailableError",
    "BenchmarkError",
    "DimensionMismatchError",
    "EncodeError",
    "InvalidSizeError",
    "InvalidSeedError",
    "RunFailure",
    "check_operands",
    "check_seed",
    "SEED_LIMIT",
    "generate_matrix",
    "generate_matrix_pair",
    "PHASES",
    "BenchmarkResult",
    "PhaseTimer",
    "PhaseTimings",
    "IDLE",
    "BenchmarkState",
    "Computing",
    "Error",
    "Idle",
    "Success",
    "BaseModel",
    "Matrix",
    "PRNGKey",
]
