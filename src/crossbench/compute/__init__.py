"""Multiplication strategies: the general (host) path and the accelerated path."""

from .accelerated import AcceleratedComputeStrategy
from .backends import JaxBackend, ParallelComputeBackend, ThreadPoolBackend, list_backends, make_backend
from .general import DEFAULT_TRANSPOSE_MIN_SIZE, GeneralComputeStrategy, multiply_ordered

__all__ = [
    "AcceleratedComputeStrategy",
    "GeneralComputeStrategy",
    "multiply_ordered",
    "DEFAULT_TRANSPOSE_MIN_SIZE",
    "ParallelComputeBackend",
    "JaxBackend",
    "ThreadPoolBackend",
    "list_backends",
    "make_backend",
]
