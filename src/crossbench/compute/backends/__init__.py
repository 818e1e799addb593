"""Parallel compute backends for the accelerated path."""

from .base import ParallelComputeBackend
from .jax_backend import JaxBackend
from .registration import BackendInfo, get_backend_info, list_backends, make_backend, register_backend
from .threads import ThreadPoolBackend

register_backend("jax", JaxBackend, "XLA-compiled per-cell program on a JAX device")
register_backend("threads", ThreadPoolBackend, "Per-cell program on a pool of host threads")

__all__ = [
    "ParallelComputeBackend",
    "JaxBackend",
    "ThreadPoolBackend",
    "BackendInfo",
    "get_backend_info",
    "list_backends",
    "make_backend",
    "register_backend",
]
