"""Backend registration.

Backends are looked up by name so configuration files and the CLI can pick
one without importing it directly.
"""

from typing import Any, Callable, NamedTuple

from .base import ParallelComputeBackend


class BackendInfo(NamedTuple):
    """Metadata for a registered backend.

    Attributes:
        name: The unique identifier for the backend.
        make_fn: Factory function creating the backend.
        description: One-line description shown by the CLI.
    """

    name: str
    make_fn: Callable[..., ParallelComputeBackend]
    description: str = ""


# The global registry of backends
_BACKEND_REGISTRY: dict[str, BackendInfo] = {}


def register_backend(name: str, make_fn: Callable[..., ParallelComputeBackend], description: str = "") -> None:
    """Register a backend factory under ``name``."""
    _BACKEND_REGISTRY[name] = BackendInfo(name=name, make_fn=make_fn, description=description)


def get_backend_info(name: str) -> BackendInfo | None:
    return _BACKEND_REGISTRY.get(name)


def list_backends() -> list[str]:
    """List all registered backend identifiers."""
    return list(_BACKEND_REGISTRY.keys())


def make_backend(name: str, **kwargs: Any) -> ParallelComputeBackend:
    """Create a backend instance by name.

    Args:
        name: Unique identifier for the backend.
        **kwargs: Keyword arguments passed to the backend's factory function.

    Raises:
        ValueError: If the backend name is not found in the registry.
        AcceleratorUnavailableError: If the backend cannot be initialized.
    """
    info = get_backend_info(name)
    if info is None:
        available = ", ".join(list_backends())
        raise ValueError(f"Backend '{name}' not found in the registry. Available backends: {available}")

    return info.make_fn(**kwargs)
