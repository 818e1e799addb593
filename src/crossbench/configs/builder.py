"""Config builder utilities for programmatic use."""

from typing import Any

from crossbench.configs.default import BenchmarkConfig
from crossbench.utils.config import apply_overrides


def create_config(
    sizes: tuple[int, ...] | list[int] | None = None,
    backend: str = "jax",
    seed: int | None = None,
    **kwargs: Any,
) -> BenchmarkConfig:
    """Create a benchmark config with sensible defaults.

    Args:
        sizes: Matrix sizes to benchmark, in run order (default: 64..512)
        backend: Registered backend name for the accelerated path
        seed: Random seed in ``[0, 2**32)``; None draws fresh matrices per run
        **kwargs: Additional overrides. Nested parameters use dot notation
            passed through a dict (e.g., ``**{"general.transpose": False}``) or
            nested dicts (e.g., ``codec={"max_dimension": 2048}``).

    Returns:
        Validated BenchmarkConfig

    Example:
        >>> config = create_config(sizes=[64, 256, 1024], backend="threads", seed=0)
    """
    config_dict: dict[str, Any] = {"backend": {"name": backend}, "seed": seed}
    if sizes is not None:
        config_dict["sizes"] = tuple(sizes)

    return BenchmarkConfig(**apply_overrides(config_dict, kwargs))
