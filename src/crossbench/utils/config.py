"""YAML config files and layered overrides for benchmark configurations.

A benchmark configuration is built in layers: schema defaults, then a YAML
file holding only the keys it changes, then command-line or programmatic
overrides. Overrides are validated together with the file, so a size from
the command line is checked against a ``codec.max_dimension`` from the file.
"""

from pathlib import Path
from typing import Any, Mapping, Type, TypeVar

import yaml
from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


def _set_dotted(target: dict[str, Any], dotted_key: str, value: Any) -> None:
    *parents, leaf = dotted_key.split(".")
    node = target
    for part in parents:
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        node = child
    node[leaf] = value


def apply_overrides(config_dict: dict[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``overrides`` into a nested config dict, in place.

    Keys may be dotted (``"backend.name"``) or map to nested dicts, which
    are merged key by key instead of replacing the section.

    Example:
        >>> apply_overrides({"backend": {"name": "jax"}}, {"backend.platform": "gpu", "seed": 0})
        {'backend': {'name': 'jax', 'platform': 'gpu'}, 'seed': 0}
    """
    for key, value in overrides.items():
        if "." in key:
            _set_dotted(config_dict, key, value)
        elif isinstance(value, Mapping) and isinstance(config_dict.get(key), dict):
            apply_overrides(config_dict[key], value)
        else:
            config_dict[key] = value
    return config_dict


def load_config(path: str | Path, config_cls: Type[T], overrides: Mapping[str, Any] | None = None) -> T:
    """Load a YAML config file, apply overrides and validate the result.

    Args:
        path: Path to a YAML file holding a mapping (may be empty)
        config_cls: Pydantic config class to instantiate (e.g., BenchmarkConfig)
        overrides: Values taking precedence over the file (see :func:`apply_overrides`)

    Returns:
        Validated config object

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file does not hold a mapping
        pydantic.ValidationError: If the merged values are invalid

    Example:
        >>> config = load_config("sweep.yaml", BenchmarkConfig, {"backend.name": "threads"})
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        config_dict = yaml.safe_load(f) or {}
    if not isinstance(config_dict, dict):
        raise ValueError(f"Config file {path} must hold a mapping, got {type(config_dict).__name__}")

    return config_cls(**apply_overrides(config_dict, overrides or {}))


def save_config(config: BaseModel, path: str | Path) -> Path:
    """Write ``config`` as YAML, creating parent directories.

    The file holds every field, so it reloads to an equal config even if
    the defaults change later.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.dump(config.model_dump(mode="json"), f, default_flow_style=False, sort_keys=False)

    return path
