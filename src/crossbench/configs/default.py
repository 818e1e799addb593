"""
Defines the schema for benchmark configurations using hierarchical Pydantic models.

Default values live in the models; YAML files specify overrides only.
"""

import warnings
from typing import Annotated, Literal

from pydantic import Field, PositiveInt, field_validator, model_validator

from crossbench.codec.buffer import DEFAULT_MAX_DIMENSION
from crossbench.compute.general import DEFAULT_TRANSPOSE_MIN_SIZE
from crossbench.core.matrix import SEED_LIMIT
from crossbench.core.types import BaseModel

# Sizes above this make the thread-pool backend impractically slow
_THREADS_SIZE_WARNING = 2048


class BackendConfig(BaseModel):
    """Schema for the accelerated path's backend."""

    name: str = "jax"  # registered backend name
    platform: str | None = None  # JAX platform for the jax backend (None = default device)
    max_workers: PositiveInt | None = None  # thread count for the threads backend

    def factory_kwargs(self) -> dict:
        """Keyword arguments accepted by the named backend's factory."""
        if self.name == "jax":
            return {"platform": self.platform}
        if self.name == "threads":
            return {"max_workers": self.max_workers}
        return {}


class GeneralConfig(BaseModel):
    """Schema for the general-purpose (host) path."""

    transpose: bool | Literal["auto"] = "auto"  # size-gated by default
    transpose_min_size: PositiveInt = DEFAULT_TRANSPOSE_MIN_SIZE


class CodecConfig(BaseModel):
    """Schema for the half-precision buffer codec."""

    max_dimension: PositiveInt = DEFAULT_MAX_DIMENSION


class BenchmarkConfig(BaseModel):
    """Schema for the top-level configuration of a benchmark sweep."""

    sizes: tuple[PositiveInt, ...] = (64, 128, 256, 512)
    seed: Annotated[int, Field(ge=0, lt=SEED_LIMIT)] | None = None  # None = fresh matrices for every run

    backend: BackendConfig = BackendConfig()
    general: GeneralConfig = GeneralConfig()
    codec: CodecConfig = CodecConfig()

    @field_validator("sizes")
    @classmethod
    def validate_sizes_not_empty(cls, sizes: tuple[int, ...]) -> tuple[int, ...]:
        if not sizes:
            raise ValueError("At least one matrix size is required")
        return sizes

    @model_validator(mode="after")
    def validate_sizes_fit_codec(self) -> "BenchmarkConfig":
        """Reject sizes the accelerator buffers cannot hold."""
        too_large = [size for size in self.sizes if size > self.codec.max_dimension]
        if too_large:
            raise ValueError(
                f"Sizes {too_large} exceed codec.max_dimension ({self.codec.max_dimension}). "
                f"Reduce the sizes or raise codec.max_dimension."
            )
        return self

    @model_validator(mode="after")
    def validate_threads_sizes(self) -> "BenchmarkConfig":
        """Warn when the thread-pool backend is asked for very large matrices."""
        if self.backend.name == "threads" and max(self.sizes) > _THREADS_SIZE_WARNING:
            warnings.warn(
                f"Performance warning: the threads backend materializes N x N products per row band; "
                f"sizes above {_THREADS_SIZE_WARNING} (got {max(self.sizes)}) will be very slow.",
                UserWarning,
                stacklevel=2,
            )
        return self
