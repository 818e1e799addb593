"""Half-precision encode/decode boundary between host memory and the accelerator."""

from .buffer import (
    ALPHA,
    CHANNELS,
    DEFAULT_MAX_DIMENSION,
    SENTINEL,
    VALUE_CHANNEL,
    AcceleratorBuffer,
    BufferCodec,
    pixels_from_values,
    rounding_tolerance,
)

__all__ = [
    "ALPHA",
    "CHANNELS",
    "DEFAULT_MAX_DIMENSION",
    "SENTINEL",
    "VALUE_CHANNEL",
    "AcceleratorBuffer",
    "BufferCodec",
    "pixels_from_values",
    "rounding_tolerance",
]
