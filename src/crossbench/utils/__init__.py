"""Utility functions for crossbench."""

from .config import apply_overrides, load_config, save_config
from .device import get_device_info
from .memory import estimate_matmul_memory_mb, get_array_memory_mb

__all__ = ["apply_overrides", "load_config", "save_config", "get_device_info", "estimate_matmul_memory_mb", "get_array_memory_mb"]
