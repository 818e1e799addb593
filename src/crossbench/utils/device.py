"""Information about the JAX devices available to the accelerated path."""

import logging
from typing import Any

import jax

logger = logging.getLogger(__name__)


def get_device_info(platform: str | None = None) -> dict[str, Any]:
    """Get information about available JAX devices.

    Args:
        platform: Restrict to one platform ("cpu", "gpu", "tpu"); None for the default backend

    Returns:
        Dictionary with device type, count, and memory info (if available).
    """
    devices = jax.devices(platform) if platform else jax.devices()
    device_type = devices[0].platform

    info: dict[str, Any] = {
        "platform": device_type,
        "device_count": len(devices),
        "devices": [str(d) for d in devices],
    }

    # Memory stats are only reported by some accelerator runtimes
    if device_type != "cpu":
        stats = devices[0].memory_stats()
        if stats and "bytes_limit" in stats:
            info["memory_gb"] = stats["bytes_limit"] / (1024**3)
        else:
            logger.debug(f"No memory stats reported for {devices[0]}")

    return info
