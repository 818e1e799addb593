"""Memory accounting utilities for matrices and device buffers."""

from typing import Any

FLOAT32_BYTES = 4
MATRICES_PER_RUN = 3  # A, B and the product


def estimate_matmul_memory_mb(size: int, num_matrices: int = MATRICES_PER_RUN, bytes_per_element: int = FLOAT32_BYTES) -> float:
    """Estimate the memory footprint of a square float32 matmul in MB.

    This is a static accounting figure (``size² x 4 bytes x 3 matrices``),
    not a measured allocation: it ignores codec buffers, scratch space and
    allocator overhead.

    Args:
        size: Matrix dimension
        num_matrices: Number of matrices counted (default: A, B and C)
        bytes_per_element: Bytes per element (default: float32)

    Returns:
        Estimated memory in megabytes
    """
    return (size * size * bytes_per_element * num_matrices) / (1024 * 1024)


def get_array_memory_mb(arr: Any) -> float:
    """Calculate memory usage of a JAX or NumPy array in megabytes.

    Args:
        arr: JAX or NumPy array

    Returns:
        Memory usage in MB
    """
    return arr.nbytes / (1024 * 1024)
