"""Matrix generation and operand checks for benchmark inputs."""

import jax
import jax.numpy as jnp
import numpy as np

from .errors import DimensionMismatchError, InvalidSeedError, InvalidSizeError
from .types import Matrix, PRNGKey

# jax.random keys hold 32-bit seeds unless x64 is enabled
SEED_LIMIT = 2**32


def _check_size(size: int) -> int:
    if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
        raise InvalidSizeError(f"Matrix size must be an integer, got {type(size).__name__}")
    if size <= 0:
        raise InvalidSizeError(f"Matrix size must be positive, got {size}")
    return int(size)


def check_seed(seed: int) -> int:
    """Return ``seed`` as an int, rejecting values a PRNG key would silently truncate.

    Raises:
        InvalidSeedError: If seed is not an integer in ``[0, 2**32)``
    """
    if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
        raise InvalidSeedError(f"Seed must be an integer, got {type(seed).__name__}")
    if not 0 <= seed < SEED_LIMIT:
        raise InvalidSeedError(f"Seed must be in [0, 2**32), got {seed}")
    return int(seed)


def _fresh_seed() -> int:
    return int(np.random.default_rng().integers(0, 2**31 - 1))


def _uniform_matrix(key: PRNGKey, size: int) -> Matrix:
    values = jax.random.uniform(key, (size, size), dtype=jnp.float32, minval=0.0, maxval=1.0)
    matrix = np.array(jax.device_get(values), dtype=np.float32, order="C")
    matrix.setflags(write=False)
    return matrix


def generate_matrix(size: int, seed: int | None = None) -> Matrix:
    """Generate a read-only ``size x size`` float32 matrix with values in [0, 1).

    Args:
        size: Matrix dimension (must be a positive integer)
        seed: Random seed in ``[0, 2**32)``. When None a fresh seed is drawn, so consecutive
            calls are independent and not reproducible.

    Returns:
        Row-major float32 matrix in host memory

    Raises:
        InvalidSizeError: If size is not a positive integer
        InvalidSeedError: If seed is outside ``[0, 2**32)``
    """
    size = _check_size(size)
    seed = _fresh_seed() if seed is None else check_seed(seed)
    return _uniform_matrix(jax.random.key(seed), size)


def generate_matrix_pair(size: int, seed: int | None = None) -> tuple[Matrix, Matrix]:
    """Generate the two independent operands of one benchmark run.

    A single key is split in two, so a seeded pair is reproducible while the
    two matrices still differ.
    """
    size = _check_size(size)
    seed = _fresh_seed() if seed is None else check_seed(seed)
    key_a, key_b = jax.random.split(jax.random.key(seed))
    return _uniform_matrix(key_a, size), _uniform_matrix(key_b, size)


def check_operands(a: Matrix, b: Matrix) -> int:
    """Return the common dimension of two equal-sized square matrices.

    Raises:
        DimensionMismatchError: If either operand is not square or sizes differ
    """
    a_shape = np.shape(a)
    b_shape = np.shape(b)
    for name, shape in (("a", a_shape), ("b", b_shape)):
        if len(shape) != 2 or shape[0] != shape[1]:
            raise DimensionMismatchError(f"Operand {name} must be a square matrix, got shape {shape}")
    if a_shape != b_shape:
        raise DimensionMismatchError(f"Operands must have the same size, got {a_shape} and {b_shape}")
    if a_shape[0] == 0:
        raise DimensionMismatchError("Operands must not be empty")
    return int(a_shape[0])
