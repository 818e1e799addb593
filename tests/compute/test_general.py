"""Tests for the general-purpose multiplication strategy."""

import numpy as np
import pytest

from crossbench.compute.general import GeneralComputeStrategy, multiply_ordered
from crossbench.core.errors import DimensionMismatchError
from crossbench.core.matrix import generate_matrix_pair


def _triple_loop(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Reference C[i][j] = sum_k A[i][k] * B[k][j], accumulated in float32 for k = 0..N-1."""
    size = a.shape[0]
    out = np.zeros((size, size), dtype=np.float32)
    for i in range(size):
        for j in range(size):
            total = np.float32(0.0)
            for k in range(size):
                total = np.float32(total + np.float32(a[i, k] * b[k, j]))
            out[i, j] = total
    return out


class TestMultiplyOrdered:
    """Tests for the fixed-order kernel."""

    def test_known_integer_product(self, integer_operands):
        """[[1,2],[3,4]] x [[5,6],[7,8]] should be exactly [[19,22],[43,50]]."""
        a, b = integer_operands
        expected = np.array([[19.0, 22.0], [43.0, 50.0]], dtype=np.float32)

        np.testing.assert_array_equal(multiply_ordered(a, b), expected)
        np.testing.assert_array_equal(multiply_ordered(a, b, transpose=True), expected)

    def test_matches_triple_loop_bit_for_bit(self):
        """The vectorized kernel should reproduce the scalar triple loop exactly."""
        a, b = generate_matrix_pair(9, seed=11)

        np.testing.assert_array_equal(multiply_ordered(a, b), _triple_loop(a, b))

    def test_transpose_does_not_change_result(self):
        """Pre-transposition should change performance only, never the bits."""
        a, b = generate_matrix_pair(48, seed=5)

        np.testing.assert_array_equal(multiply_ordered(a, b, transpose=False), multiply_ordered(a, b, transpose=True))

    def test_close_to_blas(self):
        """Result should agree with numpy.matmul up to float32 rounding."""
        a, b = generate_matrix_pair(64, seed=2)

        np.testing.assert_allclose(multiply_ordered(a, b), a @ b, rtol=1e-5)

    def test_output_is_float32(self, integer_operands):
        a, b = integer_operands
        assert multiply_ordered(a, b).dtype == np.float32


class TestGeneralComputeStrategy:
    """Tests for GeneralComputeStrategy."""

    def test_returns_product_and_elapsed_time(self, integer_operands):
        """multiply should return the product and a non-negative duration."""
        a, b = integer_operands
        result, elapsed_ms = GeneralComputeStrategy().multiply(a, b)

        np.testing.assert_array_equal(result, np.array([[19.0, 22.0], [43.0, 50.0]], dtype=np.float32))
        assert elapsed_ms >= 0.0

    def test_repeated_calls_are_bit_identical(self):
        """Same inputs should always give the same bits."""
        a, b = generate_matrix_pair(32, seed=9)
        strategy = GeneralComputeStrategy()

        first, _ = strategy.multiply(a, b)
        second, _ = strategy.multiply(a, b)

        np.testing.assert_array_equal(first, second)

    @pytest.mark.parametrize("transpose", [True, False, "auto"])
    def test_all_transpose_modes_agree(self, transpose):
        """Every transpose mode should give the same product."""
        a, b = generate_matrix_pair(20, seed=4)
        reference = multiply_ordered(a, b)

        result, _ = GeneralComputeStrategy(transpose=transpose, transpose_min_size=16).multiply(a, b)

        np.testing.assert_array_equal(result, reference)

    def test_auto_transpose_is_size_gated(self):
        """'auto' should transpose from transpose_min_size upward."""
        strategy = GeneralComputeStrategy(transpose="auto", transpose_min_size=256)

        assert not strategy.uses_transpose(255)
        assert strategy.uses_transpose(256)
        assert GeneralComputeStrategy(transpose=True).uses_transpose(1)
        assert not GeneralComputeStrategy(transpose=False).uses_transpose(4096)

    def test_invalid_transpose_mode(self):
        with pytest.raises(ValueError):
            GeneralComputeStrategy(transpose="always")  # type: ignore[arg-type]

    def test_dimension_mismatch(self):
        """Operands of different sizes should raise DimensionMismatchError."""
        with pytest.raises(DimensionMismatchError):
            GeneralComputeStrategy().multiply(np.zeros((3, 3), np.float32), np.zeros((4, 4), np.float32))

    def test_non_square_rejected(self):
        """Rectangular operands should raise DimensionMismatchError."""
        with pytest.raises(DimensionMismatchError):
            GeneralComputeStrategy().multiply(np.zeros((3, 2), np.float32), np.zeros((2, 3), np.float32))
