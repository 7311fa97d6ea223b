"""
ConvolutionEngine tests: circular convolution mod Q via FFT.

Covers:
- exact O(N^2) reference
- identity (unit impulse) convolution
- randomized agreement with the exact reference (N=8, Q=17 and N=256, Q=65535)
- worst-case magnitudes at the default (N, Q)
- error bound: holds at the default parameters, exceeded for large (N, Q)
"""

import random

import numpy as np
import pytest

from reveler.errors import DimensionMismatch, InvalidEntry
from reveler.fft import ConvolutionEngine, circular_convolve_exact, error_bound
from reveler.params import N, Q, RandomSource


# ─────────────────────────────────────────────────────────────────────
# Exact reference
# ─────────────────────────────────────────────────────────────────────

class TestExactReference:
    def test_known_small(self):
        # (1 + 2x)(3 + x) mod (x^3 - 1) = 3 + 7x + 2x^2
        assert circular_convolve_exact([1, 2, 0], [3, 1, 0], 17) == [3, 7, 2]

    def test_wraps_around(self):
        # x^2 * x = x^3 = 1 mod (x^3 - 1)
        assert circular_convolve_exact([0, 0, 1], [0, 1, 0], 17) == [1, 0, 0]

    def test_reduces_mod_q(self):
        assert circular_convolve_exact([16, 0], [16, 0], 17) == [1, 0]

    def test_length_mismatch(self):
        with pytest.raises(DimensionMismatch):
            circular_convolve_exact([1, 2], [1, 2, 3], 17)


# ─────────────────────────────────────────────────────────────────────
# FFT convolution
# ─────────────────────────────────────────────────────────────────────

class TestConvolve:
    def test_identity_impulse(self):
        engine = ConvolutionEngine(n=4, q=17)
        result = engine.convolve([5, 9, 13, 2], [1, 0, 0, 0])
        assert list(result) == [5, 9, 13, 2]

    def test_identity_impulse_reduces(self):
        engine = ConvolutionEngine(n=4, q=17)
        result = engine.convolve([20, 9, 13, 2], [1, 0, 0, 0])
        assert list(result) == [3, 9, 13, 2]

    def test_shift_by_one(self):
        engine = ConvolutionEngine(n=4, q=17)
        result = engine.convolve([5, 9, 13, 2], [0, 1, 0, 0])
        assert list(result) == [2, 5, 9, 13]

    def test_commutative(self):
        engine = ConvolutionEngine(n=8, q=17)
        u = [3, 1, 4, 1, 5, 9, 2, 6]
        v = [2, 7, 1, 8, 2, 8, 1, 8]
        assert list(engine.convolve(u, v)) == list(engine.convolve(v, u))

    def test_matches_exact_small_random(self):
        """1000 random trials at N=8, Q=17."""
        engine = ConvolutionEngine(n=8, q=17)
        rng = random.Random(2024)
        for _ in range(1000):
            u = [rng.randrange(17) for _ in range(8)]
            v = [rng.randrange(17) for _ in range(8)]
            assert list(engine.convolve(u, v)) == circular_convolve_exact(u, v, 17)

    def test_matches_exact_default_params(self):
        engine = ConvolutionEngine(n=N, q=Q)
        rng = RandomSource(seed=7)
        for _ in range(5):
            u = rng.vector(N, Q)
            v = rng.vector(N, Q)
            assert list(engine.convolve(u, v)) == circular_convolve_exact(u, v, Q)

    def test_worst_case_magnitude(self):
        """All entries Q-1: largest possible exact coefficient N*(Q-1)^2."""
        engine = ConvolutionEngine(n=N, q=Q)
        u = [Q - 1] * N
        expected = (N * (Q - 1) ** 2) % Q
        assert list(engine.convolve(u, u)) == [expected] * N

    def test_non_power_of_two_length(self):
        engine = ConvolutionEngine(n=12, q=Q)
        rng = RandomSource(seed=3)
        u = rng.vector(12, Q)
        v = rng.vector(12, Q)
        assert list(engine.convolve(u, v)) == circular_convolve_exact(u, v, Q)

    def test_output_range_and_dtype(self):
        engine = ConvolutionEngine(n=8, q=17)
        result = engine.convolve([16] * 8, [16] * 8)
        assert result.dtype == np.int64
        assert all(0 <= x < 17 for x in result)

    def test_length_mismatch(self):
        engine = ConvolutionEngine(n=4, q=17)
        with pytest.raises(DimensionMismatch):
            engine.convolve([1, 2, 3], [1, 0, 0, 0])

    def test_zero_length_engine_rejected(self):
        with pytest.raises(DimensionMismatch):
            ConvolutionEngine(n=0, q=17)

    def test_congruent_inputs_same_result(self):
        engine = ConvolutionEngine(n=4, q=17)
        u = [5, 9, 13, 2]
        v = [3, 0, 16, 1]
        expected = engine.convolve(u, v)
        shifted = [x + 17 * 1000 for x in u]
        negative = [x - 34 for x in v]
        assert engine.convolve(shifted, negative).tolist() == expected.tolist()

    def test_uint64_input_reduced(self):
        engine = ConvolutionEngine(n=4, q=17)
        big = np.array([2 ** 63 + 1, 0, 0, 0], dtype=np.uint64)
        impulse = [1, 0, 0, 0]
        assert engine.convolve(big, impulse).tolist() == [(2 ** 63 + 1) % 17, 0, 0, 0]

    def test_float_input_rejected(self):
        engine = ConvolutionEngine(n=4, q=17)
        with pytest.raises(InvalidEntry):
            engine.convolve([1.5, 0, 0, 0], [1, 0, 0, 0])

    def test_oversized_input_rejected(self):
        engine = ConvolutionEngine(n=4, q=17)
        with pytest.raises(InvalidEntry):
            engine.convolve([1 << 70, 0, 0, 0], [1, 0, 0, 0])


# ─────────────────────────────────────────────────────────────────────
# Numeric correctness boundary
# ─────────────────────────────────────────────────────────────────────

class TestErrorBound:
    def test_default_params_within_bound(self):
        assert error_bound(N, Q) < 0.5
        assert ConvolutionEngine(n=N, q=Q).is_exact

    def test_large_params_exceed_bound(self):
        assert error_bound(1 << 20, Q) > 0.5
        assert error_bound(N, (1 << 32) - 1) > 0.5

    def test_bound_grows_with_n(self):
        assert error_bound(512, Q) > error_bound(256, Q)

    def test_engine_warns_out_of_bound(self, caplog):
        with caplog.at_level("WARNING", logger="reveler.fft"):
            engine = ConvolutionEngine(n=N, q=(1 << 32) - 1)
        assert not engine.is_exact
        assert "silently wrong" in caplog.text

    def test_measured_error_below_half(self):
        engine = ConvolutionEngine(n=N, q=Q)
        worst = engine.max_rounding_error(20, RandomSource(seed=11))
        assert 0.0 <= worst < 0.5

