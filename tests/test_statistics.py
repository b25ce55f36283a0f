"""
Unit tests for the statistics primitives.

Run tests with: pytest tests/test_statistics.py -v
"""

import numpy as np
import pytest

from roi_model.simulation.statistics import (
    clamp,
    gaussian_random,
    lognormal_random,
    mean,
    percentile,
    std_dev,
    triangular_random,
)


class TestPercentile:
    """Tests for the linearly interpolated percentile."""

    def test_extremes(self):
        values = [3.0, 7.5, 9.0, 12.0, 40.0]

        assert percentile(values, 0) == min(values)
        assert percentile(values, 100) == max(values)

    def test_even_length_median(self):
        assert percentile([1, 2, 3, 4], 50) == pytest.approx(2.5)

    def test_odd_length_median(self):
        assert percentile([1, 2, 3], 50) == pytest.approx(2.0)

    def test_interpolation(self):
        assert percentile([10, 20, 30], 25) == pytest.approx(15.0)

    def test_empty(self):
        assert percentile([], 50) == 0.0

    def test_single_element(self):
        assert percentile([42.0], 10) == 42.0
        assert percentile([42.0], 90) == 42.0

    def test_out_of_range(self):
        with pytest.raises(ValueError, match="Percentile"):
            percentile([1, 2, 3], 101)
        with pytest.raises(ValueError, match="Percentile"):
            percentile([1, 2, 3], -1)


class TestDescriptive:
    """Tests for mean, std_dev and clamp."""

    def test_population_std_dev(self):
        assert std_dev([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(2.0)

    def test_std_dev_needs_two_values(self):
        assert std_dev([5.0]) == 0.0
        assert std_dev([]) == 0.0

    def test_mean(self):
        assert mean([1, 2, 3, 4]) == pytest.approx(2.5)
        assert mean([]) == 0.0

    def test_clamp(self):
        assert clamp(5, 0, 3) == 3
        assert clamp(-1, 0, 3) == 0
        assert clamp(2, 0, 3) == 2


class TestSampling:
    """Statistical contracts of the samplers (seeded)."""

    def setup_method(self):
        self.rng = np.random.default_rng(12345)

    def test_gaussian_moments(self):
        draws = [gaussian_random(10.0, 2.0, self.rng) for _ in range(20000)]

        assert np.mean(draws) == pytest.approx(10.0, abs=0.1)
        assert np.std(draws) == pytest.approx(2.0, abs=0.1)

    def test_gaussian_zero_std_dev(self):
        assert gaussian_random(3.0, 0.0, self.rng) == 3.0

    def test_lognormal_positive(self):
        draws = [lognormal_random(0.0, 1.5, self.rng) for _ in range(5000)]

        assert min(draws) > 0

    def test_lognormal_median(self):
        draws = [lognormal_random(0.0, 0.3, self.rng) for _ in range(20000)]

        assert np.median(draws) == pytest.approx(1.0, abs=0.03)

    def test_triangular_bounds_and_mean(self):
        draws = [triangular_random(0.2, 0.4, 0.8, self.rng) for _ in range(20000)]

        assert min(draws) >= 0.2
        assert max(draws) <= 0.8
        assert np.mean(draws) == pytest.approx((0.2 + 0.4 + 0.8) / 3, abs=0.01)

    def test_triangular_degenerate(self):
        assert triangular_random(0.5, 0.5, 0.5, self.rng) == 0.5

    def test_triangular_mode_outside_bounds(self):
        draws = [triangular_random(0.2, 0.95, 0.8, self.rng) for _ in range(1000)]

        assert all(0.2 <= d <= 0.8 for d in draws)

    def test_triangular_invalid_bounds(self):
        with pytest.raises(ValueError, match="low <= high"):
            triangular_random(0.8, 0.5, 0.2, self.rng)

    def test_reproducible(self):
        a = [gaussian_random(0, 1, np.random.default_rng(7)) for _ in range(3)]
        b = [gaussian_random(0, 1, np.random.default_rng(7)) for _ in range(3)]

        assert a == b
