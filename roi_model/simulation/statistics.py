"""
Statistics primitives for the Monte Carlo simulation.

Sampling functions take an explicit numpy Generator; nothing in this module
touches global random state. Descriptive statistics accept any sequence of
floats and return plain Python floats.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np


def gaussian_random(mean: float, std_dev: float, rng: np.random.Generator) -> float:
    """
    Normal draw via the Box-Muller transform.

    u1 is redrawn while it is exactly 0 so log(u1) stays finite.
    """
    u1 = rng.random()
    while u1 == 0.0:
        u1 = rng.random()
    u2 = rng.random()
    z = math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
    return mean + std_dev * z


def lognormal_random(mu: float, sigma: float, rng: np.random.Generator) -> float:
    """exp(N(mu, sigma)); always strictly positive."""
    return math.exp(gaussian_random(mu, sigma, rng))


def triangular_random(low: float, mode: float, high: float, rng: np.random.Generator) -> float:
    """
    Triangular draw by inverse-CDF sampling.

    mode is clamped into [low, high]; low == high returns low.

    Raises:
        ValueError: If low > high.
    """
    if low > high:
        raise ValueError(f"Triangular bounds need low <= high, got low={low}, high={high}")
    if low == high:
        return low
    mode = clamp(mode, low, high)
    u = rng.random()
    split = (mode - low) / (high - low)
    if u < split:
        return low + math.sqrt(u * (high - low) * (mode - low))
    return high - math.sqrt((1 - u) * (high - low) * (high - mode))


def percentile(sorted_values: Sequence[float], p: float) -> float:
    """
    Linearly interpolated percentile of an ascending sequence.

    Args:
        sorted_values:
            Values in ascending order.

        p:
            Percentile in [0, 100].

    Returns:
        Interpolated order statistic; 0.0 for an empty sequence.

    Raises:
        ValueError: If p is outside [0, 100].

    Example:
        >>> percentile([1, 2, 3, 4], 50)
        2.5
    """
    if not 0 <= p <= 100:
        raise ValueError(f"Percentile must be in [0, 100], got {p}")
    if len(sorted_values) == 0:
        return 0.0
    return float(np.percentile(np.asarray(sorted_values, dtype=float), p, method='linear'))


def mean(values: Sequence[float]) -> float:
    if len(values) == 0:
        return 0.0
    return float(np.mean(values))


def std_dev(values: Sequence[float]) -> float:
    """Population standard deviation; 0.0 for fewer than two values."""
    if len(values) < 2:
        return 0.0
    return float(np.std(values, ddof=0))


def clamp(value: float, lower: float, upper: float) -> float:
    return min(max(value, lower), upper)
