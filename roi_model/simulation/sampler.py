"""
Monte Carlo Sampler: one perturbed InputSet per draw.

CORRELATION STRUCTURE
---------------------
A single environment shock eps ~ N(0, 1) is drawn once per sample and passed
to every sampler that depends on the organizational environment. Positive eps
is a favorable environment (readiness tends up, costs tend down):

    variable               distribution                               uses eps   domain
    automation_potential   N(base, 0.08)                              no         [0.10, 0.95]
    change_readiness       base + {-1, 0, +1}, thresholds shifted     yes        int [1, 5]
    implementation_budget  base x LogN(-0.08 eps, 0.30)               yes        x [0.70, 1.80]
    ongoing_annual_cost    base x LogN(-0.06 eps, 0.35)               yes        x [0.50, 2.00]
    cash_realization_pct   Triangular(0.20, base, 0.80)               no         [0.20, 0.80]
    error_rate             N(base, 0.25 x base)                       no         [0.01, 0.50]

Readiness shift at eps = 0 is anchored on no change: 20% -1, 50% no change,
30% +1. Both thresholds (0.20 and 0.70) move down by 0.10 x eps.

Every sampled value is clamped to its domain whatever the shock magnitude. The
base InputSet is never modified; sample_inputs() returns a new instance.
"""

from __future__ import annotations

from dataclasses import replace

import numpy as np

from roi_model.core.inputs import InputSet
from roi_model.simulation.statistics import (
    clamp,
    gaussian_random,
    lognormal_random,
    triangular_random,
)

AUTOMATION_STD_DEV = 0.08
AUTOMATION_BOUNDS = (0.10, 0.95)

READINESS_DOWN_THRESHOLD = 0.20
READINESS_HOLD_THRESHOLD = 0.70
READINESS_SHOCK_BIAS = 0.10
READINESS_BOUNDS = (1, 5)

BUDGET_SHOCK_LOADING = 0.08
BUDGET_SIGMA = 0.30
BUDGET_MULTIPLIER_BOUNDS = (0.70, 1.80)

ONGOING_SHOCK_LOADING = 0.06
ONGOING_SIGMA = 0.35
ONGOING_MULTIPLIER_BOUNDS = (0.50, 2.00)

CASH_REALIZATION_BOUNDS = (0.20, 0.80)

ERROR_RELATIVE_STD_DEV = 0.25
ERROR_RATE_BOUNDS = (0.01, 0.50)


def draw_environment_shock(rng: np.random.Generator) -> float:
    """Shared standard-normal shock for one sample."""
    return gaussian_random(0.0, 1.0, rng)


def sample_automation_potential(base: float, rng: np.random.Generator) -> float:
    return clamp(gaussian_random(base, AUTOMATION_STD_DEV, rng), *AUTOMATION_BOUNDS)


def sample_change_readiness(base: int, shock: float, rng: np.random.Generator) -> int:
    """Shift readiness by -1, 0 or +1; a favorable shock lowers both thresholds."""
    roll = rng.random()
    bias = shock * READINESS_SHOCK_BIAS
    if roll < READINESS_DOWN_THRESHOLD - bias:
        shift = -1
    elif roll < READINESS_HOLD_THRESHOLD - bias:
        shift = 0
    else:
        shift = 1
    return int(clamp(base + shift, *READINESS_BOUNDS))


def sample_implementation_budget(base: float, shock: float, rng: np.random.Generator) -> float:
    """Budget x clamped lognormal multiplier; non-positive budgets are kept."""
    if base <= 0:
        return base
    multiplier = clamp(
        lognormal_random(-shock * BUDGET_SHOCK_LOADING, BUDGET_SIGMA, rng),
        *BUDGET_MULTIPLIER_BOUNDS,
    )
    return float(round(base * multiplier))


def sample_ongoing_cost(base: float, shock: float, rng: np.random.Generator) -> float:
    if base <= 0:
        return base
    multiplier = clamp(
        lognormal_random(-shock * ONGOING_SHOCK_LOADING, ONGOING_SIGMA, rng),
        *ONGOING_MULTIPLIER_BOUNDS,
    )
    return float(round(base * multiplier))


def sample_cash_realization(base: float, rng: np.random.Generator) -> float:
    low, high = CASH_REALIZATION_BOUNDS
    return clamp(triangular_random(low, base, high, rng), low, high)


def sample_error_rate(base: float, rng: np.random.Generator) -> float:
    return clamp(
        gaussian_random(base, base * ERROR_RELATIVE_STD_DEV, rng), *ERROR_RATE_BOUNDS
    )


def sample_inputs(base: InputSet, rng: np.random.Generator) -> InputSet:
    """
    Draw one perturbed copy of base.

    Args:
        base:
            Normalized InputSet. Not modified.

        rng:
            Random source for this sample.

    Returns:
        New InputSet with the six sampled fields replaced.

    Example:
        >>> rng = np.random.default_rng(7)
        >>> sampled = sample_inputs(inputs, rng)
        >>> 0.10 <= sampled.automation_potential <= 0.95
        True
    """
    shock = draw_environment_shock(rng)
    return replace(
        base,
        automation_potential=sample_automation_potential(base.automation_potential, rng),
        change_readiness=sample_change_readiness(base.change_readiness, shock, rng),
        implementation_budget=sample_implementation_budget(base.implementation_budget, shock, rng),
        ongoing_annual_cost=sample_ongoing_cost(base.ongoing_annual_cost, shock, rng),
        cash_realization_pct=sample_cash_realization(base.cash_realization_pct, rng),
        error_rate=sample_error_rate(base.error_rate, rng),
    )
