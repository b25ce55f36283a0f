"""
Threshold and breakeven analysis of the base case.

Answers "how much worse can it get before NPV turns negative?" three ways:
    - breakeven risk multiplier: the risk multiplier at which a level
      (adoption-ramped) savings stream exactly covers upfront and ongoing cost
    - maximum ongoing cost: the annual operating cost that NPV can absorb
    - breakeven savings multiplier: the scenario multiplier at which the full
      5-year DCF gives NPV = 0, solved with scipy.optimize.brentq

The first two are closed-form approximations over the discounted adoption
ramp; the third uses the full cash-flow model.

investment_sensitivity() sweeps the implementation cost over a range of
multipliers and reports NPV, IRR, ROIC and payback at each point.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from scipy.optimize import brentq

from roi_model.core.cash_flow import project_cash_flows
from roi_model.core.cost_model import CostModel
from roi_model.core.inputs import InputSet
from roi_model.core.metrics import FinancialMetrics
from roi_model.core.value_model import ValueModel
from roi_model.settings import ADOPTION_RAMP

logger = logging.getLogger(__name__)

BREAKEVEN_BRACKET = (0.0, 10.0)
DEFAULT_INVESTMENT_MULTIPLIERS = (0.5, 0.6, 0.7, 0.8, 0.9, 1.0, 1.1, 1.2, 1.3, 1.4, 1.5, 1.75, 2.0)


@dataclass(frozen=True)
class ThresholdAnalysis:
    breakeven_risk_multiplier: Optional[float]
    current_risk_multiplier: float
    max_ongoing_cost: Optional[float]
    current_ongoing_cost: float
    breakeven_savings_multiplier: Optional[float]

    @property
    def risk_margin(self) -> Optional[float]:
        if self.breakeven_risk_multiplier is None:
            return None
        return self.current_risk_multiplier - self.breakeven_risk_multiplier

    @property
    def is_viable(self) -> bool:
        return (
            self.breakeven_risk_multiplier is not None
            and self.current_risk_multiplier > self.breakeven_risk_multiplier
        )

    @property
    def ongoing_cost_margin(self) -> Optional[float]:
        if self.max_ongoing_cost is None:
            return None
        return self.max_ongoing_cost - self.current_ongoing_cost


@dataclass(frozen=True)
class InvestmentSweep:
    """Metrics across implementation-cost multipliers (1.0 = realistic cost)."""

    multipliers: Tuple[float, ...]
    npv: Tuple[float, ...]
    irr: Tuple[Optional[float], ...]
    roic: Tuple[float, ...]
    payback_months: Tuple[int, ...]
    breakeven_multiplier: Optional[float]


def discounted_ramp_factor(discount_rate: float) -> float:
    """Σ ADOPTION_RAMP[y] / (1 + r)^(y+1): present value of one ramped unit per year."""
    return sum(ramp / (1 + discount_rate) ** (y + 1) for y, ramp in enumerate(ADOPTION_RAMP))


def _solve_root(func, bracket: Tuple[float, float]) -> Optional[float]:
    """Root of func in bracket, or None when func does not change sign there."""
    lower, upper = bracket
    f_lower, f_upper = func(lower), func(upper)
    if f_lower == 0:
        return lower
    if f_upper == 0:
        return upper
    if (f_lower > 0) == (f_upper > 0):
        logger.debug("No sign change of %s in [%s, %s]", getattr(func, '__name__', 'func'), lower, upper)
        return None
    return brentq(func, lower, upper, xtol=1e-8)


def breakeven_savings_multiplier(
    inputs: InputSet,
    value: ValueModel,
    costs: CostModel,
    bracket: Tuple[float, float] = BREAKEVEN_BRACKET,
) -> Optional[float]:
    """
    Savings multiplier at which base NPV is zero.

    Returns:
        Multiplier in bracket, or None if NPV does not change sign within it.
    """
    def npv_at_multiplier(multiplier: float) -> float:
        projection = project_cash_flows(value, costs, multiplier)
        return FinancialMetrics.npv(
            projection.net_cash_flows, projection.upfront_investment, inputs.discount_rate
        )

    return _solve_root(npv_at_multiplier, bracket)


def calculate_threshold_analysis(
    inputs: InputSet,
    value: ValueModel,
    costs: CostModel,
) -> ThresholdAnalysis:
    """
    Breakeven thresholds for the base case.

    Formulas (F = discounted_ramp_factor(discount_rate)):
        breakeven_risk = (upfront / F + base_ongoing) / gross_annual_savings
        max_ongoing    = risk_adjusted_savings - upfront / F

    Both are None when their denominator is zero.
    """
    pv_factor = discounted_ramp_factor(inputs.discount_rate)
    upfront = costs.upfront_investment

    breakeven_risk = None
    max_ongoing = None
    if pv_factor > 0:
        max_ongoing = value.risk_adjusted_savings - upfront / pv_factor
        if value.gross_annual_savings > 0:
            breakeven_risk = (upfront / pv_factor + costs.base_ongoing_cost) / value.gross_annual_savings

    return ThresholdAnalysis(
        breakeven_risk_multiplier=breakeven_risk,
        current_risk_multiplier=value.risk_multiplier,
        max_ongoing_cost=max_ongoing,
        current_ongoing_cost=costs.base_ongoing_cost,
        breakeven_savings_multiplier=breakeven_savings_multiplier(inputs, value, costs),
    )


def investment_sensitivity(
    inputs: InputSet,
    value: ValueModel,
    costs: CostModel,
    multipliers: Sequence[float] = DEFAULT_INVESTMENT_MULTIPLIERS,
) -> InvestmentSweep:
    """
    Sweep the implementation cost and evaluate the base case at each point.

    Hidden costs follow the implementation cost; one-time, separation and
    ongoing costs stay fixed.

    Args:
        inputs:
            Normalized InputSet.

        value, costs:
            Base value and cost models.

        multipliers:
            Implementation-cost multipliers to test.
            Default: 0.5 ... 2.0.

    Returns:
        InvestmentSweep; breakeven_multiplier is the implementation-cost
        multiplier at which NPV = 0 (None if outside [0, 10]).

    Example:
        >>> sweep = investment_sensitivity(inputs, value, costs)
        >>> sweep.npv[0] > sweep.npv[-1]
        True
    """
    def evaluate(multiplier: float):
        scaled = costs.with_implementation_cost(
            costs.realistic_impl_cost * multiplier, inputs.data_readiness
        )
        projection = project_cash_flows(value, scaled)
        return FinancialMetrics.evaluate(projection, scaled.total_investment, inputs.discount_rate)

    def npv_at_investment(multiplier: float) -> float:
        return evaluate(multiplier).npv

    results = [evaluate(m) for m in multipliers]
    return InvestmentSweep(
        multipliers=tuple(multipliers),
        npv=tuple(r.npv for r in results),
        irr=tuple(r.irr.value for r in results),
        roic=tuple(r.roic for r in results),
        payback_months=tuple(r.payback_months for r in results),
        breakeven_multiplier=_solve_root(npv_at_investment, BREAKEVEN_BRACKET),
    )
