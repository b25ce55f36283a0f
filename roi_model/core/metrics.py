"""
FinancialMetrics: NPV, IRR, payback and ROIC for a 5-year projection.

All methods operate on a list of yearly net cash flows plus the upfront
investment paid at t=0. Rates are fractions (0.10 = 10%).

UNDEFINED RESULTS
-----------------
None of the metrics raises for ordinary financial outcomes:
    - IRR returns an IRRResult; when no credible root exists it has
      converged=False, value=None and a reason:
        'no_sign_change'   stream has no positive or no negative value
        'flat_derivative'  NPV slope vanished before convergence
        'diverged'         iterate left the domain (rate <= -1 or non-finite)
        'implausible'      converged outside (IRR_LOWER_BOUND, IRR_UPPER_BOUND)
        'max_iterations'   no convergence within max_iterations
    - Payback beyond the horizon returns HORIZON_MONTHS + 1
    - ROIC with zero capital deployed returns 0.0

CAPS
----
apply_cap() clamps a raw value to empirical bounds and keeps the raw value and
a "was capped" flag, so reporting can disclose truncation.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from roi_model.core.cash_flow import CashFlowProjection
from roi_model.settings import (
    HORIZON_MONTHS,
    IRR_INITIAL_GUESS,
    IRR_LOWER_BOUND,
    IRR_MAX_ITERATIONS,
    IRR_MAX_STEP,
    IRR_TOLERANCE,
    IRR_UPPER_BOUND,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IRRResult:
    """Tagged IRR outcome. value is None unless converged."""

    converged: bool
    value: Optional[float]
    iterations: int = 0
    reason: str = 'converged'

    @property
    def is_defined(self) -> bool:
        return self.converged and self.value is not None

    def display(self, not_applicable: str = 'not applicable') -> str:
        if not self.is_defined:
            return not_applicable
        return f"{self.value * 100:.1f}%"


@dataclass(frozen=True)
class CappedValue:
    """A metric after empirical capping, with the raw value kept alongside."""

    raw: float
    value: float
    capped: bool


@dataclass(frozen=True)
class MetricsBundle:
    npv: float
    irr: IRRResult
    payback_months: int
    roic: float


def _undefined(reason: str, iterations: int = 0) -> IRRResult:
    logger.debug("IRR undefined: %s after %d iterations", reason, iterations)
    return IRRResult(converged=False, value=None, iterations=iterations, reason=reason)


class FinancialMetrics:
    """
    Calculator for discounted cash-flow metrics.

    Static methods only; every method is a pure function of its arguments.
    """

    @staticmethod
    def npv(
        net_cash_flows: Sequence[float],
        upfront: float,
        discount_rate: float,
    ) -> float:
        """
        Net present value.

        Formula:
            NPV = -upfront + Σ net[t] / (1 + r)^(t+1)

        Example:
            >>> FinancialMetrics.npv([60000] * 5, upfront=200000, discount_rate=0.10)
            27447.206...
        """
        cash_flows = np.asarray(net_cash_flows, dtype=float)
        periods = np.arange(1, len(cash_flows) + 1)
        return float(np.sum(cash_flows / (1 + discount_rate) ** periods)) - upfront

    @staticmethod
    def irr(
        stream: Sequence[float],
        initial_guess: float = IRR_INITIAL_GUESS,
        max_iterations: int = IRR_MAX_ITERATIONS,
        tolerance: float = IRR_TOLERANCE,
        max_step: float = IRR_MAX_STEP,
        bounds: tuple = (IRR_LOWER_BOUND, IRR_UPPER_BOUND),
    ) -> IRRResult:
        """
        Internal rate of return by damped Newton-Raphson.

        Args:
            stream:
                Combined cash-flow stream, index 0 = t0 (normally -upfront).

            initial_guess:
                Starting rate. Default: 0.10.

            max_iterations:
                Iteration limit. Default: 200.

            tolerance:
                Convergence criterion on |rate delta|. Default: 1e-4.

            max_step:
                Newton step magnitude is clamped to this per iteration. Default: 1.0.

            bounds:
                Converged rates outside this open interval are rejected as
                not credible. Default: (-1, 10).

        Returns:
            IRRResult; see module docstring for undefined reasons.
        """
        if not any(cf > 0 for cf in stream) or not any(cf < 0 for cf in stream):
            return _undefined('no_sign_change')

        lower, upper = bounds
        rate = initial_guess
        for i in range(1, max_iterations + 1):
            if not math.isfinite(rate) or rate <= -1:
                return _undefined('diverged', i)

            npv = 0.0
            slope = 0.0
            for t, cash_flow in enumerate(stream):
                npv += cash_flow / (1 + rate) ** t
                slope -= t * cash_flow / (1 + rate) ** (t + 1)
            if abs(slope) < 1e-10:
                return _undefined('flat_derivative', i)

            step = npv / slope
            if abs(step) > max_step:
                step = math.copysign(max_step, step)
            new_rate = rate - step
            if not math.isfinite(new_rate):
                return _undefined('diverged', i)

            if abs(new_rate - rate) < tolerance:
                if not lower < new_rate < upper:
                    return _undefined('implausible', i)
                return IRRResult(converged=True, value=new_rate, iterations=i)
            rate = new_rate

        return _undefined('max_iterations', max_iterations)

    @staticmethod
    def payback_months(
        net_cash_flows: Sequence[float],
        upfront: float,
        horizon_months: int = HORIZON_MONTHS,
    ) -> int:
        """
        Month in which cumulative net cash first reaches zero.

        Each year's net cash flow is spread evenly over its 12 months.

        Returns:
            Payback month (1-based), or horizon_months + 1 if the investment
            does not pay back within the horizon.
        """
        cumulative = -upfront
        for month in range(1, horizon_months + 1):
            year_index = (month - 1) // 12
            if year_index >= len(net_cash_flows):
                break
            cumulative += net_cash_flows[year_index] / 12
            if cumulative >= 0:
                return month
        return horizon_months + 1

    @staticmethod
    def roic(
        net_cash_flows: Sequence[float],
        upfront: float,
        total_capital: float,
    ) -> float:
        """
        Return on invested capital.

        Formula:
            ROIC = (Σ net - upfront) / total_capital

        Separation costs are already deducted from the yearly net flows, so
        only the upfront investment is subtracted; total_capital includes
        upfront plus all phased separation costs.

        Returns:
            ROIC as fraction; 0.0 if total_capital <= 0.
        """
        if total_capital <= 0:
            return 0.0
        return (sum(net_cash_flows) - upfront) / total_capital

    @staticmethod
    def evaluate(
        projection: CashFlowProjection,
        total_capital: float,
        discount_rate: float,
    ) -> MetricsBundle:
        """Compute NPV, IRR, payback and ROIC for one projection (uncapped)."""
        flows = projection.net_cash_flows
        upfront = projection.upfront_investment
        return MetricsBundle(
            npv=FinancialMetrics.npv(flows, upfront, discount_rate),
            irr=FinancialMetrics.irr(projection.stream()),
            payback_months=FinancialMetrics.payback_months(flows, upfront),
            roic=FinancialMetrics.roic(flows, upfront, total_capital),
        )


def apply_cap(raw: float, lower: float, upper: float) -> CappedValue:
    """Clamp raw to [lower, upper], flagging whether clamping changed it."""
    value = min(max(raw, lower), upper)
    return CappedValue(raw=raw, value=value, capped=value != raw)
