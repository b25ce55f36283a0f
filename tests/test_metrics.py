"""
Unit tests for the financial metrics.

Tests cover:
    1. NPV
    2. IRR solver, including every undefined outcome
    3. Payback month walk and the beyond-horizon sentinel
    4. ROIC and empirical caps

Run tests with: pytest tests/test_metrics.py -v
"""

import numpy as np
import pytest

from roi_model.core.metrics import FinancialMetrics, IRRResult, apply_cap
from roi_model.settings import HORIZON_MONTHS


class TestNPV:
    """Tests for net present value."""

    def test_annuity(self):
        npv = FinancialMetrics.npv([60000] * 5, upfront=200000, discount_rate=0.10)

        assert npv == pytest.approx(27447.21, abs=0.01)

    def test_zero_rate(self):
        npv = FinancialMetrics.npv([100, 200, 300], upfront=500, discount_rate=0.0)

        assert npv == pytest.approx(100.0)

    def test_discounting_starts_at_year_one(self):
        npv = FinancialMetrics.npv([110], upfront=0, discount_rate=0.10)

        assert npv == pytest.approx(100.0)

    def test_no_operating_years(self):
        npv = FinancialMetrics.npv([], upfront=1000, discount_rate=0.10)

        assert npv == -1000.0
        assert isinstance(npv, float)

    def test_accepts_array(self):
        flows = np.array([60000.0] * 5)

        assert FinancialMetrics.npv(flows, 200000, 0.10) == pytest.approx(27447.21, abs=0.01)


class TestIRR:
    """Tests for the damped Newton IRR solver."""

    def test_single_period(self):
        result = FinancialMetrics.irr([-100, 110])

        assert result.converged
        assert result.value == pytest.approx(0.10, abs=1e-6)
        assert result.reason == 'converged'

    def test_annuity_root(self):
        """At the IRR the NPV of the stream is zero."""
        result = FinancialMetrics.irr([-1000, 300, 300, 300, 300, 300])

        assert result.is_defined
        assert result.value == pytest.approx(0.1524, abs=1e-3)
        assert FinancialMetrics.npv([300] * 5, 1000, result.value) == pytest.approx(0.0, abs=0.01)

    def test_negative_irr(self):
        result = FinancialMetrics.irr([-1000, 100, 100, 100, 100, 100])

        assert result.is_defined
        assert result.value < 0

    def test_all_positive_is_undefined(self):
        result = FinancialMetrics.irr([100, 50, 50])

        assert not result.converged
        assert result.value is None
        assert result.reason == 'no_sign_change'

    def test_all_negative_is_undefined(self):
        result = FinancialMetrics.irr([-100, -50, -10, 0])

        assert result.value is None
        assert result.reason == 'no_sign_change'

    def test_implausible_rate_rejected(self):
        result = FinancialMetrics.irr([-100, 110], bounds=(-1.0, 0.05))

        assert result.value is None
        assert result.reason == 'implausible'

    def test_max_iterations(self):
        result = FinancialMetrics.irr([-100, 110], initial_guess=0.5, max_iterations=1)

        assert result.value is None
        assert result.reason == 'max_iterations'
        assert result.iterations == 1

    def test_flat_derivative(self):
        """NPV slope of [5, -100, 100] vanishes at rate 1.0."""
        result = FinancialMetrics.irr([5, -100, 100], initial_guess=1.0)

        assert result.value is None
        assert result.reason == 'flat_derivative'

    def test_diverged(self):
        result = FinancialMetrics.irr([-100, 110], initial_guess=-1.5)

        assert result.value is None
        assert result.reason == 'diverged'

    def test_display(self):
        assert IRRResult(converged=True, value=0.1234, iterations=3).display() == '12.3%'
        assert IRRResult(converged=False, value=None, reason='no_sign_change').display() == 'not applicable'


class TestPayback:
    """Tests for the month-by-month payback walk."""

    def test_pays_back_in_year_one(self):
        assert FinancialMetrics.payback_months([120] * 5, upfront=60) == 6

    def test_pays_back_in_later_year(self):
        """Year 1 recovers 120 of 180; the rest takes 5 months of Year 2 (12/month)."""
        assert FinancialMetrics.payback_months([120, 144, 0, 0, 0], upfront=180) == 17

    def test_no_payback_sentinel(self):
        assert FinancialMetrics.payback_months([0] * 5, upfront=100) == HORIZON_MONTHS + 1

    def test_nothing_invested(self):
        assert FinancialMetrics.payback_months([10] * 5, upfront=0) == 1


class TestROIC:
    """Tests for return on invested capital."""

    def test_roic(self):
        assert FinancialMetrics.roic([100] * 5, upfront=200, total_capital=400) == pytest.approx(0.75)

    def test_zero_capital(self):
        assert FinancialMetrics.roic([100] * 5, upfront=0, total_capital=0) == 0.0


class TestCaps:
    """Tests for empirical capping."""

    def test_above_cap(self):
        capped = apply_cap(3.5, -1.0, 2.0)

        assert capped.value == 2.0
        assert capped.raw == 3.5
        assert capped.capped is True

    def test_below_floor(self):
        capped = apply_cap(-1.7, -1.0, 1.0)

        assert capped.value == -1.0
        assert capped.capped is True

    def test_within_bounds(self):
        capped = apply_cap(0.4, -1.0, 1.0)

        assert capped.value == 0.4
        assert capped.capped is False


class TestEvaluate:
    def test_bundle_matches_individual_metrics(self, base_inputs):
        from roi_model.core.cash_flow import build_cash_flows
        from roi_model.core.cost_model import CostModel

        projection = build_cash_flows(base_inputs)
        total = CostModel.from_inputs(base_inputs).total_investment
        bundle = FinancialMetrics.evaluate(projection, total, base_inputs.discount_rate)

        assert bundle.npv == pytest.approx(FinancialMetrics.npv(
            projection.net_cash_flows, projection.upfront_investment, base_inputs.discount_rate
        ))
        assert bundle.irr == FinancialMetrics.irr(projection.stream())
        assert bundle.payback_months == FinancialMetrics.payback_months(
            projection.net_cash_flows, projection.upfront_investment
        )
