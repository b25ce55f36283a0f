"""
Unit tests for the threshold, breakeven and decision-support views.

Run tests with: pytest tests/test_analysis.py -v
"""

import dataclasses

import pytest

from roi_model.analysis.breakeven import (
    ThresholdAnalysis,
    breakeven_savings_multiplier,
    calculate_threshold_analysis,
    discounted_ramp_factor,
    investment_sensitivity,
)
from roi_model.analysis.outlook import (
    calculate_capital_efficiency,
    calculate_opportunity_cost,
    confidence_level,
    derive_confidence_intervals,
)
from roi_model.core.cash_flow import project_cash_flows
from roi_model.core.metrics import FinancialMetrics
from roi_model.core.scenarios import run_base_scenario, run_scenarios
from roi_model.core.sensitivity import run_sensitivity
from roi_model.settings import WAGE_INFLATION_RATE


class TestBreakeven:
    """Tests for the breakeven multipliers and threshold formulas."""

    def test_ramp_factor(self):
        # 0.75/1.1 + 0.90/1.21 + 1/1.331 + 1/1.4641 + 1/1.61051
        assert discounted_ramp_factor(0.10) == pytest.approx(3.4809, abs=1e-3)
        assert discounted_ramp_factor(0.0) == pytest.approx(4.65)

    def test_npv_zero_at_breakeven_multiplier(self, base_inputs, base_models):
        value, costs = base_models
        multiplier = breakeven_savings_multiplier(base_inputs, value, costs)

        assert multiplier is not None
        projection = project_cash_flows(value, costs, multiplier)
        npv = FinancialMetrics.npv(
            projection.net_cash_flows, projection.upfront_investment, base_inputs.discount_rate
        )
        assert npv == pytest.approx(0.0, abs=1.0)

    def test_no_root_in_bracket(self, base_inputs, base_models):
        """A bracket on which NPV never changes sign yields None."""
        value, costs = base_models

        assert breakeven_savings_multiplier(base_inputs, value, costs, bracket=(0.0, 0.01)) is None

    def test_threshold_formulas(self, base_inputs, base_models):
        value, costs = base_models
        threshold = calculate_threshold_analysis(base_inputs, value, costs)
        factor = discounted_ramp_factor(base_inputs.discount_rate)

        expected_risk = (costs.upfront_investment / factor + costs.base_ongoing_cost) / value.gross_annual_savings
        assert threshold.breakeven_risk_multiplier == pytest.approx(expected_risk)
        assert threshold.max_ongoing_cost == pytest.approx(
            value.risk_adjusted_savings - costs.upfront_investment / factor
        )
        assert threshold.current_risk_multiplier == value.risk_multiplier
        assert threshold.current_ongoing_cost == costs.base_ongoing_cost
        assert threshold.risk_margin == pytest.approx(value.risk_multiplier - expected_risk)
        assert threshold.is_viable == (value.risk_multiplier > expected_risk)

    def test_undefined_thresholds(self):
        threshold = ThresholdAnalysis(
            breakeven_risk_multiplier=None,
            current_risk_multiplier=0.7,
            max_ongoing_cost=None,
            current_ongoing_cost=10000.0,
            breakeven_savings_multiplier=None,
        )

        assert threshold.risk_margin is None
        assert threshold.ongoing_cost_margin is None
        assert threshold.is_viable is False


class TestInvestmentSensitivity:
    """Tests for the implementation-cost sweep."""

    def test_npv_decreases_with_cost(self, base_inputs, base_models):
        value, costs = base_models
        sweep = investment_sensitivity(base_inputs, value, costs)

        assert len(sweep.npv) == len(sweep.multipliers)
        assert all(a > b for a, b in zip(sweep.npv, sweep.npv[1:]))

    def test_realistic_cost_matches_base(self, base_inputs, base_models):
        value, costs = base_models
        sweep = investment_sensitivity(base_inputs, value, costs, multipliers=(1.0,))

        assert sweep.npv[0] == pytest.approx(run_base_scenario(base_inputs).npv)

    def test_breakeven_multiplier(self, base_inputs, base_models):
        value, costs = base_models
        sweep = investment_sensitivity(base_inputs, value, costs, multipliers=(0.5, 1.0, 2.0))

        if sweep.breakeven_multiplier is not None:
            assert 0.0 <= sweep.breakeven_multiplier <= 10.0
            if sweep.npv[1] > 0:
                assert sweep.breakeven_multiplier > 1.0


class TestOpportunityCost:
    """Tests for the cost of delaying the initiative."""

    def test_wage_inflation_year_one(self, base_inputs, base_models):
        value, costs = base_models
        outlook = calculate_opportunity_cost(base_inputs, value, costs)

        assert outlook.yearly[0].wage_inflation == pytest.approx(
            value.annual_labor_cost * WAGE_INFLATION_RATE
        )

    def test_forgone_savings_ramped(self, base_inputs, base_models):
        value, costs = base_models
        outlook = calculate_opportunity_cost(base_inputs, value, costs)
        net = value.risk_adjusted_savings - costs.base_ongoing_cost

        assert outlook.yearly[0].forgone_savings == pytest.approx(net * 0.75)
        assert outlook.yearly[2].forgone_savings == pytest.approx(net)

    def test_waiting_sums(self, base_inputs, base_models):
        value, costs = base_models
        outlook = calculate_opportunity_cost(base_inputs, value, costs)

        assert len(outlook.yearly) == 5
        assert outlook.cost_of_waiting_12_months == pytest.approx(outlook.yearly[0].total)
        assert outlook.cost_of_waiting_24_months == pytest.approx(
            outlook.yearly[0].total + outlook.yearly[1].total
        )
        assert outlook.total == pytest.approx(sum(y.total for y in outlook.yearly))

    def test_costs_compound(self, base_inputs, base_models):
        value, costs = base_models
        yearly = calculate_opportunity_cost(base_inputs, value, costs).yearly

        assert yearly[4].wage_inflation > yearly[0].wage_inflation
        assert yearly[4].competitive_loss > yearly[0].competitive_loss


class TestCapitalEfficiency:
    """Tests for NOPAT / EVA / cash-on-cash."""

    def test_eva_identity(self, base_inputs, base_models):
        value, costs = base_models
        base = run_scenarios(base_inputs, value_model=value, cost_model=costs).base
        efficiency = calculate_capital_efficiency(base, costs, base_inputs.discount_rate)

        assert efficiency.nopat == pytest.approx(
            base.projection.total_net / 5 * (1 - efficiency.effective_tax_rate)
        )
        assert efficiency.eva == pytest.approx(
            efficiency.nopat - costs.total_investment * efficiency.wacc
        )
        assert efficiency.cash_on_cash == pytest.approx(
            base.projection.years[2].net_cash_flow / costs.total_investment
        )
        assert efficiency.roic == base.raw_roic
        assert efficiency.creates_value == (efficiency.roic > efficiency.wacc)
        assert efficiency.roic_wacc_spread == pytest.approx(efficiency.roic - efficiency.wacc)

    def test_zero_investment(self, base_inputs, base_models):
        value, costs = base_models
        free = dataclasses.replace(costs, total_investment=0.0)
        base = run_base_scenario(base_inputs)

        assert calculate_capital_efficiency(base, free, 0.10).cash_on_cash == 0.0


class TestConfidence:
    """Tests for the deterministic bands and the qualitative label."""

    def test_band_ordering(self, base_inputs):
        scenarios = run_scenarios(base_inputs)
        bands = derive_confidence_intervals(scenarios, run_sensitivity(base_inputs))

        assert bands.npv.p25 <= bands.npv.p50 <= bands.npv.p75
        assert bands.roic.p25 <= bands.roic.p50 <= bands.roic.p75
        assert bands.payback.p25 >= bands.payback.p50 >= bands.payback.p75
        assert bands.npv.p50 == scenarios.base.npv

    def test_confidence_level(self, base_inputs, high_return_inputs):
        assert confidence_level(base_inputs) == 'Moderate'
        assert confidence_level(high_return_inputs) == 'High'

        low = dataclasses.replace(base_inputs, change_readiness=2, data_readiness=2)
        assert confidence_level(low) == 'Conservative'

        unsponsored = dataclasses.replace(high_return_inputs, exec_sponsor=False)
        assert confidence_level(unsponsored) == 'Moderate'
