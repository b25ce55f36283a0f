"""
Integration tests for run_calculations().

Run tests with: pytest tests/test_engine.py -v
"""

import pytest

from roi_model import ROIResult, ScenarioConfig, run_calculations
from roi_model.core.scenarios import run_base_scenario


class TestRunCalculations:
    """End-to-end evaluation of the reference business case."""

    @pytest.fixture(autouse=True)
    def _result(self, base_raw):
        self.raw = base_raw
        self.result = run_calculations(base_raw)

    def test_result_shape(self):
        assert isinstance(self.result, ROIResult)
        assert len(self.result.scenarios) == 3
        assert len(self.result.sensitivity) == 6
        assert self.result.monte_carlo is None

    def test_investment_properties(self):
        assert self.result.upfront_investment == self.result.cost_model.upfront_investment
        assert self.result.total_investment == self.result.cost_model.total_investment
        assert self.result.discount_rate == pytest.approx(0.10)

    def test_base_matches_standalone(self):
        """The engine and a standalone base run agree (caps aside)."""
        standalone = run_base_scenario(self.result.inputs)

        assert self.result.scenarios.base.npv == pytest.approx(standalone.npv)
        assert self.result.scenarios.base.raw_roic == pytest.approx(standalone.raw_roic)

    def test_expected_values(self):
        assert self.result.expected_npv == pytest.approx(self.result.scenarios.expected_npv)
        assert self.result.expected_roic == pytest.approx(self.result.scenarios.expected_roic)

    def test_decision_views(self):
        assert self.result.confidence_level == 'Moderate'
        assert self.result.confidence_intervals.npv.p50 == self.result.scenarios.base.npv
        assert len(self.result.opportunity_cost.yearly) == 5
        assert self.result.capital_efficiency.wacc == self.result.discount_rate

    def test_monte_carlo_opt_in(self):
        result = run_calculations(self.raw, monte_carlo_iterations=20, seed=42)

        assert result.monte_carlo is not None
        assert result.monte_carlo.sample_size == 20

    def test_seeded_reproducible(self):
        a = run_calculations(self.raw, monte_carlo_iterations=15, seed=7)
        b = run_calculations(self.raw, monte_carlo_iterations=15, seed=7)

        assert a.monte_carlo == b.monte_carlo

    def test_custom_scenarios(self):
        table = (ScenarioConfig('base', 'Base', 1.0, 1.0, apply_caps=True),)
        result = run_calculations(self.raw, scenarios=table)

        assert len(result.scenarios) == 1
        assert result.confidence_intervals.npv.p50 == result.scenarios.base.npv


class TestInvalidInputs:
    """Malformed inputs are rejected at the boundary."""

    def test_non_numeric(self, base_raw):
        base_raw['team_size'] = 'twenty'

        with pytest.raises(ValueError, match="numeric"):
            run_calculations(base_raw)

    def test_unknown_field(self, base_raw):
        base_raw['headcount'] = 20

        with pytest.raises(ValueError, match="Unknown input field"):
            run_calculations(base_raw)
