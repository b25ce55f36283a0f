"""
Unit tests for input normalization.

Tests cover:
    1. Benchmark-derived defaults for missing optional fields
    2. camelCase aliases from the input wizard
    3. Clamping of out-of-range values
    4. Programmer errors: unknown fields, missing required fields, bad types

Run tests with: pytest tests/test_inputs.py -v
"""

import dataclasses
import math

import pytest

from roi_model import benchmarks
from roi_model.core.inputs import FIELD_ALIASES, FIELD_RULES, InputSet, normalize_inputs


class TestDefaults:
    """Tests for default derivation."""

    def test_minimal_inputs(self):
        """Only the required fields are needed."""
        inputs = normalize_inputs({'team_size': 10, 'avg_salary': 70000})

        assert inputs.team_size == 10
        assert inputs.avg_salary == 70000.0
        assert inputs.industry == 'Other'
        assert inputs.company_size == 'Mid-Market (501-5,000)'
        assert inputs.change_readiness == 3
        assert inputs.exec_sponsor is False
        assert inputs.include_capacity_value is False

    def test_automation_potential_from_benchmark(self):
        """Automation potential defaults to the industry x process benchmark."""
        inputs = normalize_inputs({
            'team_size': 10,
            'avg_salary': 70000,
            'industry': 'Technology / Software',
            'process_type': 'Workflow Automation',
        })

        assert inputs.automation_potential == pytest.approx(0.65)

    def test_unknown_industry_falls_back(self):
        """Unknown categories use the 'Other' benchmark row."""
        inputs = normalize_inputs({'team_size': 10, 'avg_salary': 70000, 'industry': 'Space Mining'})

        assert inputs.automation_potential == pytest.approx(
            benchmarks.AUTOMATION_POTENTIAL['Other']['Other']
        )
        assert inputs.regulatory_event_probability == pytest.approx(
            benchmarks.REGULATORY_EVENT_BENCHMARKS['Other']['probability']
        )

    def test_discount_rate_by_company_size(self):
        """Discount rate defaults to the company-size benchmark."""
        inputs = normalize_inputs({
            'team_size': 10, 'avg_salary': 70000, 'company_size': 'Startup (1-50)',
        })

        assert inputs.discount_rate == pytest.approx(0.18)

    def test_auto_budget_rounded(self):
        """Auto-estimated implementation budget and ongoing cost are multiples of 5,000."""
        inputs = normalize_inputs({'team_size': 30, 'avg_salary': 90000})

        assert inputs.implementation_budget > 0
        assert inputs.implementation_budget % 5000 == pytest.approx(0.0)
        assert inputs.ongoing_annual_cost % 5000 == pytest.approx(0.0)

    def test_none_means_default(self):
        """None is treated as a missing optional value."""
        inputs = normalize_inputs({'team_size': 10, 'avg_salary': 70000, 'error_rate': None})

        assert inputs.error_rate == pytest.approx(0.10)

    def test_every_field_has_a_rule(self):
        """The rule table enumerates exactly the InputSet fields."""
        names = [f.name for f in dataclasses.fields(InputSet)]

        assert list(FIELD_RULES) == names


class TestAliases:
    """Tests for wizard field names."""

    def test_camel_case_accepted(self):
        inputs = normalize_inputs({
            'teamSize': 12,
            'avgSalary': 80000,
            'implementationBudget': 150000,
            'execSponsor': True,
        })

        assert inputs.team_size == 12
        assert inputs.implementation_budget == pytest.approx(150000)
        assert inputs.exec_sponsor is True

    def test_aliases_target_known_fields(self):
        assert set(FIELD_ALIASES.values()) <= set(FIELD_RULES)


class TestClamping:
    """Tests for out-of-range values."""

    def test_readiness_clamped(self):
        inputs = normalize_inputs({
            'team_size': 10, 'avg_salary': 70000, 'change_readiness': 9, 'data_readiness': -2,
        })

        assert inputs.change_readiness == 5
        assert inputs.data_readiness == 1

    def test_readiness_rounded(self):
        inputs = normalize_inputs({'team_size': 10, 'avg_salary': 70000, 'change_readiness': 3.6})

        assert inputs.change_readiness == 4
        assert isinstance(inputs.change_readiness, int)

    def test_automation_potential_clamped(self):
        high = normalize_inputs({'team_size': 10, 'avg_salary': 70000, 'automation_potential': 1.4})
        low = normalize_inputs({'team_size': 10, 'avg_salary': 70000, 'automation_potential': 0.0})

        assert high.automation_potential == pytest.approx(0.95)
        assert low.automation_potential == pytest.approx(0.10)

    def test_negative_costs_floored(self):
        inputs = normalize_inputs({'team_size': 10, 'avg_salary': 70000, 'current_tool_costs': -500})

        assert inputs.current_tool_costs == 0.0


class TestErrors:
    """Tests for programmer errors."""

    def test_missing_required_field(self):
        with pytest.raises(ValueError, match="Missing required"):
            normalize_inputs({'team_size': 10})

    def test_unknown_field(self):
        with pytest.raises(ValueError, match="Unknown input field"):
            normalize_inputs({'team_size': 10, 'avg_salary': 70000, 'teamsize': 4})

    def test_vendor_count_not_an_input(self):
        """Only the vendor termination cost enters the model."""
        with pytest.raises(ValueError, match="Unknown input field 'vendorsReplaced'"):
            normalize_inputs({'team_size': 10, 'avg_salary': 70000, 'vendorsReplaced': 2})

        inputs = normalize_inputs({'team_size': 10, 'avg_salary': 70000, 'vendorTerminationCost': 15000})
        assert inputs.vendor_termination_cost == pytest.approx(15000)

    def test_non_numeric_value(self):
        with pytest.raises(ValueError, match="numeric"):
            normalize_inputs({'team_size': 'twenty', 'avg_salary': 70000})

    def test_bool_is_not_numeric(self):
        with pytest.raises(ValueError, match="numeric"):
            normalize_inputs({'team_size': 10, 'avg_salary': True})

    def test_string_flag_rejected(self):
        """'false' must not be read as a truthy string."""
        with pytest.raises(ValueError, match="boolean"):
            normalize_inputs({'team_size': 20, 'avg_salary': 85000, 'exec_sponsor': 'false'})

    def test_non_binary_int_flag_rejected(self):
        with pytest.raises(ValueError, match="boolean"):
            normalize_inputs({'team_size': 20, 'avg_salary': 85000, 'include_risk_reduction': 2})

    def test_binary_int_flag_accepted(self):
        inputs = normalize_inputs({'team_size': 20, 'avg_salary': 85000, 'exec_sponsor': 1})

        assert inputs.exec_sponsor is True

    def test_nan_rejected(self):
        with pytest.raises(ValueError, match="NaN"):
            normalize_inputs({'team_size': 10, 'avg_salary': math.nan})


class TestInputSet:
    """Tests for the InputSet record."""

    def test_input_set_passthrough(self, base_inputs):
        """An InputSet is returned as is."""
        assert normalize_inputs(base_inputs) is base_inputs

    def test_immutable(self, base_inputs):
        with pytest.raises(dataclasses.FrozenInstanceError):
            base_inputs.team_size = 99

    def test_to_dict(self, base_inputs):
        data = base_inputs.to_dict()

        assert data['team_size'] == 20
        assert normalize_inputs(data) == base_inputs
