"""Shared fixtures for the roi_model test suite."""

import pytest

from roi_model.core.cost_model import CostModel
from roi_model.core.inputs import normalize_inputs
from roi_model.core.value_model import ValueModel


BASE_RAW = {
    'team_size': 20,
    'avg_salary': 85000,
    'error_rate': 0.15,
    'automation_potential': 0.55,
    'implementation_budget': 200000,
    'ongoing_annual_cost': 50000,
    'discount_rate': 0.10,
    'industry': 'Technology / Software',
    'process_type': 'Document Processing',
    'company_size': 'Mid-Market (501-5,000)',
    'exec_sponsor': True,
    'change_readiness': 3,
    'data_readiness': 3,
    'current_tool_costs': 50000,
    'expected_timeline': 6,
    'hours_per_week': 40,
}

# Large, well-prepared team with low separation cost: returns far above the caps
HIGH_RETURN_RAW = {
    'team_size': 200,
    'avg_salary': 150000,
    'error_rate': 0.15,
    'automation_potential': 0.90,
    'implementation_budget': 500000,
    'ongoing_annual_cost': 50000,
    'industry': 'Technology / Software',
    'company_size': 'Startup (1-50)',
    'exec_sponsor': True,
    'change_readiness': 5,
    'data_readiness': 5,
    'expected_timeline': 6,
    'hours_per_week': 40,
}


@pytest.fixture
def base_raw():
    return dict(BASE_RAW)


@pytest.fixture
def base_inputs():
    return normalize_inputs(BASE_RAW)


@pytest.fixture
def high_return_inputs():
    return normalize_inputs(HIGH_RETURN_RAW)


@pytest.fixture
def base_models(base_inputs):
    """(ValueModel, CostModel) for the base inputs."""
    return ValueModel.from_inputs(base_inputs), CostModel.from_inputs(base_inputs)
