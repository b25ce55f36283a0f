"""
Automation ROI Model: financial modeling and risk simulation for automation investments.

This package estimates the financial return of a proposed automation initiative
from organizational inputs and industry benchmark tables: a 5-year discounted
cash-flow projection, named scenarios, a one-at-a-time sensitivity breakdown and
a correlated Monte Carlo distribution of outcomes.

Architecture:
    - core.inputs: InputSet and the single normalization step (normalize_inputs)
    - core.cost_model / core.value_model: cost and savings side of the business case
    - core.cash_flow: 5-year projection (Cash-Flow Builder)
    - core.metrics: NPV, IRR, payback, ROIC, empirical caps
    - core.scenarios: conservative / base / optimistic runs, weighted aggregates
    - core.sensitivity: NPV sensitivity per variable, tornado ordering
    - simulation: statistics primitives, sampler, Monte Carlo orchestrator
    - analysis: breakeven thresholds, opportunity cost, capital efficiency
    - engine: run_calculations(), one call to a complete ROIResult

Quick start:
    from roi_model import run_calculations

    result = run_calculations({
        'team_size': 20,
        'avg_salary': 85000,
        'error_rate': 0.15,
        'implementation_budget': 200000,
        'ongoing_annual_cost': 50000,
    }, monte_carlo_iterations=500, seed=42)

    base = result.scenarios.base
    print(f"NPV: {base.npv:,.0f}  IRR: {base.irr_result.display()}")
    print(f"P(NPV > 0): {result.monte_carlo.probability_positive_npv:.0%}")
"""

from roi_model.core.inputs import InputSet, normalize_inputs
from roi_model.core.scenarios import DEFAULT_SCENARIOS, ScenarioConfig
from roi_model.engine import ROIResult, run_calculations
from roi_model.simulation.monte_carlo import MonteCarloResult, run_monte_carlo

__version__ = "0.1.0"

__all__ = [
    'InputSet',
    'normalize_inputs',
    'ScenarioConfig',
    'DEFAULT_SCENARIOS',
    'ROIResult',
    'run_calculations',
    'MonteCarloResult',
    'run_monte_carlo',
]
