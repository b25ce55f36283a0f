"""
Engine entry point: one call from raw inputs to a complete ROIResult.

run_calculations() normalizes the inputs once, derives the cost and value
models once, and runs every analysis on them. The returned record holds every
figure a reporting layer displays, so nothing downstream needs to recompute a
financial metric.

Example:
    from roi_model import run_calculations

    result = run_calculations({
        'team_size': 20,
        'avg_salary': 85000,
        'industry': 'Technology / Software',
    }, monte_carlo_iterations=500, seed=42)

    result.scenarios.base.npv
    result.scenarios.base.irr_result.display()   # 'not applicable' if undefined
    result.monte_carlo.tail_risk.prob_capital_loss_50
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Union

from roi_model.analysis.breakeven import ThresholdAnalysis, calculate_threshold_analysis
from roi_model.analysis.outlook import (
    CapitalEfficiency,
    ConfidenceIntervals,
    OpportunityCost,
    calculate_capital_efficiency,
    calculate_opportunity_cost,
    confidence_level,
    derive_confidence_intervals,
)
from roi_model.core.cost_model import CostModel
from roi_model.core.inputs import InputSet, normalize_inputs
from roi_model.core.scenarios import DEFAULT_SCENARIOS, ScenarioConfig, ScenarioSet, run_scenarios
from roi_model.core.sensitivity import SensitivityRow, run_sensitivity
from roi_model.core.value_model import ValueModel
from roi_model.simulation.monte_carlo import MonteCarloResult, run_monte_carlo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ROIResult:
    """Complete output of one calculation call."""

    inputs: InputSet
    cost_model: CostModel
    value_model: ValueModel
    scenarios: ScenarioSet
    sensitivity: List[SensitivityRow]
    threshold: ThresholdAnalysis
    opportunity_cost: OpportunityCost
    capital_efficiency: CapitalEfficiency
    confidence_intervals: ConfidenceIntervals
    confidence_level: str
    monte_carlo: Optional[MonteCarloResult] = None

    @property
    def upfront_investment(self) -> float:
        return self.cost_model.upfront_investment

    @property
    def total_investment(self) -> float:
        return self.cost_model.total_investment

    @property
    def discount_rate(self) -> float:
        return self.inputs.discount_rate

    @property
    def expected_npv(self) -> float:
        return self.scenarios.expected_npv

    @property
    def expected_roic(self) -> float:
        return self.scenarios.expected_roic


def run_calculations(
    raw: Union[InputSet, Mapping[str, Any]],
    scenarios: Sequence[ScenarioConfig] = DEFAULT_SCENARIOS,
    monte_carlo_iterations: Optional[int] = None,
    seed: Optional[int] = None,
    executor: Optional[Executor] = None,
) -> ROIResult:
    """
    Evaluate the full business case.

    Args:
        raw:
            Raw input mapping (or an already normalized InputSet).

        scenarios:
            Scenario table. Default: conservative / base / optimistic.

        monte_carlo_iterations:
            Run the Monte Carlo simulation with this many iterations.
            None skips it.

        seed:
            Monte Carlo root seed.

        executor:
            Optional Executor for the Monte Carlo iterations.

    Returns:
        ROIResult.

    Raises:
        ValueError: On malformed inputs or an invalid scenario table.
    """
    inputs = normalize_inputs(raw)
    value = ValueModel.from_inputs(inputs)
    costs = CostModel.from_inputs(inputs)

    scenario_set = run_scenarios(inputs, scenarios, value, costs)
    sensitivity = run_sensitivity(inputs, value_model=value, cost_model=costs)

    monte_carlo = None
    if monte_carlo_iterations is not None:
        monte_carlo = run_monte_carlo(inputs, monte_carlo_iterations, seed=seed, executor=executor)

    logger.debug(
        "Base case: NPV %.0f, upfront %.0f, total investment %.0f",
        scenario_set.base.npv, costs.upfront_investment, costs.total_investment,
    )

    return ROIResult(
        inputs=inputs,
        cost_model=costs,
        value_model=value,
        scenarios=scenario_set,
        sensitivity=sensitivity,
        threshold=calculate_threshold_analysis(inputs, value, costs),
        opportunity_cost=calculate_opportunity_cost(inputs, value, costs),
        capital_efficiency=calculate_capital_efficiency(scenario_set.base, costs, inputs.discount_rate),
        confidence_intervals=derive_confidence_intervals(scenario_set, sensitivity),
        confidence_level=confidence_level(inputs),
        monte_carlo=monte_carlo,
    )
