"""
Scenario Engine: conservative / base / optimistic runs of the 5-year DCF.

Each scenario rebuilds the cash flows with its own savings multiplier and
evaluates NPV, IRR, payback and ROIC on them. The scenario table is data
(ScenarioConfig rows), so alternative weightings can be evaluated without
touching the engine.

DEFAULT TABLE
-------------
    key            multiplier   weight   timeline factor   caps
    conservative   0.70         0.25     1.30              no
    base           1.00         0.50     1.00              yes
    optimistic     1.20         0.25     0.80              no

Empirical IRR/ROIC caps are applied only where a row sets apply_caps. Every
ScenarioResult keeps the raw values next to the reported ones, so a capped
figure can always be disclosed as such.

TYPICAL WORKFLOW
----------------
1. Normalize inputs:
    inputs = normalize_inputs(raw)

2. Run all scenarios:
    scenarios = run_scenarios(inputs)

3. Read results:
    scenarios['base'].npv
    scenarios.expected_npv
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Dict, Iterator, Optional, Sequence, Tuple

from roi_model.core.cash_flow import CashFlowProjection, project_cash_flows
from roi_model.core.cost_model import CostModel
from roi_model.core.inputs import InputSet
from roi_model.core.metrics import FinancialMetrics, IRRResult, apply_cap
from roi_model.core.value_model import ValueModel
from roi_model.settings import (
    DCF_YEARS,
    MAX_BASE_IRR,
    MAX_BASE_ROIC,
    MIN_BASE_IRR,
    MIN_BASE_ROIC,
)

BASE_SCENARIO = 'base'


@dataclass(frozen=True)
class ScenarioConfig:
    """One row of the scenario table."""

    key: str
    label: str
    multiplier: float
    weight: float
    timeline_factor: float = 1.0
    apply_caps: bool = False


DEFAULT_SCENARIOS: Tuple[ScenarioConfig, ...] = (
    ScenarioConfig('conservative', 'Conservative', 0.70, 0.25, timeline_factor=1.30),
    ScenarioConfig('base', 'Base Case', 1.0, 0.50, apply_caps=True),
    ScenarioConfig('optimistic', 'Optimistic', 1.20, 0.25, timeline_factor=0.80),
)


@dataclass(frozen=True)
class ScenarioResult:
    """
    Output of one named scenario.

    irr and roic are the reported values (capped when the scenario applies
    caps); raw_irr and raw_roic are always the uncapped model output. irr is
    None whenever irr_result did not converge.
    """

    key: str
    label: str
    multiplier: float
    weight: float
    projection: CashFlowProjection
    npv: float
    irr_result: IRRResult
    irr: Optional[float]
    irr_capped: bool
    roic: float
    raw_roic: float
    roic_capped: bool
    payback_months: int
    timeline_months: int

    @property
    def raw_irr(self) -> Optional[float]:
        return self.irr_result.value

    @property
    def average_net_savings(self) -> float:
        return self.projection.total_net / DCF_YEARS


@dataclass(frozen=True)
class ScenarioSet:
    """Ordered scenario results plus probability-weighted aggregates."""

    results: Tuple[ScenarioResult, ...]

    def __getitem__(self, key: str) -> ScenarioResult:
        for result in self.results:
            if result.key == key:
                return result
        raise KeyError(key)

    def __iter__(self) -> Iterator[ScenarioResult]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)

    @property
    def base(self) -> ScenarioResult:
        return self[BASE_SCENARIO]

    @property
    def weights(self) -> Dict[str, float]:
        return {r.key: r.weight for r in self.results}

    @property
    def expected_npv(self) -> float:
        return sum(r.npv * r.weight for r in self.results)

    @property
    def expected_roic(self) -> float:
        return sum(r.roic * r.weight for r in self.results)


def validate_scenarios(scenarios: Sequence[ScenarioConfig]) -> None:
    """
    Check a scenario table before it is run.

    Raises:
        ValueError: If the table is empty, keys repeat, there is no 'base'
            row, or the weights do not sum to 1.
    """
    if not scenarios:
        raise ValueError("Scenario table must not be empty")
    keys = [s.key for s in scenarios]
    if len(set(keys)) != len(keys):
        raise ValueError(f"Scenario keys must be unique, got {keys}")
    if BASE_SCENARIO not in keys:
        raise ValueError(f"Scenario table needs a '{BASE_SCENARIO}' row, got {keys}")
    total_weight = sum(s.weight for s in scenarios)
    if not math.isclose(total_weight, 1.0, abs_tol=1e-9):
        raise ValueError(f"Scenario weights must sum to 1.0, got {total_weight:.6f}")


def evaluate_scenario(
    inputs: InputSet,
    config: ScenarioConfig,
    value_model: Optional[ValueModel] = None,
    cost_model: Optional[CostModel] = None,
) -> ScenarioResult:
    """
    Build the cash flows for one scenario and evaluate its metrics.

    Args:
        inputs:
            Normalized InputSet.

        config:
            Scenario row (multiplier, weight, timeline factor, caps flag).

        value_model, cost_model:
            Already derived models for inputs. Derived here when omitted.

    Returns:
        ScenarioResult.
    """
    value = value_model if value_model is not None else ValueModel.from_inputs(inputs)
    costs = cost_model if cost_model is not None else CostModel.from_inputs(inputs)

    projection = project_cash_flows(value, costs, config.multiplier)
    metrics = FinancialMetrics.evaluate(projection, costs.total_investment, inputs.discount_rate)

    irr = metrics.irr.value
    irr_capped = False
    roic = metrics.roic
    roic_capped = False
    if config.apply_caps:
        if metrics.irr.is_defined:
            capped_irr = apply_cap(metrics.irr.value, MIN_BASE_IRR, MAX_BASE_IRR)
            irr, irr_capped = capped_irr.value, capped_irr.capped
        capped_roic = apply_cap(metrics.roic, MIN_BASE_ROIC, MAX_BASE_ROIC)
        roic, roic_capped = capped_roic.value, capped_roic.capped

    return ScenarioResult(
        key=config.key,
        label=config.label,
        multiplier=config.multiplier,
        weight=config.weight,
        projection=projection,
        npv=metrics.npv,
        irr_result=metrics.irr,
        irr=irr,
        irr_capped=irr_capped,
        roic=roic,
        raw_roic=metrics.roic,
        roic_capped=roic_capped,
        payback_months=metrics.payback_months,
        timeline_months=math.ceil(costs.adjusted_timeline_months * config.timeline_factor),
    )


def run_scenarios(
    inputs: InputSet,
    scenarios: Sequence[ScenarioConfig] = DEFAULT_SCENARIOS,
    value_model: Optional[ValueModel] = None,
    cost_model: Optional[CostModel] = None,
) -> ScenarioSet:
    """
    Evaluate every row of a scenario table, in table order.

    The value and cost models are derived once and shared by all scenarios;
    only the savings multiplier differs between rows.

    Raises:
        ValueError: If the scenario table is invalid (see validate_scenarios).
    """
    validate_scenarios(scenarios)
    value = value_model if value_model is not None else ValueModel.from_inputs(inputs)
    costs = cost_model if cost_model is not None else CostModel.from_inputs(inputs)
    return ScenarioSet(results=tuple(
        evaluate_scenario(inputs, config, value, costs) for config in scenarios
    ))


def run_base_scenario(inputs: InputSet, apply_caps: bool = False) -> ScenarioResult:
    """Base scenario only; uncapped unless apply_caps is set."""
    base = next(s for s in DEFAULT_SCENARIOS if s.key == BASE_SCENARIO)
    return evaluate_scenario(inputs, replace(base, apply_caps=apply_caps))
