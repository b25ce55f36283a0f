"""
Sensitivity Analyzer: one-at-a-time NPV sensitivity of the base case.

Each variable in SENSITIVITY_VARIABLES is moved to a low and a high bound
while everything else stays at its base value. The full 5-year cash flow is
rebuilt at each bound with the base multiplier (1.0) and the uncapped NPV is
recorded next to the common base-case NPV.

    variable                 low              high
    Team Size                -20%             +20%
    Avg Cost per Person      -20%             +20%
    Error / Rework Rate      -50%             +50% (max 50%)
    Automation Potential     -15pp (min 10%)  +15pp (max 95%)
    Implementation Cost      -20%             +50%
    Ongoing Annual Cost      -50%             +100%

Value-side variables (team, cost per person, error rate, automation potential)
re-derive both the ValueModel and the CostModel from a perturbed InputSet, so
headcount savings and separation cost always count the same displaced FTEs.
Cost-side variables perturb the base CostModel and keep the base ValueModel.

Ordering rows by spread ("tornado" view) is done by tornado_order(), which
returns a new list and leaves the analyzer output untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Sequence, Tuple

from roi_model.core.cash_flow import project_cash_flows
from roi_model.core.cost_model import CostModel
from roi_model.core.inputs import InputSet
from roi_model.core.metrics import FinancialMetrics
from roi_model.core.value_model import ValueModel

VALUE_SIDE = 'value'
IMPLEMENTATION_COST = 'implementation_cost'
ONGOING_COST = 'ongoing_cost'


def _people(value: float) -> str:
    return f"{value:.0f} people"


def _currency_k(value: float) -> str:
    return f"${value / 1000:.0f}K"


def _pct(value: float) -> str:
    return f"{value * 100:.0f}%"


@dataclass(frozen=True)
class SensitivityVariable:
    """
    One row of the sensitivity table.

    Attributes:
        key: InputSet field (value side) or cost key (cost side).
        label: Display label.
        side: VALUE_SIDE, IMPLEMENTATION_COST or ONGOING_COST.
        low, high: Map the base value to the bound value.
        low_tag, high_tag: Short description of each bound.
        fmt: Formats a value for display.
    """

    key: str
    label: str
    side: str
    low: Callable[[float], float]
    high: Callable[[float], float]
    low_tag: str
    high_tag: str
    fmt: Callable[[float], str]


SENSITIVITY_VARIABLES: Tuple[SensitivityVariable, ...] = (
    SensitivityVariable(
        'team_size', 'Team Size', VALUE_SIDE,
        low=lambda v: max(1, round(v * 0.80)),
        high=lambda v: round(v * 1.20),
        low_tag='-20%', high_tag='+20%', fmt=_people,
    ),
    SensitivityVariable(
        'avg_salary', 'Avg Cost per Person', VALUE_SIDE,
        low=lambda v: v * 0.80,
        high=lambda v: v * 1.20,
        low_tag='-20%', high_tag='+20%', fmt=_currency_k,
    ),
    SensitivityVariable(
        'error_rate', 'Error / Rework Rate', VALUE_SIDE,
        low=lambda v: max(0.0, v * 0.50),
        high=lambda v: min(0.50, v * 1.50),
        low_tag='-50%', high_tag='+50%', fmt=_pct,
    ),
    SensitivityVariable(
        'automation_potential', 'Automation Potential', VALUE_SIDE,
        low=lambda v: max(0.10, v - 0.15),
        high=lambda v: min(0.95, v + 0.15),
        low_tag='-15pp', high_tag='+15pp', fmt=_pct,
    ),
    SensitivityVariable(
        IMPLEMENTATION_COST, 'Implementation Cost', IMPLEMENTATION_COST,
        low=lambda v: v * 0.80,
        high=lambda v: v * 1.50,
        low_tag='-20%', high_tag='+50%', fmt=_currency_k,
    ),
    SensitivityVariable(
        ONGOING_COST, 'Ongoing Annual Cost', ONGOING_COST,
        low=lambda v: v * 0.50,
        high=lambda v: v * 2.0,
        low_tag='-50%', high_tag='+100%', fmt=_currency_k,
    ),
)


@dataclass(frozen=True)
class SensitivityRow:
    """NPV at the low and high bound of one variable, against the base NPV."""

    label: str
    key: str
    base_value: float
    low_value: float
    high_value: float
    base_label: str
    low_label: str
    high_label: str
    npv_low: float
    npv_high: float
    base_npv: float

    @property
    def spread(self) -> float:
        return abs(self.npv_high - self.npv_low)

    @property
    def delta_low(self) -> float:
        return self.npv_low - self.base_npv

    @property
    def delta_high(self) -> float:
        return self.npv_high - self.base_npv


def _npv(inputs: InputSet, value: ValueModel, costs: CostModel) -> float:
    projection = project_cash_flows(value, costs, multiplier=1.0)
    return FinancialMetrics.npv(
        projection.net_cash_flows, projection.upfront_investment, inputs.discount_rate
    )


def _perturbed_npv(
    variable: SensitivityVariable,
    bound: float,
    inputs: InputSet,
    value: ValueModel,
    costs: CostModel,
) -> float:
    if variable.side == VALUE_SIDE:
        perturbed = replace(inputs, **{variable.key: bound})
        return _npv(inputs, ValueModel.from_inputs(perturbed), CostModel.from_inputs(perturbed))
    if variable.side == IMPLEMENTATION_COST:
        return _npv(inputs, value, costs.with_implementation_cost(bound, inputs.data_readiness))
    if variable.side == ONGOING_COST:
        return _npv(inputs, value, costs.with_ongoing_scale(bound / costs.base_ongoing_cost))
    raise ValueError(f"Unknown sensitivity side '{variable.side}' for '{variable.key}'")


def _base_value(variable: SensitivityVariable, inputs: InputSet, costs: CostModel) -> float:
    if variable.side == IMPLEMENTATION_COST:
        return costs.realistic_impl_cost
    if variable.side == ONGOING_COST:
        return costs.base_ongoing_cost
    return getattr(inputs, variable.key)


def run_sensitivity(
    inputs: InputSet,
    variables: Sequence[SensitivityVariable] = SENSITIVITY_VARIABLES,
    value_model: Optional[ValueModel] = None,
    cost_model: Optional[CostModel] = None,
) -> List[SensitivityRow]:
    """
    One SensitivityRow per variable, in table order.

    Args:
        inputs:
            Normalized InputSet (the base case).

        variables:
            Sensitivity table. Default: SENSITIVITY_VARIABLES.

        value_model, cost_model:
            Already derived base models. Derived here when omitted.

    Returns:
        List of SensitivityRow, all measured against the same base NPV.

    Example:
        >>> rows = run_sensitivity(inputs)
        >>> rows[0].label, rows[0].npv_low < rows[0].npv_high
        ('Team Size', True)
    """
    value = value_model if value_model is not None else ValueModel.from_inputs(inputs)
    costs = cost_model if cost_model is not None else CostModel.from_inputs(inputs)
    base_npv = _npv(inputs, value, costs)

    rows = []
    for variable in variables:
        base_value = _base_value(variable, inputs, costs)
        low = variable.low(base_value)
        high = variable.high(base_value)
        # Ongoing cost scaling is undefined without a base ongoing cost
        if variable.side == ONGOING_COST and base_value == 0:
            npv_low = npv_high = base_npv
        else:
            npv_low = _perturbed_npv(variable, low, inputs, value, costs)
            npv_high = _perturbed_npv(variable, high, inputs, value, costs)
        rows.append(SensitivityRow(
            label=variable.label,
            key=variable.key,
            base_value=base_value,
            low_value=low,
            high_value=high,
            base_label=variable.fmt(base_value),
            low_label=f"{variable.fmt(low)} ({variable.low_tag})",
            high_label=f"{variable.fmt(high)} ({variable.high_tag})",
            npv_low=npv_low,
            npv_high=npv_high,
            base_npv=base_npv,
        ))
    return rows


def tornado_order(rows: Sequence[SensitivityRow]) -> List[SensitivityRow]:
    """Rows sorted by descending NPV spread; the input sequence is not modified."""
    return sorted(rows, key=lambda row: row.spread, reverse=True)
