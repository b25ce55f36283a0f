"""
InputSet: the normalized parameter set every calculation runs on.

The input wizard hands over a loosely shaped mapping: some fields are required,
many are optional, and optional numeric fields must fall back to defaults
derived from the benchmark tables. This module collapses all of that into one
explicit step, normalize_inputs(), executed once before any calculation
component runs.

FIELD RULES
-----------
Every InputSet field has exactly one entry in FIELD_RULES describing:
    - kind: 'int', 'float', 'bool' or 'str'
    - required: missing value raises ValueError
    - default: constant, or a callable deriving the value from the fields
      resolved before it (benchmark lookups, auto-estimates)
    - bounds: (lower, upper) clamp applied after defaulting

Rules are evaluated in declaration order, so derived defaults may depend on
any field declared above them.

TOLERANCE
---------
Out-of-range values are clamped rather than rejected. Structural problems
(unknown field names, missing required fields, non-numeric values for numeric
fields) are programmer errors and raise ValueError at the call boundary.

Example:
    inputs = normalize_inputs({
        'team_size': 20,
        'avg_salary': 85000,
        'industry': 'Technology / Software',
        'implementationBudget': 200000,   # camelCase wizard names are accepted
    })
    inputs.discount_rate   # 0.10, from the company-size benchmark
"""

from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

from roi_model import benchmarks
from roi_model.settings import DEFAULT_DISCOUNT_RATE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InputSet:
    """
    Normalized user + benchmark-derived parameters.

    Immutable: calculation components and the Monte Carlo sampler derive new
    instances (dataclasses.replace) instead of modifying an existing one.
    """

    team_size: int
    avg_salary: float
    industry: str
    company_size: str
    process_type: str
    team_location: str
    hours_per_week: float
    error_rate: float
    current_tool_costs: float
    change_readiness: int
    data_readiness: int
    exec_sponsor: bool
    automation_potential: float
    implementation_budget: float
    expected_timeline: float
    ongoing_annual_cost: float
    discount_rate: float
    cash_realization_pct: float
    vendor_termination_cost: float
    annual_revenue: float
    contribution_margin: float
    cycle_time_reduction_months: float
    regulatory_event_probability: float
    regulatory_event_impact: float
    ai_risk_reduction_pct: float
    include_capacity_value: bool
    include_risk_reduction: bool
    include_revenue_acceleration: bool

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


Default = Union[Any, Callable[[Dict[str, Any]], Any]]


@dataclass(frozen=True)
class FieldRule:
    """Default-derivation rule for one InputSet field."""

    kind: str
    default: Default = None
    required: bool = False
    bounds: Optional[Tuple[float, float]] = None


def _round_to(value: float, step: float) -> float:
    return round(value / step) * step


def _auto_timeline_months(v: Dict[str, Any]) -> int:
    data_mult = benchmarks.DATA_TIMELINE_MULTIPLIER.get(v['data_readiness'], 1.10)
    size_mult = benchmarks.get_size_value(benchmarks.SIZE_MULTIPLIER, v['company_size'])
    return math.ceil(6 * data_mult * size_mult)


def _auto_engineers(v: Dict[str, Any]) -> int:
    scope_min = max(1, math.ceil(v['team_size'] / 12))
    data_headcount_mult = 1.3 if v['data_readiness'] <= 2 else 1.1 if v['data_readiness'] == 3 else 1.0
    max_team = benchmarks.get_size_value(benchmarks.MAX_IMPL_TEAM, v['company_size'])
    return min(math.ceil(scope_min * data_headcount_mult), max_team)


def _default_implementation_budget(v: Dict[str, Any]) -> float:
    """Staffing-based estimate: engineers + PMs over the auto timeline, +20%."""
    ai_salary = benchmarks.get_ai_team_salary(v['team_location'])
    timeline_years = _auto_timeline_months(v) / 12
    engineers = _auto_engineers(v)
    pms = max(0.5, math.ceil(engineers / 5))
    eng_cost = engineers * ai_salary * timeline_years
    pm_cost = pms * (ai_salary * 0.85) * timeline_years
    return _round_to((eng_cost + pm_cost) * 1.20, 5000)


def _default_expected_timeline(v: Dict[str, Any]) -> float:
    size_mult = benchmarks.get_size_value(benchmarks.SIZE_MULTIPLIER, v['company_size'])
    return _auto_timeline_months(v) / size_mult


def _default_ongoing_annual_cost(v: Dict[str, Any]) -> float:
    license_cost = benchmarks.get_size_value(benchmarks.PLATFORM_LICENSE_COST, v['company_size'])
    ai_salary = benchmarks.get_ai_team_salary(v['team_location'])
    return _round_to(license_cost + _auto_engineers(v) * ai_salary * 0.15, 5000)


def _regulatory(key: str) -> Callable[[Dict[str, Any]], float]:
    def derive(v: Dict[str, Any]) -> float:
        row = benchmarks.get_industry_value(benchmarks.REGULATORY_EVENT_BENCHMARKS, v['industry'])
        return row[key]
    return derive


FIELD_RULES: Dict[str, FieldRule] = {
    'team_size': FieldRule('int', required=True, bounds=(1, 100000)),
    'avg_salary': FieldRule('float', required=True, bounds=(10000, 10000000)),
    'industry': FieldRule('str', benchmarks.DEFAULT_INDUSTRY),
    'company_size': FieldRule('str', benchmarks.DEFAULT_COMPANY_SIZE),
    'process_type': FieldRule('str', benchmarks.DEFAULT_PROCESS_TYPE),
    'team_location': FieldRule('str', benchmarks.DEFAULT_TEAM_LOCATION),
    'hours_per_week': FieldRule('float', 20.0, bounds=(1, 80)),
    'error_rate': FieldRule('float', 0.10, bounds=(0.0, 1.0)),
    'current_tool_costs': FieldRule('float', 0.0, bounds=(0.0, math.inf)),
    'change_readiness': FieldRule('int', 3, bounds=(1, 5)),
    'data_readiness': FieldRule('int', 3, bounds=(1, 5)),
    'exec_sponsor': FieldRule('bool', False),
    'automation_potential': FieldRule(
        'float',
        lambda v: benchmarks.get_automation_potential(v['industry'], v['process_type']),
        bounds=(0.10, 0.95),
    ),
    'implementation_budget': FieldRule('float', _default_implementation_budget, bounds=(0.0, math.inf)),
    'expected_timeline': FieldRule('float', _default_expected_timeline, bounds=(1, 120)),
    'ongoing_annual_cost': FieldRule('float', _default_ongoing_annual_cost, bounds=(0.0, math.inf)),
    'discount_rate': FieldRule(
        'float',
        lambda v: benchmarks.DISCOUNT_RATE_BY_SIZE.get(v['company_size'], DEFAULT_DISCOUNT_RATE),
        bounds=(0.0, 1.0),
    ),
    'cash_realization_pct': FieldRule(
        'float', benchmarks.CASH_REALIZATION_DEFAULTS['base'], bounds=(0.0, 1.0),
    ),
    'vendor_termination_cost': FieldRule('float', 0.0, bounds=(0.0, math.inf)),
    'annual_revenue': FieldRule('float', 0.0, bounds=(0.0, math.inf)),
    'contribution_margin': FieldRule('float', 0.30, bounds=(0.0, 1.0)),
    'cycle_time_reduction_months': FieldRule(
        'float',
        lambda v: benchmarks.get_industry_value(benchmarks.CYCLE_TIME_REDUCTION_MONTHS, v['industry']),
        bounds=(0.0, 12.0),
    ),
    'regulatory_event_probability': FieldRule('float', _regulatory('probability'), bounds=(0.0, 1.0)),
    'regulatory_event_impact': FieldRule('float', _regulatory('avg_impact'), bounds=(0.0, math.inf)),
    'ai_risk_reduction_pct': FieldRule('float', _regulatory('ai_reduction'), bounds=(0.0, 1.0)),
    'include_capacity_value': FieldRule('bool', False),
    'include_risk_reduction': FieldRule('bool', False),
    'include_revenue_acceleration': FieldRule('bool', False),
}

# Field names used by the input wizard
FIELD_ALIASES: Dict[str, str] = {
    'teamSize': 'team_size',
    'avgSalary': 'avg_salary',
    'companySize': 'company_size',
    'processType': 'process_type',
    'teamLocation': 'team_location',
    'hoursPerWeek': 'hours_per_week',
    'errorRate': 'error_rate',
    'currentToolCosts': 'current_tool_costs',
    'changeReadiness': 'change_readiness',
    'dataReadiness': 'data_readiness',
    'execSponsor': 'exec_sponsor',
    'automationPotential': 'automation_potential',
    'implementationBudget': 'implementation_budget',
    'expectedTimeline': 'expected_timeline',
    'ongoingAnnualCost': 'ongoing_annual_cost',
    'discountRate': 'discount_rate',
    'cashRealizationPct': 'cash_realization_pct',
    'vendorTerminationCost': 'vendor_termination_cost',
    'annualRevenue': 'annual_revenue',
    'contributionMargin': 'contribution_margin',
    'cycleTimeReductionMonths': 'cycle_time_reduction_months',
    'regulatoryEventProbability': 'regulatory_event_probability',
    'regulatoryEventImpact': 'regulatory_event_impact',
    'aiRiskReductionPct': 'ai_risk_reduction_pct',
    'includeCapacityValue': 'include_capacity_value',
    'includeRiskReduction': 'include_risk_reduction',
    'includeRevenueAcceleration': 'include_revenue_acceleration',
}


def _coerce(name: str, kind: str, value: Any) -> Any:
    if kind == 'str':
        return str(value)
    if kind == 'bool':
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        raise ValueError(f"Field '{name}' must be boolean, got {value!r}")
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValueError(f"Field '{name}' must be numeric, got {value!r}")
    if math.isnan(value):
        raise ValueError(f"Field '{name}' must not be NaN")
    if kind == 'int':
        return int(round(value))
    return float(value)


def _clamp(name: str, value: float, bounds: Tuple[float, float]) -> float:
    lower, upper = bounds
    clamped = min(max(value, lower), upper)
    if clamped != value:
        logger.debug("Clamped %s from %r to %r", name, value, clamped)
    return clamped


def normalize_inputs(raw: Union[Mapping[str, Any], InputSet]) -> InputSet:
    """
    Build an InputSet from a raw parameter mapping.

    Args:
        raw:
            Mapping of field name -> value. Snake_case names and the wizard's
            camelCase names are both accepted. None means "use the default".
            An InputSet is returned unchanged.

    Returns:
        Fully populated, clamped InputSet.

    Raises:
        ValueError: If a field name is unknown, a required field is missing,
            or a numeric field holds a non-numeric value.
    """
    if isinstance(raw, InputSet):
        return raw

    provided: Dict[str, Any] = {}
    for key, value in raw.items():
        name = FIELD_ALIASES.get(key, key)
        if name not in FIELD_RULES:
            raise ValueError(f"Unknown input field '{key}'")
        provided[name] = value

    resolved: Dict[str, Any] = {}
    for name, rule in FIELD_RULES.items():
        value = provided.get(name)
        if value is None:
            if rule.required:
                raise ValueError(f"Missing required input field '{name}'")
            value = rule.default(resolved) if callable(rule.default) else rule.default
            logger.debug("Defaulted %s to %r", name, value)
        value = _coerce(name, rule.kind, value)
        if rule.bounds is not None:
            value = _coerce(name, rule.kind, _clamp(name, value, rule.bounds))
        resolved[name] = value

    return InputSet(**resolved)
