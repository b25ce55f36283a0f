"""
Deterministic calculator: inputs, cost and value models, cash flows, metrics,
scenarios and sensitivity.
"""

from roi_model.core.inputs import InputSet, normalize_inputs
from roi_model.core.cost_model import CostModel
from roi_model.core.value_model import ValueModel
from roi_model.core.cash_flow import CashFlowProjection, YearCashFlow, build_cash_flows
from roi_model.core.metrics import CappedValue, FinancialMetrics, IRRResult, apply_cap
from roi_model.core.scenarios import ScenarioResult, ScenarioSet, run_scenarios
from roi_model.core.sensitivity import SensitivityRow, run_sensitivity, tornado_order

__all__ = [
    'InputSet',
    'normalize_inputs',
    'CostModel',
    'ValueModel',
    'CashFlowProjection',
    'YearCashFlow',
    'build_cash_flows',
    'CappedValue',
    'FinancialMetrics',
    'IRRResult',
    'apply_cap',
    'ScenarioResult',
    'ScenarioSet',
    'run_scenarios',
    'SensitivityRow',
    'run_sensitivity',
    'tornado_order',
]
