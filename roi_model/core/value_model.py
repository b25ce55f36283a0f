"""
ValueModel: savings side of an automation initiative.

Savings are split into four categories, each with a gross and a risk-adjusted
amount:
    - headcount: displaced FTEs x avg salary
    - efficiency: automatable labor not covered by headcount reduction
    - error_reduction: avoided rework
    - tool_replacement: share of current tool spend the automation replaces

Enhancement savings (efficiency + error reduction + tool replacement) start in
Year 1; headcount savings follow the headcount reduction phasing.

Risk adjustment:
    risk_multiplier = ((adoption_rate x sponsor_adjustment) + industry_success_rate) / 2
Averaging organizational readiness with the industry success rate avoids
compounding the two factors.

VALUE PATHWAYS
--------------
Besides direct cost efficiency, two optional pathways can be switched into the
cash flows with InputSet flags:
    - capacity creation: freed hours x hourly rate
    - risk reduction: avoided expected loss from regulatory events
Revenue acceleration has its own flag. Pathways not switched in are still
reported for information.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from roi_model import benchmarks
from roi_model.core.cost_model import workforce_reduction
from roi_model.core.inputs import InputSet
from roi_model.settings import HOURS_PER_YEAR


@dataclass(frozen=True)
class SavingsCategory:
    gross: float
    risk_adjusted: float


@dataclass(frozen=True)
class ValuePathways:
    """Annual value by pathway and what is switched into the cash flows."""

    cost_efficiency_annual: float
    cash_realized_annual: float
    capacity_only_annual: float
    capacity_hours_freed: float
    capacity_fte_equivalent: float
    capacity_value_annual: float
    revenue_acceleration: float
    risk_expected_loss_before: float
    risk_expected_loss_after: float
    risk_reduction_annual: float
    include_capacity_value: bool
    include_risk_reduction: bool
    include_revenue_acceleration: bool

    @property
    def additional_annual(self) -> float:
        """Pathway value added on top of the cost-efficiency cash flows."""
        total = 0.0
        if self.include_capacity_value:
            total += self.capacity_value_annual
        if self.include_risk_reduction:
            total += self.risk_reduction_annual
        if self.include_revenue_acceleration:
            total += self.revenue_acceleration
        return total

    @property
    def total_annual(self) -> float:
        return self.cost_efficiency_annual + self.additional_annual


@dataclass(frozen=True)
class ValueModel:
    """Savings side of the business case, derived from an InputSet."""

    annual_labor_cost: float
    annual_rework_cost: float
    total_current_cost: float
    hourly_rate: float
    annual_hours: float

    adoption_rate: float
    sponsor_adjustment: float
    industry_success_rate: float
    risk_multiplier: float

    gross_annual_savings: float
    risk_adjusted_savings: float

    displaced_ftes: int
    headcount: SavingsCategory
    efficiency: SavingsCategory
    error_reduction: SavingsCategory
    tool_replacement: SavingsCategory

    pathways: ValuePathways

    @property
    def enhancement_annual(self) -> float:
        """Risk-adjusted savings available from Year 1 (no headcount change)."""
        return (
            self.efficiency.risk_adjusted
            + self.error_reduction.risk_adjusted
            + self.tool_replacement.risk_adjusted
        )

    @property
    def headcount_annual(self) -> float:
        """Risk-adjusted headcount savings at full phasing."""
        return self.headcount.risk_adjusted

    @property
    def pathway_annual(self) -> float:
        return self.pathways.additional_annual

    def categories(self) -> Dict[str, SavingsCategory]:
        return {
            'headcount': self.headcount,
            'efficiency': self.efficiency,
            'error_reduction': self.error_reduction,
            'tool_replacement': self.tool_replacement,
        }

    @classmethod
    def from_inputs(cls, inputs: InputSet) -> 'ValueModel':
        annual_labor = inputs.team_size * inputs.avg_salary
        annual_rework = annual_labor * inputs.error_rate
        total_current = annual_labor + annual_rework + inputs.current_tool_costs
        hourly_rate = inputs.avg_salary / HOURS_PER_YEAR
        annual_hours = inputs.team_size * inputs.hours_per_week * 52
        ap = inputs.automation_potential

        adoption_rate = benchmarks.ADOPTION_MULTIPLIERS.get(inputs.change_readiness, 0.70)
        sponsor_adjustment = 1.0 if inputs.exec_sponsor else 0.85
        success_rate = benchmarks.get_industry_success_rate(inputs.industry)
        risk = (adoption_rate * sponsor_adjustment + success_rate) / 2

        displaced, _ = workforce_reduction(inputs)
        headcount_gross = displaced * inputs.avg_salary
        efficiency_gross = max(0.0, annual_labor * ap - headcount_gross)
        error_gross = annual_rework * ap
        tool_rate = benchmarks.get_process_value(benchmarks.TOOL_REPLACEMENT_RATE, inputs.process_type)
        tool_gross = inputs.current_tool_costs * tool_rate

        # Value pathways
        risk_adjusted_savings = total_current * ap * risk
        hours_freed = annual_hours * ap * risk
        if inputs.annual_revenue > 0 and inputs.cycle_time_reduction_months > 0:
            revenue_acceleration = (
                inputs.annual_revenue * inputs.contribution_margin
                * inputs.cycle_time_reduction_months / 12
            ) * risk
        else:
            revenue_acceleration = 0.0
        loss_before = inputs.regulatory_event_probability * inputs.regulatory_event_impact
        loss_after = loss_before * (1 - inputs.ai_risk_reduction_pct)

        pathways = ValuePathways(
            cost_efficiency_annual=risk_adjusted_savings,
            cash_realized_annual=risk_adjusted_savings * inputs.cash_realization_pct,
            capacity_only_annual=risk_adjusted_savings * (1 - inputs.cash_realization_pct),
            capacity_hours_freed=hours_freed,
            capacity_fte_equivalent=hours_freed / HOURS_PER_YEAR,
            capacity_value_annual=hours_freed * hourly_rate,
            revenue_acceleration=revenue_acceleration,
            risk_expected_loss_before=loss_before,
            risk_expected_loss_after=loss_after,
            risk_reduction_annual=loss_before - loss_after,
            include_capacity_value=inputs.include_capacity_value,
            include_risk_reduction=inputs.include_risk_reduction,
            include_revenue_acceleration=inputs.include_revenue_acceleration,
        )

        return cls(
            annual_labor_cost=annual_labor,
            annual_rework_cost=annual_rework,
            total_current_cost=total_current,
            hourly_rate=hourly_rate,
            annual_hours=annual_hours,
            adoption_rate=adoption_rate,
            sponsor_adjustment=sponsor_adjustment,
            industry_success_rate=success_rate,
            risk_multiplier=risk,
            gross_annual_savings=total_current * ap,
            risk_adjusted_savings=risk_adjusted_savings,
            displaced_ftes=displaced,
            headcount=SavingsCategory(headcount_gross, headcount_gross * risk),
            efficiency=SavingsCategory(efficiency_gross, efficiency_gross * risk),
            error_reduction=SavingsCategory(error_gross, error_gross * risk),
            tool_replacement=SavingsCategory(tool_gross, tool_gross * risk),
            pathways=pathways,
        )
