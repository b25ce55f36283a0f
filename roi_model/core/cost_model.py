"""
CostModel: investment and operating cost side of an automation initiative.

This module captures ONLY the cost side of the business case. Savings are
handled by ValueModel; the Cash-Flow Builder combines both into a year-by-year
projection.

DESIGN PHILOSOPHY
-----------------
Separation of concerns:
    - CostModel handles COSTS: implementation, hidden, one-time, ongoing, separation
    - ValueModel handles VALUE: savings by category, risk adjustment, value pathways
    - cash_flow combines cost + value into a 5-year projection

Derived once:
    - A CostModel is derived from an InputSet by CostModel.from_inputs()
    - It is immutable; sensitivity analysis works on perturbed copies
      (with_implementation_cost, with_ongoing_scale)

COST STRUCTURE
--------------
Upfront investment (paid at t=0):
    - realistic_impl_cost: max(user budget x data-cost multiplier, staffing-based estimate)
    - hidden costs: change management, cultural resistance, data cleanup,
      integration testing, productivity dip
    - one-time costs: legal & compliance, security audit, contingency, vendor termination

Phased separation costs (NOT part of upfront investment):
    - displaced FTEs x avg salary x separation multiplier
    - spread over the years following HEADCOUNT_REDUCTION_SCHEDULE

Ongoing operating cost (per year):
    - AI ops labor, API/inference, platform license, adjacent products,
      model retraining, compliance recertification, retained-staff retraining,
      tech debt, cyber insurance
    - base_ongoing_cost = max(user-stated, computed)
    - escalated per ONGOING_COST_ESCALATION_SCHEDULE

total_investment = upfront_investment + total_separation_cost
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Tuple

from roi_model import benchmarks
from roi_model.core.inputs import InputSet
from roi_model.settings import (
    HEADCOUNT_REDUCTION_SCHEDULE,
    MAX_HEADCOUNT_REDUCTION,
    ONGOING_COST_ESCALATION_SCHEDULE,
)


def workforce_reduction(inputs: InputSet) -> Tuple[int, int]:
    """
    Displaced and retained FTEs after full phasing.

    Displaced FTEs = round(team x automation potential x adoption rate), capped
    at floor(team x MAX_HEADCOUNT_REDUCTION).

    Returns:
        (displaced_ftes, retained_ftes)
    """
    adoption_rate = benchmarks.ADOPTION_MULTIPLIERS.get(inputs.change_readiness, 0.70)
    raw_displaced = round(inputs.team_size * inputs.automation_potential * adoption_rate)
    max_displaced = math.floor(inputs.team_size * MAX_HEADCOUNT_REDUCTION)
    displaced = min(raw_displaced, max_displaced)
    return displaced, inputs.team_size - displaced


def hidden_costs_for(impl_cost: float, data_readiness: int, productivity_dip: float) -> float:
    """Hidden costs that scale with the implementation cost, plus the productivity dip."""
    return (
        impl_cost * benchmarks.CHANGE_MANAGEMENT_RATE
        + impl_cost * benchmarks.CULTURAL_RESISTANCE_RATE
        + impl_cost * benchmarks.DATA_CLEANUP_RATE.get(data_readiness, 0.0)
        + impl_cost * benchmarks.INTEGRATION_TESTING_RATE
        + productivity_dip
    )


@dataclass(frozen=True)
class CostModel:
    """
    Cost side of the business case, derived from an InputSet.

    All amounts in currency units per year unless stated otherwise.
    """

    # Implementation
    adjusted_timeline_months: int
    impl_engineers: int
    impl_pms: float
    computed_impl_cost: float
    user_adjusted_impl_cost: float
    realistic_impl_cost: float

    # Workforce / separation
    displaced_ftes: int
    retained_ftes: int
    separation_cost_per_fte: float
    total_separation_cost: float
    separation_by_year: Tuple[float, ...]

    # Hidden + one-time
    productivity_dip: float
    total_hidden: float
    legal_compliance_cost: float
    security_audit_cost: float
    contingency_reserve: float
    vendor_termination_cost: float
    vendor_switching_cost: float
    total_one_time: float

    # Ongoing
    ongoing_ai_labor_cost: float
    annual_api_cost: float
    annual_license_cost: float
    computed_ongoing_cost: float
    base_ongoing_cost: float
    ongoing_costs_by_year: Tuple[float, ...]

    # Totals
    upfront_investment: float
    total_investment: float

    @property
    def budget_gap(self) -> float:
        """Staffing-based estimate minus the user's (data-adjusted) budget."""
        return self.computed_impl_cost - self.user_adjusted_impl_cost

    @property
    def total_ongoing(self) -> float:
        return sum(self.ongoing_costs_by_year)

    @classmethod
    def from_inputs(cls, inputs: InputSet) -> 'CostModel':
        """
        Derive the full cost structure from a normalized InputSet.

        Args:
            inputs: Normalized InputSet (see normalize_inputs).

        Returns:
            Immutable CostModel.
        """
        size = inputs.company_size

        # Timeline
        data_time_mult = benchmarks.DATA_TIMELINE_MULTIPLIER.get(inputs.data_readiness, 1.10)
        size_mult = benchmarks.get_size_value(benchmarks.SIZE_MULTIPLIER, size)
        sponsor_time_mult = 1.0 if inputs.exec_sponsor else 1.25
        adjusted_timeline = math.ceil(
            inputs.expected_timeline * data_time_mult * size_mult * sponsor_time_mult
        )

        # Implementation staffing
        ai_salary = benchmarks.get_ai_team_salary(inputs.team_location)
        timeline_years = adjusted_timeline / 12
        scope_min_engineers = max(1, math.ceil(inputs.team_size / 12))
        if inputs.expected_timeline <= 3:
            timeline_pressure = 1.5
        elif inputs.expected_timeline <= 6:
            timeline_pressure = 1.2
        else:
            timeline_pressure = 1.0
        if inputs.data_readiness <= 2:
            data_headcount_mult = 1.3
        elif inputs.data_readiness == 3:
            data_headcount_mult = 1.1
        else:
            data_headcount_mult = 1.0
        max_team = benchmarks.get_size_value(benchmarks.MAX_IMPL_TEAM, size)
        engineers = min(
            math.ceil(scope_min_engineers * timeline_pressure * data_headcount_mult), max_team
        )
        pms = max(0.5, math.ceil(engineers / 5))

        eng_cost = engineers * ai_salary * timeline_years
        pm_cost = pms * (ai_salary * 0.85) * timeline_years
        computed_impl_cost = (eng_cost + pm_cost) * (
            1 + benchmarks.IMPL_INFRA_RATE + benchmarks.IMPL_TRAINING_RATE
        )
        data_cost_mult = benchmarks.DATA_COST_MULTIPLIER.get(inputs.data_readiness, 1.10)
        user_adjusted_impl_cost = inputs.implementation_budget * data_cost_mult
        realistic_impl_cost = max(user_adjusted_impl_cost, computed_impl_cost)

        # Workforce
        displaced, retained = workforce_reduction(inputs)
        separation_multiplier = benchmarks.get_size_value(benchmarks.SEPARATION_COST_MULTIPLIER, size)
        separation_per_fte = inputs.avg_salary * separation_multiplier
        total_separation = displaced * separation_per_fte
        separation_by_year = tuple(total_separation * pct for pct in HEADCOUNT_REDUCTION_SCHEDULE)

        # Ongoing
        ongoing_headcount = max(0.5, round(engineers * 0.25 * 2) / 2)
        ongoing_ai_labor = ongoing_headcount * ai_salary
        requests_per_hour = benchmarks.get_process_value(
            benchmarks.REQUESTS_PER_PERSON_HOUR, inputs.process_type
        )
        monthly_requests = inputs.team_size * inputs.hours_per_week * 4.33 * requests_per_hour
        api_cost_per_k = benchmarks.get_process_value(
            benchmarks.API_COST_PER_1K_REQUESTS, inputs.process_type
        )
        annual_api_cost = (monthly_requests / 1000) * api_cost_per_k * 12
        license_cost = benchmarks.get_size_value(benchmarks.PLATFORM_LICENSE_COST, size)
        adjacent_cost = license_cost * benchmarks.ADJACENT_PRODUCT_RATE

        computed_ongoing = (
            ongoing_ai_labor + annual_api_cost + license_cost + adjacent_cost
            + realistic_impl_cost * benchmarks.MODEL_RETRAINING_RATE
            + benchmarks.get_size_value(benchmarks.ANNUAL_COMPLIANCE_COST, size)
            + retained * inputs.avg_salary * benchmarks.RETAINED_RETRAINING_RATE
            + realistic_impl_cost * benchmarks.TECH_DEBT_RATE
            + benchmarks.get_size_value(benchmarks.CYBER_INSURANCE_INCREASE, size)
        )
        base_ongoing = max(inputs.ongoing_annual_cost, computed_ongoing)

        ongoing_by_year = []
        escalation = 1.0
        for rate in ONGOING_COST_ESCALATION_SCHEDULE:
            escalation *= 1 + rate
            ongoing_by_year.append(base_ongoing * escalation)

        # Hidden + one-time
        annual_labor_cost = inputs.team_size * inputs.avg_salary
        productivity_dip = (
            (annual_labor_cost / 12) * benchmarks.PRODUCTIVITY_DIP_MONTHS * benchmarks.PRODUCTIVITY_DIP_RATE
        )
        total_hidden = hidden_costs_for(realistic_impl_cost, inputs.data_readiness, productivity_dip)

        legal = benchmarks.get_size_value(benchmarks.LEGAL_COMPLIANCE_COST, size)
        security = benchmarks.get_size_value(benchmarks.SECURITY_AUDIT_COST, size)
        contingency = realistic_impl_cost * benchmarks.CONTINGENCY_RATE
        switching_rate = benchmarks.get_size_value(benchmarks.VENDOR_SWITCHING_COST, size)
        total_one_time = legal + security + contingency + inputs.vendor_termination_cost

        upfront = realistic_impl_cost + total_hidden + total_one_time

        return cls(
            adjusted_timeline_months=adjusted_timeline,
            impl_engineers=engineers,
            impl_pms=pms,
            computed_impl_cost=computed_impl_cost,
            user_adjusted_impl_cost=user_adjusted_impl_cost,
            realistic_impl_cost=realistic_impl_cost,
            displaced_ftes=displaced,
            retained_ftes=retained,
            separation_cost_per_fte=separation_per_fte,
            total_separation_cost=total_separation,
            separation_by_year=separation_by_year,
            productivity_dip=productivity_dip,
            total_hidden=total_hidden,
            legal_compliance_cost=legal,
            security_audit_cost=security,
            contingency_reserve=contingency,
            vendor_termination_cost=inputs.vendor_termination_cost,
            vendor_switching_cost=realistic_impl_cost * switching_rate,
            total_one_time=total_one_time,
            ongoing_ai_labor_cost=ongoing_ai_labor,
            annual_api_cost=annual_api_cost,
            annual_license_cost=license_cost,
            computed_ongoing_cost=computed_ongoing,
            base_ongoing_cost=base_ongoing,
            ongoing_costs_by_year=tuple(ongoing_by_year),
            upfront_investment=upfront,
            total_investment=upfront + total_separation,
        )

    def with_implementation_cost(self, impl_cost: float, data_readiness: int) -> 'CostModel':
        """
        Copy with a different implementation cost.

        Hidden costs are re-derived from the new implementation cost; one-time
        costs, separation and ongoing costs are held fixed.
        """
        total_hidden = hidden_costs_for(impl_cost, data_readiness, self.productivity_dip)
        upfront = impl_cost + total_hidden + self.total_one_time
        return replace(
            self,
            realistic_impl_cost=impl_cost,
            total_hidden=total_hidden,
            upfront_investment=upfront,
            total_investment=upfront + self.total_separation_cost,
        )

    def with_ongoing_scale(self, scale: float) -> 'CostModel':
        """Copy with every year's ongoing cost multiplied by scale."""
        return replace(
            self,
            base_ongoing_cost=self.base_ongoing_cost * scale,
            ongoing_costs_by_year=tuple(c * scale for c in self.ongoing_costs_by_year),
        )
