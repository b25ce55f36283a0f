"""
Decision-support views derived from an evaluated business case.

    - calculate_opportunity_cost: what each year of delay costs
    - calculate_capital_efficiency: NOPAT, EVA, cash-on-cash, ROIC vs WACC
    - derive_confidence_intervals: P25 / P50 / P75 bands from the scenario and
      sensitivity spread (a deterministic band, not the Monte Carlo one)
    - confidence_level: qualitative label from readiness and sponsorship

All functions work on already computed models and results; none of them
re-runs the scenario engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from roi_model import benchmarks
from roi_model.core.cost_model import CostModel
from roi_model.core.inputs import InputSet
from roi_model.core.scenarios import ScenarioResult, ScenarioSet
from roi_model.core.sensitivity import SensitivityRow
from roi_model.core.value_model import ValueModel
from roi_model.settings import ADOPTION_RAMP, DCF_YEARS, WAGE_INFLATION_RATE

STABILIZED_YEAR_INDEX = 2


@dataclass(frozen=True)
class InactionYear:
    year: int
    wage_inflation: float
    legacy_creep: float
    forgone_savings: float
    competitive_loss: float
    compliance_risk: float

    @property
    def total(self) -> float:
        return (
            self.wage_inflation + self.legacy_creep + self.forgone_savings
            + self.competitive_loss + self.compliance_risk
        )


@dataclass(frozen=True)
class OpportunityCost:
    yearly: Tuple[InactionYear, ...]

    @property
    def cost_of_waiting_12_months(self) -> float:
        return sum(y.total for y in self.yearly[:1])

    @property
    def cost_of_waiting_24_months(self) -> float:
        return sum(y.total for y in self.yearly[:2])

    @property
    def total(self) -> float:
        return sum(y.total for y in self.yearly)


def calculate_opportunity_cost(
    inputs: InputSet,
    value: ValueModel,
    costs: CostModel,
    delay_years: int = DCF_YEARS,
) -> OpportunityCost:
    """
    Cost of postponing the initiative, year by year.

    Every component compounds with the delay:
        wage_inflation   = labor x ((1 + wage inflation)^yr - 1)
        legacy_creep     = tool spend x ((1 + maintenance creep)^yr - 1)
        forgone_savings  = net annual savings x adoption ramp of that year
        competitive_loss = current cost x ((1 + industry penalty)^yr - 1)
        compliance_risk  = current cost x ((1 + compliance escalation)^yr - 1)

    Net annual savings are risk-adjusted savings less the base ongoing cost.
    """
    competitive = benchmarks.get_industry_value(benchmarks.COMPETITIVE_PENALTY, inputs.industry)
    compliance = benchmarks.get_industry_value(benchmarks.COMPLIANCE_RISK_ESCALATION, inputs.industry)
    net_annual_savings = value.risk_adjusted_savings - costs.base_ongoing_cost

    yearly = []
    for yr in range(1, delay_years + 1):
        ramp = ADOPTION_RAMP[yr - 1] if yr <= DCF_YEARS else 1.0
        yearly.append(InactionYear(
            year=yr,
            wage_inflation=value.annual_labor_cost * ((1 + WAGE_INFLATION_RATE) ** yr - 1),
            legacy_creep=inputs.current_tool_costs * ((1 + benchmarks.LEGACY_MAINTENANCE_CREEP) ** yr - 1),
            forgone_savings=net_annual_savings * ramp,
            competitive_loss=value.total_current_cost * ((1 + competitive) ** yr - 1),
            compliance_risk=value.total_current_cost * ((1 + compliance) ** yr - 1),
        ))
    return OpportunityCost(yearly=tuple(yearly))


@dataclass(frozen=True)
class CapitalEfficiency:
    wacc: float
    nopat: float
    eva: float
    cash_on_cash: float
    roic: float
    total_investment: float
    effective_tax_rate: float

    @property
    def roic_wacc_spread(self) -> float:
        return self.roic - self.wacc

    @property
    def creates_value(self) -> bool:
        return self.roic > self.wacc


def calculate_capital_efficiency(
    base: ScenarioResult,
    costs: CostModel,
    discount_rate: float,
) -> CapitalEfficiency:
    """
    Capital efficiency of the base scenario (uncapped ROIC).

    The discount rate serves as the WACC proxy.
        NOPAT        = average annual net cash flow x (1 - tax rate)
        EVA          = NOPAT - total investment x WACC
        cash-on-cash = Year 3 net cash flow / total investment (0 when nothing is invested)
    """
    tax_rate = benchmarks.EFFECTIVE_TAX_RATE
    nopat = base.projection.total_net / DCF_YEARS * (1 - tax_rate)
    stabilized = base.projection.years[STABILIZED_YEAR_INDEX]
    if costs.total_investment > 0:
        cash_on_cash = stabilized.net_cash_flow / costs.total_investment
    else:
        cash_on_cash = 0.0
    return CapitalEfficiency(
        wacc=discount_rate,
        nopat=nopat,
        eva=nopat - costs.total_investment * discount_rate,
        cash_on_cash=cash_on_cash,
        roic=base.raw_roic,
        total_investment=costs.total_investment,
        effective_tax_rate=tax_rate,
    )


@dataclass(frozen=True)
class Band:
    p25: float
    p50: float
    p75: float


@dataclass(frozen=True)
class ConfidenceIntervals:
    npv: Band
    payback: Band
    roic: Band


def derive_confidence_intervals(
    scenarios: ScenarioSet,
    sensitivity: Sequence[SensitivityRow],
) -> ConfidenceIntervals:
    """
    Deterministic P25 / P50 / P75 bands.

    P50 is the base case. For NPV, P25 and P75 sit halfway between the base
    NPV and the most extreme value among the lowest/highest multiplier
    scenarios and all sensitivity bounds. Payback and ROIC take the lowest
    and highest multiplier scenarios directly (uncapped ROIC).
    """
    base = scenarios.base
    by_multiplier = sorted(scenarios, key=lambda r: r.multiplier)
    low, high = by_multiplier[0], by_multiplier[-1]

    spread = [npv for row in sensitivity for npv in (row.npv_low, row.npv_high)]
    min_npv = min([low.npv] + spread)
    max_npv = max([high.npv] + spread)

    return ConfidenceIntervals(
        npv=Band(
            p25=base.npv + (min_npv - base.npv) * 0.5,
            p50=base.npv,
            p75=base.npv + (max_npv - base.npv) * 0.5,
        ),
        payback=Band(p25=low.payback_months, p50=base.payback_months, p75=high.payback_months),
        roic=Band(p25=low.raw_roic, p50=base.raw_roic, p75=high.raw_roic),
    )


def confidence_level(inputs: InputSet) -> str:
    """'High', 'Moderate' or 'Conservative', from average readiness and sponsorship."""
    avg_readiness = (inputs.change_readiness + inputs.data_readiness) / 2
    if avg_readiness >= 4 and inputs.exec_sponsor:
        return 'High'
    if avg_readiness >= 3:
        return 'Moderate'
    return 'Conservative'
