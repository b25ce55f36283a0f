"""
Cash-Flow Builder: 5-year projection of savings, separation and ongoing costs.

Year 1: enhancement only (automation augments the team, no separations).
Years 2-5: phased headcount reduction with separation costs.

For year index y = 0..4:
    wage_growth     = (1 + WAGE_INFLATION_RATE) ** y
    enhancement     = (enhancement_annual + pathway_annual) x ADOPTION_RAMP[y] x multiplier x wage_growth
    cumulative_red += HEADCOUNT_REDUCTION_SCHEDULE[y]
    headcount       = headcount_annual x cumulative_red x multiplier x wage_growth
    net             = enhancement + headcount - separation_by_year[y] - ongoing_costs_by_year[y]

The upfront investment is not part of any year; it is paid at t=0 and only
appears as index 0 of the combined stream returned by CashFlowProjection.stream().

The builder is pure: the same inputs and multiplier always give identical output.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, List, Tuple

from roi_model.core.cost_model import CostModel
from roi_model.core.inputs import InputSet
from roi_model.core.value_model import ValueModel
from roi_model.settings import (
    ADOPTION_RAMP,
    DCF_YEARS,
    HEADCOUNT_REDUCTION_SCHEDULE,
    WAGE_INFLATION_RATE,
)


@dataclass(frozen=True)
class YearCashFlow:
    """One fiscal year of the projection (year is 1-based)."""

    year: int
    enhancement_savings: float
    headcount_savings: float
    gross_savings: float
    separation_cost: float
    ongoing_cost: float
    net_cash_flow: float
    cumulative_reduction: float
    net_cumulative: float


@dataclass(frozen=True)
class CashFlowProjection:
    """
    Five operating years plus the upfront investment paid before Year 1.

    Attributes:
        years: Exactly DCF_YEARS YearCashFlow records, Year 1 first.
        upfront_investment: Investment at t=0 (excludes phased separation costs).
    """

    years: Tuple[YearCashFlow, ...]
    upfront_investment: float

    def __post_init__(self) -> None:
        if len(self.years) != DCF_YEARS:
            raise ValueError(f"Projection must have {DCF_YEARS} years, got {len(self.years)}")

    @property
    def net_cash_flows(self) -> List[float]:
        return [y.net_cash_flow for y in self.years]

    @property
    def total_net(self) -> float:
        return sum(self.net_cash_flows)

    def stream(self) -> List[float]:
        """Combined stream: index 0 is -upfront_investment, then the yearly net flows."""
        return [-self.upfront_investment] + self.net_cash_flows

    def to_dataframe(self) -> Any:
        """
        Projection as a pandas DataFrame indexed by year.

        Raises:
            ImportError: If pandas is not installed.
        """
        try:
            import pandas as pd
        except ImportError:
            raise ImportError("pandas required for DataFrame export. Install with: pip install pandas")
        return pd.DataFrame([asdict(y) for y in self.years]).set_index('year')


def project_cash_flows(
    value: ValueModel,
    costs: CostModel,
    multiplier: float = 1.0,
) -> CashFlowProjection:
    """
    Build the 5-year projection from an already derived value and cost model.

    Args:
        value:
            Savings side (enhancement/headcount annual amounts, pathway value).

        costs:
            Cost side (upfront investment, separation and ongoing schedules).

        multiplier:
            Scenario savings multiplier (0.70 conservative, 1.0 base,
            1.20 optimistic by convention). Costs are not scaled.

    Returns:
        CashFlowProjection with exactly DCF_YEARS years.
    """
    enhancement_annual = value.enhancement_annual + value.pathway_annual
    years = []
    cumulative_reduction = 0.0
    net_cumulative = -costs.upfront_investment

    for y in range(DCF_YEARS):
        wage_growth = (1 + WAGE_INFLATION_RATE) ** y
        enhancement = enhancement_annual * ADOPTION_RAMP[y] * multiplier * wage_growth

        cumulative_reduction += HEADCOUNT_REDUCTION_SCHEDULE[y]
        headcount = value.headcount_annual * cumulative_reduction * multiplier * wage_growth

        gross = enhancement + headcount
        separation = costs.separation_by_year[y]
        ongoing = costs.ongoing_costs_by_year[y]
        net = gross - separation - ongoing
        net_cumulative += net

        years.append(YearCashFlow(
            year=y + 1,
            enhancement_savings=enhancement,
            headcount_savings=headcount,
            gross_savings=gross,
            separation_cost=separation,
            ongoing_cost=ongoing,
            net_cash_flow=net,
            cumulative_reduction=cumulative_reduction,
            net_cumulative=net_cumulative,
        ))

    return CashFlowProjection(years=tuple(years), upfront_investment=costs.upfront_investment)


def build_cash_flows(inputs: InputSet, multiplier: float = 1.0) -> CashFlowProjection:
    """
    Build the 5-year projection for an InputSet under a scenario multiplier.

    Example:
        >>> projection = build_cash_flows(inputs, multiplier=0.70)
        >>> projection.years[0].headcount_savings
        0.0
    """
    return project_cash_flows(ValueModel.from_inputs(inputs), CostModel.from_inputs(inputs), multiplier)
