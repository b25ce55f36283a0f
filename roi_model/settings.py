"""
Global model settings for the Automation ROI Model.

These settings define parameters that must be consistent across the cash-flow
builder, the financial metrics, the scenario engine and the Monte Carlo
simulation.
"""

# Projection horizon [years]
# Every cash-flow projection has exactly this many operating years, and the
# payback search walks month-by-month over DCF_YEARS * 12 months.
DCF_YEARS = 5
HORIZON_MONTHS = DCF_YEARS * 12

# Fallback discount rate (WACC proxy) when the company size is unknown
DEFAULT_DISCOUNT_RATE = 0.10

# Annual wage inflation applied to avoided labor cost
WAGE_INFLATION_RATE = 0.04

# Adoption ramp: share of enhancement savings realized per year
#   Year 1 at 75%, full realization from Year 3 on.
ADOPTION_RAMP = (0.75, 0.90, 1.0, 1.0, 1.0)

# Headcount reduction phasing [fraction of team, per year]
#   Year 1: enhancement only (no separations)
#   Years 2-5: gradual reduction; the cumulative sum equals MAX_HEADCOUNT_REDUCTION
MAX_HEADCOUNT_REDUCTION = 0.75
HEADCOUNT_REDUCTION_SCHEDULE = (0.0, 0.20, 0.25, 0.20, 0.10)

# Year-over-year ongoing cost escalation (tapered)
#   Year 2: +8%, Year 3: +4%, Year 4: flat, Year 5: -3% (optimized inference)
ONGOING_COST_ESCALATION_SCHEDULE = (0.0, 0.08, 0.04, 0.0, -0.03)

# Empirical return ceilings, applied to the base scenario only
MAX_BASE_IRR = 2.00
MIN_BASE_IRR = -1.00
MAX_BASE_ROIC = 1.00
MIN_BASE_ROIC = -1.00

# IRR solver (damped Newton-Raphson)
IRR_INITIAL_GUESS = 0.10
IRR_MAX_ITERATIONS = 200
IRR_TOLERANCE = 1e-4
IRR_MAX_STEP = 1.0
# A converged rate outside (IRR_LOWER_BOUND, IRR_UPPER_BOUND) is not credible
IRR_LOWER_BOUND = -1.0
IRR_UPPER_BOUND = 10.0

# Monte Carlo
MC_DEFAULT_ITERATIONS = 500
# Tail risk: NPV below this fraction of the (negative) median upfront investment
CAPITAL_LOSS_THRESHOLD = 0.50

# Standard work year [hours] used to derive hourly rates and FTE equivalents
HOURS_PER_YEAR = 2080
