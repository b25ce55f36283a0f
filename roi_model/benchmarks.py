"""
Benchmark lookup tables for the Automation ROI Model.

Industry, process-type, company-size and location benchmarks used to derive
defaults for missing inputs and the cost/value model parameters. The tables are
plain dictionaries consumed read-only; every lookup helper falls back to the
'Other' row (industry/process) or to the mid-market row (company size).

Keys use the labels presented to users by the input wizard, e.g.
'Technology / Software', 'Mid-Market (501-5,000)', 'US - Major Tech Hub'.
"""

from __future__ import annotations

from typing import Dict, Mapping, TypeVar

T = TypeVar("T")

DEFAULT_INDUSTRY = 'Other'
DEFAULT_PROCESS_TYPE = 'Other'
DEFAULT_COMPANY_SIZE = 'Mid-Market (501-5,000)'
DEFAULT_TEAM_LOCATION = 'US - Major Tech Hub'


# ---------------------------------------------------------------------------
# Automation potential [fraction of task volume] by industry x process type
# ---------------------------------------------------------------------------
AUTOMATION_POTENTIAL: Dict[str, Dict[str, float]] = {
    'Technology / Software': {
        'Document Processing': 0.60, 'Customer Communication': 0.50,
        'Data Analysis & Reporting': 0.55, 'Research & Intelligence': 0.45,
        'Workflow Automation': 0.65, 'Content Creation': 0.40,
        'Quality & Compliance': 0.50, 'Other': 0.40,
    },
    'Financial Services / Banking': {
        'Document Processing': 0.55, 'Customer Communication': 0.45,
        'Data Analysis & Reporting': 0.50, 'Research & Intelligence': 0.40,
        'Workflow Automation': 0.55, 'Content Creation': 0.35,
        'Quality & Compliance': 0.60, 'Other': 0.35,
    },
    'Healthcare / Life Sciences': {
        'Document Processing': 0.45, 'Customer Communication': 0.35,
        'Data Analysis & Reporting': 0.40, 'Research & Intelligence': 0.45,
        'Workflow Automation': 0.40, 'Content Creation': 0.25,
        'Quality & Compliance': 0.50, 'Other': 0.30,
    },
    'Manufacturing / Industrial': {
        'Document Processing': 0.50, 'Customer Communication': 0.40,
        'Data Analysis & Reporting': 0.45, 'Research & Intelligence': 0.35,
        'Workflow Automation': 0.60, 'Content Creation': 0.30,
        'Quality & Compliance': 0.55, 'Other': 0.35,
    },
    'Retail / E-Commerce': {
        'Document Processing': 0.55, 'Customer Communication': 0.60,
        'Data Analysis & Reporting': 0.50, 'Research & Intelligence': 0.40,
        'Workflow Automation': 0.60, 'Content Creation': 0.45,
        'Quality & Compliance': 0.45, 'Other': 0.40,
    },
    'Professional Services / Consulting': {
        'Document Processing': 0.50, 'Customer Communication': 0.40,
        'Data Analysis & Reporting': 0.45, 'Research & Intelligence': 0.50,
        'Workflow Automation': 0.45, 'Content Creation': 0.40,
        'Quality & Compliance': 0.40, 'Other': 0.35,
    },
    'Media / Entertainment': {
        'Document Processing': 0.45, 'Customer Communication': 0.50,
        'Data Analysis & Reporting': 0.40, 'Research & Intelligence': 0.45,
        'Workflow Automation': 0.45, 'Content Creation': 0.50,
        'Quality & Compliance': 0.35, 'Other': 0.35,
    },
    'Energy / Utilities': {
        'Document Processing': 0.45, 'Customer Communication': 0.40,
        'Data Analysis & Reporting': 0.45, 'Research & Intelligence': 0.35,
        'Workflow Automation': 0.50, 'Content Creation': 0.25,
        'Quality & Compliance': 0.55, 'Other': 0.30,
    },
    'Government / Public Sector': {
        'Document Processing': 0.40, 'Customer Communication': 0.30,
        'Data Analysis & Reporting': 0.35, 'Research & Intelligence': 0.30,
        'Workflow Automation': 0.35, 'Content Creation': 0.20,
        'Quality & Compliance': 0.45, 'Other': 0.25,
    },
    'Other': {
        'Document Processing': 0.45, 'Customer Communication': 0.40,
        'Data Analysis & Reporting': 0.40, 'Research & Intelligence': 0.35,
        'Workflow Automation': 0.45, 'Content Creation': 0.30,
        'Quality & Compliance': 0.40, 'Other': 0.30,
    },
}

# Share of AI initiatives in the industry that reach their targets
INDUSTRY_SUCCESS_RATES: Dict[str, float] = {
    'Technology / Software': 0.72,
    'Financial Services / Banking': 0.65,
    'Healthcare / Life Sciences': 0.58,
    'Manufacturing / Industrial': 0.62,
    'Retail / E-Commerce': 0.68,
    'Professional Services / Consulting': 0.64,
    'Media / Entertainment': 0.60,
    'Energy / Utilities': 0.55,
    'Government / Public Sector': 0.45,
    'Other': 0.55,
}

# ---------------------------------------------------------------------------
# Readiness multipliers (keyed by 1-5 score)
# ---------------------------------------------------------------------------
ADOPTION_MULTIPLIERS: Dict[int, float] = {1: 0.40, 2: 0.55, 3: 0.70, 4: 0.85, 5: 0.95}
DATA_TIMELINE_MULTIPLIER: Dict[int, float] = {1: 1.40, 2: 1.25, 3: 1.10, 4: 1.0, 5: 0.90}
DATA_COST_MULTIPLIER: Dict[int, float] = {1: 1.30, 2: 1.20, 3: 1.10, 4: 1.0, 5: 1.0}

# ---------------------------------------------------------------------------
# Company size
# ---------------------------------------------------------------------------
SIZE_MULTIPLIER: Dict[str, float] = {
    'Startup (1-50)': 0.7,
    'SMB (51-500)': 0.85,
    'Mid-Market (501-5,000)': 1.0,
    'Enterprise (5,001-50,000)': 1.3,
    'Large Enterprise (50,000+)': 1.6,
}

DISCOUNT_RATE_BY_SIZE: Dict[str, float] = {
    'Startup (1-50)': 0.18,
    'SMB (51-500)': 0.14,
    'Mid-Market (501-5,000)': 0.10,
    'Enterprise (5,001-50,000)': 0.09,
    'Large Enterprise (50,000+)': 0.08,
}

MAX_IMPL_TEAM: Dict[str, int] = {
    'Startup (1-50)': 3,
    'SMB (51-500)': 5,
    'Mid-Market (501-5,000)': 10,
    'Enterprise (5,001-50,000)': 15,
    'Large Enterprise (50,000+)': 25,
}

PLATFORM_LICENSE_COST: Dict[str, float] = {
    'Startup (1-50)': 12000,
    'SMB (51-500)': 24000,
    'Mid-Market (501-5,000)': 48000,
    'Enterprise (5,001-50,000)': 96000,
    'Large Enterprise (50,000+)': 180000,
}

# Total separation cost as a multiple of annual salary
SEPARATION_COST_MULTIPLIER: Dict[str, float] = {
    'Startup (1-50)': 0.70,
    'SMB (51-500)': 1.0,
    'Mid-Market (501-5,000)': 1.15,
    'Enterprise (5,001-50,000)': 1.30,
    'Large Enterprise (50,000+)': 1.50,
}

LEGAL_COMPLIANCE_COST: Dict[str, float] = {
    'Startup (1-50)': 25000,
    'SMB (51-500)': 50000,
    'Mid-Market (501-5,000)': 100000,
    'Enterprise (5,001-50,000)': 175000,
    'Large Enterprise (50,000+)': 300000,
}

SECURITY_AUDIT_COST: Dict[str, float] = {
    'Startup (1-50)': 20000,
    'SMB (51-500)': 40000,
    'Mid-Market (501-5,000)': 75000,
    'Enterprise (5,001-50,000)': 125000,
    'Large Enterprise (50,000+)': 200000,
}

ANNUAL_COMPLIANCE_COST: Dict[str, float] = {
    'Startup (1-50)': 8000,
    'SMB (51-500)': 15000,
    'Mid-Market (501-5,000)': 30000,
    'Enterprise (5,001-50,000)': 60000,
    'Large Enterprise (50,000+)': 100000,
}

CYBER_INSURANCE_INCREASE: Dict[str, float] = {
    'Startup (1-50)': 2000,
    'SMB (51-500)': 5000,
    'Mid-Market (501-5,000)': 12000,
    'Enterprise (5,001-50,000)': 25000,
    'Large Enterprise (50,000+)': 50000,
}

# Cost to switch away from the AI vendor later [fraction of implementation cost]
VENDOR_SWITCHING_COST: Dict[str, float] = {
    'Startup (1-50)': 0.30,
    'SMB (51-500)': 0.35,
    'Mid-Market (501-5,000)': 0.40,
    'Enterprise (5,001-50,000)': 0.50,
    'Large Enterprise (50,000+)': 0.60,
}

# ---------------------------------------------------------------------------
# Location: fully-loaded annual cost of an AI engineer
# ---------------------------------------------------------------------------
AI_TEAM_SALARY: Dict[str, float] = {
    'US - Major Tech Hub': 215000,
    'US - Other': 155000,
    'UK / Western Europe': 150000,
    'Canada / Australia': 140000,
    'Remote / Distributed': 145000,
    'Eastern Europe': 80000,
    'Latin America': 55000,
    'India / South Asia': 40000,
}
DEFAULT_AI_TEAM_SALARY = 135000

# ---------------------------------------------------------------------------
# Process type
# ---------------------------------------------------------------------------
API_COST_PER_1K_REQUESTS: Dict[str, float] = {
    'Document Processing': 20,
    'Customer Communication': 8,
    'Data Analysis & Reporting': 15,
    'Research & Intelligence': 25,
    'Workflow Automation': 5,
    'Content Creation': 20,
    'Quality & Compliance': 12,
    'Other': 10,
}

REQUESTS_PER_PERSON_HOUR: Dict[str, float] = {
    'Document Processing': 12,
    'Customer Communication': 25,
    'Data Analysis & Reporting': 8,
    'Research & Intelligence': 6,
    'Workflow Automation': 30,
    'Content Creation': 10,
    'Quality & Compliance': 15,
    'Other': 12,
}

# Share of current tool spend the automation replaces
TOOL_REPLACEMENT_RATE: Dict[str, float] = {
    'Document Processing': 0.55,
    'Customer Communication': 0.45,
    'Data Analysis & Reporting': 0.50,
    'Research & Intelligence': 0.40,
    'Workflow Automation': 0.65,
    'Content Creation': 0.45,
    'Quality & Compliance': 0.50,
    'Other': 0.40,
}

# ---------------------------------------------------------------------------
# Rates applied to the realistic implementation cost
# ---------------------------------------------------------------------------
CONTINGENCY_RATE = 0.20
CULTURAL_RESISTANCE_RATE = 0.12
CHANGE_MANAGEMENT_RATE = 0.15
INTEGRATION_TESTING_RATE = 0.10
MODEL_RETRAINING_RATE = 0.05
TECH_DEBT_RATE = 0.03
IMPL_INFRA_RATE = 0.12
IMPL_TRAINING_RATE = 0.08
ADJACENT_PRODUCT_RATE = 0.25
RETAINED_RETRAINING_RATE = 0.03

# Data cleanup effort [fraction of implementation cost] by data readiness
DATA_CLEANUP_RATE: Dict[int, float] = {1: 0.25, 2: 0.25, 3: 0.10, 4: 0.0, 5: 0.0}

# Productivity dip during rollout: months at reduced output
PRODUCTIVITY_DIP_MONTHS = 3
PRODUCTIVITY_DIP_RATE = 0.25

# ---------------------------------------------------------------------------
# Opportunity cost of inaction
# ---------------------------------------------------------------------------
LEGACY_MAINTENANCE_CREEP = 0.07

COMPETITIVE_PENALTY: Dict[str, float] = {
    'Technology / Software': 0.05,
    'Financial Services / Banking': 0.04,
    'Healthcare / Life Sciences': 0.02,
    'Manufacturing / Industrial': 0.03,
    'Retail / E-Commerce': 0.05,
    'Professional Services / Consulting': 0.04,
    'Media / Entertainment': 0.04,
    'Energy / Utilities': 0.02,
    'Government / Public Sector': 0.01,
    'Other': 0.03,
}

COMPLIANCE_RISK_ESCALATION: Dict[str, float] = {
    'Technology / Software': 0.02,
    'Financial Services / Banking': 0.05,
    'Healthcare / Life Sciences': 0.06,
    'Manufacturing / Industrial': 0.03,
    'Retail / E-Commerce': 0.02,
    'Professional Services / Consulting': 0.03,
    'Media / Entertainment': 0.02,
    'Energy / Utilities': 0.04,
    'Government / Public Sector': 0.04,
    'Other': 0.02,
}

# ---------------------------------------------------------------------------
# Value pathways
# ---------------------------------------------------------------------------
CASH_REALIZATION_DEFAULTS: Dict[str, float] = {
    'conservative': 0.25,
    'base': 0.40,
    'optimistic': 0.60,
}

REGULATORY_EVENT_BENCHMARKS: Dict[str, Dict[str, float]] = {
    'Technology / Software': {'probability': 0.03, 'avg_impact': 5000000, 'ai_reduction': 0.30},
    'Financial Services / Banking': {'probability': 0.08, 'avg_impact': 25000000, 'ai_reduction': 0.25},
    'Healthcare / Life Sciences': {'probability': 0.05, 'avg_impact': 20000000, 'ai_reduction': 0.35},
    'Manufacturing / Industrial': {'probability': 0.04, 'avg_impact': 10000000, 'ai_reduction': 0.30},
    'Retail / E-Commerce': {'probability': 0.03, 'avg_impact': 3000000, 'ai_reduction': 0.25},
    'Professional Services / Consulting': {'probability': 0.03, 'avg_impact': 5000000, 'ai_reduction': 0.20},
    'Media / Entertainment': {'probability': 0.02, 'avg_impact': 2000000, 'ai_reduction': 0.20},
    'Energy / Utilities': {'probability': 0.06, 'avg_impact': 15000000, 'ai_reduction': 0.30},
    'Government / Public Sector': {'probability': 0.04, 'avg_impact': 8000000, 'ai_reduction': 0.25},
    'Other': {'probability': 0.03, 'avg_impact': 5000000, 'ai_reduction': 0.25},
}

# Months of cycle time the automation typically removes
CYCLE_TIME_REDUCTION_MONTHS: Dict[str, float] = {
    'Technology / Software': 2,
    'Financial Services / Banking': 3,
    'Healthcare / Life Sciences': 4,
    'Manufacturing / Industrial': 2,
    'Retail / E-Commerce': 1.5,
    'Professional Services / Consulting': 2,
    'Media / Entertainment': 1,
    'Energy / Utilities': 3,
    'Government / Public Sector': 4,
    'Other': 2,
}

# Capital efficiency
EFFECTIVE_TAX_RATE = 0.21


def _lookup(table: Mapping[str, T], key: str, fallback_key: str) -> T:
    if key in table:
        return table[key]
    return table[fallback_key]


def get_automation_potential(industry: str, process_type: str) -> float:
    """Benchmark automation potential for an industry/process combination."""
    industry_data = _lookup(AUTOMATION_POTENTIAL, industry, DEFAULT_INDUSTRY)
    return _lookup(industry_data, process_type, DEFAULT_PROCESS_TYPE)


def get_industry_success_rate(industry: str) -> float:
    return _lookup(INDUSTRY_SUCCESS_RATES, industry, DEFAULT_INDUSTRY)


def get_size_value(table: Mapping[str, T], company_size: str) -> T:
    """Look up a company-size keyed table, falling back to the mid-market row."""
    return _lookup(table, company_size, DEFAULT_COMPANY_SIZE)


def get_industry_value(table: Mapping[str, T], industry: str) -> T:
    """Look up an industry keyed table, falling back to the 'Other' row."""
    return _lookup(table, industry, DEFAULT_INDUSTRY)


def get_process_value(table: Mapping[str, T], process_type: str) -> T:
    """Look up a process-type keyed table, falling back to the 'Other' row."""
    return _lookup(table, process_type, DEFAULT_PROCESS_TYPE)


def get_ai_team_salary(team_location: str) -> float:
    return AI_TEAM_SALARY.get(team_location, DEFAULT_AI_TEAM_SALARY)
