"""
Monte Carlo Orchestrator: outcome distributions for the base scenario.

Each iteration samples a perturbed InputSet (see sampler), runs the uncapped
base scenario on it and records NPV, IRR (converged only), payback, ROIC and
upfront investment. The records are then sorted and summarized.

INDEPENDENCE
------------
Iteration i gets its own Generator built from the i-th child of
SeedSequence(seed), so no iteration reads state left by another. The same seed
gives the same result whether iterations run serially or through an Executor:

    from concurrent.futures import ProcessPoolExecutor

    with ProcessPoolExecutor() as pool:
        result = run_monte_carlo(inputs, iterations=500, seed=42, executor=pool)

TAIL RISK
---------
    prob_capital_loss_50       P(NPV < -0.5 x median upfront investment)
    prob_payback_over_horizon  P(payback > HORIZON_MONTHS)
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor
from dataclasses import dataclass
from itertools import repeat
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from roi_model.core.inputs import InputSet, normalize_inputs
from roi_model.core.scenarios import run_base_scenario
from roi_model.settings import CAPITAL_LOSS_THRESHOLD, HORIZON_MONTHS, MC_DEFAULT_ITERATIONS
from roi_model.simulation.sampler import sample_inputs
from roi_model.simulation.statistics import mean, percentile, std_dev

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DistributionSummary:
    """Percentiles, mean and population standard deviation of one metric."""

    p5: float
    p10: float
    p25: float
    p50: float
    p75: float
    p90: float
    mean: float
    std_dev: float

    @classmethod
    def from_sorted(cls, values: Sequence[float]) -> 'DistributionSummary':
        return cls(
            p5=percentile(values, 5),
            p10=percentile(values, 10),
            p25=percentile(values, 25),
            p50=percentile(values, 50),
            p75=percentile(values, 75),
            p90=percentile(values, 90),
            mean=mean(values),
            std_dev=std_dev(values),
        )


@dataclass(frozen=True)
class TailRisk:
    p5_npv: float
    prob_capital_loss_50: float
    prob_payback_over_horizon: float


@dataclass(frozen=True)
class IterationRecord:
    """Base-scenario outcome of one Monte Carlo iteration."""

    npv: float
    irr: Optional[float]
    payback_months: int
    roic: float
    upfront_investment: float


@dataclass(frozen=True)
class MonteCarloResult:
    """
    Aggregated simulation output.

    Attributes:
        sample_size: Number of iterations.
        npv, irr, payback, roic: Distribution summaries. irr covers converged
            IRRs only (irr_sample_size of them).
        probability_positive_npv: Share of iterations with NPV > 0.
        tail_risk: Downside metrics.
        npv_distribution: All NPV samples, ascending.
    """

    sample_size: int
    npv: DistributionSummary
    irr: DistributionSummary
    payback: DistributionSummary
    roic: DistributionSummary
    probability_positive_npv: float
    tail_risk: TailRisk
    npv_distribution: Tuple[float, ...]
    irr_sample_size: int

    def npv_histogram(self, bins: int = 20) -> Tuple[np.ndarray, np.ndarray]:
        """Histogram of the NPV samples as (counts, bin_edges)."""
        return np.histogram(np.asarray(self.npv_distribution), bins=bins)


def run_iteration(inputs: InputSet, seed_seq: np.random.SeedSequence) -> IterationRecord:
    """Sample once and evaluate the uncapped base scenario."""
    rng = np.random.default_rng(seed_seq)
    base = run_base_scenario(sample_inputs(inputs, rng), apply_caps=False)
    return IterationRecord(
        npv=base.npv,
        irr=base.irr_result.value if base.irr_result.is_defined else None,
        payback_months=base.payback_months,
        roic=base.roic,
        upfront_investment=base.projection.upfront_investment,
    )


def summarize(records: Sequence[IterationRecord]) -> MonteCarloResult:
    """Aggregate iteration records into a MonteCarloResult."""
    n = len(records)
    npvs = sorted(r.npv for r in records)
    irrs = sorted(r.irr for r in records if r.irr is not None and np.isfinite(r.irr))
    paybacks = sorted(r.payback_months for r in records)
    roics = sorted(r.roic for r in records)
    upfronts = sorted(r.upfront_investment for r in records)

    npv_summary = DistributionSummary.from_sorted(npvs)
    capital_loss_line = -CAPITAL_LOSS_THRESHOLD * percentile(upfronts, 50)

    return MonteCarloResult(
        sample_size=n,
        npv=npv_summary,
        irr=DistributionSummary.from_sorted(irrs),
        payback=DistributionSummary.from_sorted(paybacks),
        roic=DistributionSummary.from_sorted(roics),
        probability_positive_npv=sum(1 for v in npvs if v > 0) / n,
        tail_risk=TailRisk(
            p5_npv=npv_summary.p5,
            prob_capital_loss_50=sum(1 for v in npvs if v < capital_loss_line) / n,
            prob_payback_over_horizon=sum(1 for p in paybacks if p > HORIZON_MONTHS) / n,
        ),
        npv_distribution=tuple(npvs),
        irr_sample_size=len(irrs),
    )


def run_monte_carlo(
    inputs: Union[InputSet, Mapping[str, Any]],
    iterations: int = MC_DEFAULT_ITERATIONS,
    seed: Optional[int] = None,
    executor: Optional[Executor] = None,
) -> MonteCarloResult:
    """
    Run the Monte Carlo simulation.

    Args:
        inputs:
            InputSet, or a raw mapping that is normalized first.

        iterations:
            Number of iterations (typically 50-500). Default: 500.

        seed:
            Root seed. None draws fresh OS entropy.

        executor:
            Optional concurrent.futures Executor to spread iterations over
            workers. Results are identical to a serial run with the same seed.

    Returns:
        MonteCarloResult.

    Raises:
        ValueError: If iterations < 1.
    """
    if iterations < 1:
        raise ValueError(f"Monte Carlo needs at least 1 iteration, got {iterations}")

    base_inputs = normalize_inputs(inputs)
    children = np.random.SeedSequence(seed).spawn(iterations)
    logger.info("Running Monte Carlo simulation: %d iterations", iterations)

    if executor is None:
        records = list(map(run_iteration, repeat(base_inputs), children))
    else:
        records = list(executor.map(run_iteration, repeat(base_inputs), children))

    result = summarize(records)
    logger.info(
        "Monte Carlo finished: P50 NPV %.0f, P(NPV > 0) %.2f",
        result.npv.p50, result.probability_positive_npv,
    )
    return result
