"""Monte Carlo simulation: statistics primitives, input sampler and orchestrator."""

from roi_model.simulation.sampler import sample_inputs
from roi_model.simulation.monte_carlo import MonteCarloResult, run_monte_carlo

__all__ = ['sample_inputs', 'MonteCarloResult', 'run_monte_carlo']
