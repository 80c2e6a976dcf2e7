"""
Results processing for MCBias.

Turns raw Monte Carlo means into per-scenario summaries and assembles the
result dictionaries returned by the model's analyses. Every result dict has
the same two top-level keys: ``"model"`` (inputs) and ``"results"``
(outputs).
"""

from typing import Any, Dict, List, Optional

import numpy as np

from ..stats.data_generation import expected_observed_rate
from .scenarios import Scenario


class ResultsProcessor:
    """Summarises sampling distributions of the observed utilization rate."""

    def __init__(self, true_utilization: float, interval: float = 0.95):
        """Initialise the results processor.

        Args:
            true_utilization: Population rate the estimates are compared to.
            interval: Central coverage of the reported quantile interval.
        """
        self.true_utilization = true_utilization
        self.interval = interval

    def summarize(self, means: np.ndarray, scenario: Scenario) -> Dict[str, Any]:
        """Summary statistics for one scenario's simulated means.

        ``bias`` and ``rmse`` are measured against the true utilization;
        ``expected_mean`` is the analytic observed rate the means should
        centre on.
        """
        means = np.asarray(means, dtype=np.float64)
        tail = (1 - self.interval) / 2
        errors = means - self.true_utilization

        return {
            "n_iterations": int(means.size),
            "mean": float(np.mean(means)),
            "std": float(np.std(means, ddof=1)) if means.size > 1 else 0.0,
            "bias": float(np.mean(errors)),
            "rmse": float(np.sqrt(np.mean(errors**2))),
            "lower": float(np.quantile(means, tail)),
            "upper": float(np.quantile(means, 1 - tail)),
            "expected_mean": expected_observed_rate(self.true_utilization, scenario.accuracy),
        }

    def process_simulations(
        self,
        samples: Dict[str, np.ndarray],
        scenarios: List[Scenario],
        include_samples: bool = False,
    ) -> Dict[str, Any]:
        """Summarise every scenario; optionally keep the raw means."""
        summaries = {s.name: self.summarize(samples[s.name], s) for s in scenarios}
        processed: Dict[str, Any] = {"summaries": summaries}
        if include_samples:
            processed["samples"] = samples
        return processed


def _scenario_list(scenarios: List[Scenario]) -> List[Dict[str, Any]]:
    return [s.to_dict() for s in scenarios]


def build_simulation_result(
    scenarios: List[Scenario],
    true_utilization: float,
    n_iterations: int,
    seed: Optional[int],
    simulation_results: Dict[str, Any],
) -> Dict[str, Any]:
    """Build the complete Monte Carlo result dictionary."""
    return {
        "model": {
            "analysis": "simulation",
            "scenarios": _scenario_list(scenarios),
            "true_utilization": true_utilization,
            "n_iterations": n_iterations,
            "seed": seed,
        },
        "results": simulation_results,
    }


def build_power_result(
    scenarios: List[Scenario],
    true_utilization: float,
    alpha: float,
    alternative: str,
    reference: str,
    effect: Dict[str, Any],
    powers: Dict[str, Dict[str, Any]],
) -> Dict[str, Any]:
    """Build the complete power analysis result dictionary.

    Args:
        scenarios: Scenarios whose sample sizes were evaluated.
        true_utilization: Population utilization rate.
        alpha: Significance level.
        alternative: Alternative hypothesis.
        reference: ``"observed"`` or ``"true"`` reference proportion mode.
        effect: Dict with ``p1``, ``p2`` and ``effect_size``.
        powers: Mapping of scenario name to ``{"sample_size", "power"}``
            (power in percent).
    """
    return {
        "model": {
            "analysis": "power",
            "scenarios": _scenario_list(scenarios),
            "true_utilization": true_utilization,
            "alpha": alpha,
            "alternative": alternative,
            "reference": reference,
        },
        "results": {
            "effect": effect,
            "powers": powers,
        },
    }


def build_sample_size_result(
    true_utilization: float,
    alpha: float,
    alternative: str,
    reference: str,
    target_power: float,
    effect: Dict[str, Any],
    required_n: Optional[float],
) -> Dict[str, Any]:
    """Build the complete sample size result dictionary.

    ``required_sample_size`` is the exact root rounded up, never below one
    subject; both are ``None`` when the effect size is zero.
    """
    return {
        "model": {
            "analysis": "sample_size",
            "true_utilization": true_utilization,
            "alpha": alpha,
            "alternative": alternative,
            "reference": reference,
            "target_power": target_power,
        },
        "results": {
            "effect": effect,
            "required_n": required_n,
            "required_sample_size": max(1, int(np.ceil(required_n - 1e-9))) if required_n is not None else None,
        },
    }
