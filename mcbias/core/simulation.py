"""
Monte Carlo sampling for MCBias.

Repeatedly generates a dataset for a scenario and records the mean of its
observed labels, giving the empirical sampling distribution of the naive
utilization estimate under that data-quality regime.
"""

from typing import Callable, Dict, List, Optional

import numpy as np

from ..progress import SimulationCancelled
from ..stats.data_generation import (
    DEFAULT_TRUE_UTILIZATION,
    RngLike,
    observed_mean,
    resolve_rng,
)
from ..utils.validators import _validate_iterations, _validate_true_utilization
from .scenarios import Scenario


class SimulationRunner:
    """Executes the generate-then-summarize loop for one or more scenarios.

    A configured *seed* makes every call reproducible: each invocation of
    :meth:`run_sampling` starts a fresh ``numpy.random.default_rng(seed)``
    unless an explicit generator is passed in.
    """

    def __init__(
        self,
        n_iterations: int = 1000,
        seed: Optional[int] = None,
        true_utilization: float = DEFAULT_TRUE_UTILIZATION,
    ):
        """Initialise the simulation runner.

        Args:
            n_iterations: Number of Monte Carlo iterations per scenario.
            seed: Seed for the per-invocation random generator, or ``None``
                for unseeded runs.
            true_utilization: Population utilization rate used for the true
                labels.

        Raises:
            InvalidParameter: If *n_iterations* < 1 or *true_utilization* is
                outside [0, 1].
        """
        n_iterations, result = _validate_iterations(n_iterations)
        result.raise_if_invalid()
        _validate_true_utilization(true_utilization).raise_if_invalid()

        self.n_iterations = n_iterations
        self.seed = seed
        self.true_utilization = float(true_utilization)

    def _make_rng(self, rng: RngLike) -> np.random.Generator:
        if rng is not None:
            return resolve_rng(rng)
        return resolve_rng(self.seed)

    def run_sampling(
        self,
        scenario: Scenario,
        rng: RngLike = None,
        progress=None,
        cancel_check: Optional[Callable[[], bool]] = None,
    ) -> np.ndarray:
        """Run the Monte Carlo loop for one scenario.

        Args:
            scenario: Sample size and accuracy to simulate.
            rng: Optional random source overriding the runner's seed. A
                ``Generator`` passed here is consumed, not copied.
            progress: Optional ``ProgressReporter``; the scenario is begun on
                it and ticked once per iteration.
            cancel_check: Optional callable returning ``True`` to abort.

        Returns:
            1-D float array of length ``n_iterations`` holding the mean
            observed label of each simulated dataset, in iteration order.

        Raises:
            SimulationCancelled: If *cancel_check* returns ``True``.
        """
        generator = self._make_rng(rng)
        means = np.empty(self.n_iterations, dtype=np.float64)
        if progress is not None:
            progress.begin(scenario.name)

        for i in range(self.n_iterations):
            if cancel_check is not None and cancel_check():
                raise SimulationCancelled(
                    f"Simulation cancelled by user during '{scenario.name}'",
                    scenario=scenario.name,
                    completed=i,
                )

            means[i] = observed_mean(scenario.sample_size, scenario.accuracy, self.true_utilization, generator)

            if progress is not None:
                progress.tick()

        return means

    def run_scenarios(
        self,
        scenarios: List[Scenario],
        progress=None,
        cancel_check: Optional[Callable[[], bool]] = None,
    ) -> Dict[str, np.ndarray]:
        """Run :meth:`run_sampling` for each scenario in order.

        Each scenario gets its own generator built from the runner's seed,
        so adding or removing a scenario never changes another's draws.

        Returns:
            Mapping of scenario name to its array of observed means.
        """
        return {
            scenario.name: self.run_sampling(scenario, progress=progress, cancel_check=cancel_check)
            for scenario in scenarios
        }
