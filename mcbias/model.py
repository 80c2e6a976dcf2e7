"""
MCBias - Monte Carlo view of measurement-error bias.

This module provides the main MCBias class: it generates utilization data
under several data-quality scenarios, runs the one-sample proportion power
analysis, and simulates the sampling distribution of the observed rate.
"""

from typing import Any, Dict, List, Optional, Union

import numpy as np
import pandas as pd

from .core import (
    ResultsProcessor,
    Scenario,
    SimulationRunner,
    build_power_result,
    build_sample_size_result,
    build_simulation_result,
    default_scenarios,
    make_scenario,
    scenarios_from_config,
)
from .stats.data_generation import (
    DEFAULT_TRUE_UTILIZATION,
    RngLike,
    generate_observations,
    resolve_rng,
)
from .stats.power import effect_size as _effect_size
from .stats.power import proportion_power, solve_power
from .utils.formatters import _format_results
from .utils.validators import (
    InvalidParameter,
    _validate_alpha,
    _validate_alternative,
    _validate_iterations,
    _validate_power,
    _validate_sample_size,
    _validate_true_utilization,
)
from .utils.visualization import _create_density_plot

ScenarioLike = Union[str, Scenario, None]


class MCBias:
    """Monte Carlo measurement-bias analysis for a binary utilization outcome.

    Holds a true utilization rate and an ordered list of data-quality
    scenarios (sample size + labelling accuracy). The first scenario is the
    reference and the last one the comparison for effect-size calculations.

    Configuration methods (``set_*``) validate immediately and return
    ``self`` for method chaining.

    Attributes:
        seed: Random seed; every analysis starts a fresh generator from it
            (default: 2137). ``None`` gives unseeded runs.
        power: Target power in percent for ``find_sample_size`` (default: 80).
        alpha: Significance level (default: 0.05).
        alternative: ``"two-sided"`` (default), ``"larger"`` or ``"smaller"``.
        n_iterations: Monte Carlo iterations per scenario (default: 1000).
        true_utilization: Population utilization rate (default: 0.20).

    Example:
        >>> model = MCBias(true_utilization=0.20)
        >>> model.find_power()
        >>> model.simulate()
        >>> model.plot()
    """

    def __init__(
        self,
        true_utilization: float = DEFAULT_TRUE_UTILIZATION,
        scenarios: Optional[Dict[str, Dict[str, Any]]] = None,
    ):
        """Initialise the analysis.

        Args:
            true_utilization: Population utilization rate in [0, 1].
            scenarios: Optional ``{name: {"sample_size": int, "accuracy":
                float}}`` mapping. Defaults to ``"Small & Accurate"``
                (500, 0.95) and ``"Large & Error-Prone"`` (5000, 0.60).
        """
        _validate_true_utilization(true_utilization).raise_if_invalid()

        self.seed: Optional[int] = 2137
        self.power = 80.0
        self.alpha = 0.05
        self.alternative = "two-sided"
        self.n_iterations = 1000
        self.true_utilization = float(true_utilization)

        self._scenarios: List[Scenario] = default_scenarios() if scenarios is None else scenarios_from_config(scenarios)

        print(f"True utilization rate: {self.true_utilization:.2f}")
        print(f"Scenarios: {self._describe_scenarios()}")

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def scenarios(self) -> List[Scenario]:
        """Configured scenarios, reference first."""
        return list(self._scenarios)

    @property
    def reference_scenario(self) -> Scenario:
        return self._scenarios[0]

    @property
    def comparison_scenario(self) -> Scenario:
        return self._scenarios[-1]

    def _describe_scenarios(self) -> str:
        return ", ".join(f"{s.name} (n={s.sample_size}, accuracy={s.accuracy:.2f})" for s in self._scenarios)

    # =========================================================================
    # Configuration methods
    # =========================================================================

    def set_seed(self, seed: Optional[int] = None):
        """Set random seed for reproducibility.

        Args:
            seed: Non-negative integer up to 3,000,000,000.
                Pass ``None`` to enable fully random seeding.

        Returns:
            self: For method chaining.

        Raises:
            TypeError: If *seed* is not an integer or ``None``.
            InvalidParameter: If *seed* is negative or exceeds the maximum.
        """
        if seed is not None:
            if isinstance(seed, bool) or not isinstance(seed, int):
                raise TypeError("seed must be an integer or None")
            if seed < 0:
                raise InvalidParameter("seed must be non-negative")
            if seed > 3000000000:
                raise InvalidParameter("seed must be lower than 3,000,000,000")

        self.seed = seed
        if seed is not None:
            print(f"Seed set to: {seed}")
        else:
            print("Random seeding enabled")
        return self

    def set_power(self, power: float):
        """Set the target power (percent, 0-100) used by ``find_sample_size``."""
        _validate_power(power).raise_if_invalid()
        self.power = float(power)
        print(f"Target power set to: {self.power}%")
        return self

    def set_alpha(self, alpha: float):
        """Set the significance level (strictly between 0 and 1)."""
        _validate_alpha(alpha).raise_if_invalid()
        self.alpha = float(alpha)
        print(f"Alpha set to: {self.alpha}")
        return self

    def set_alternative(self, alternative: str):
        """Set the alternative hypothesis: ``"two-sided"``, ``"larger"`` or ``"smaller"``."""
        _validate_alternative(alternative).raise_if_invalid()
        self.alternative = alternative
        print(f"Alternative set to: {alternative}")
        return self

    def set_iterations(self, n_iterations: int):
        """Set the number of Monte Carlo iterations per scenario.

        Args:
            n_iterations: Positive integer. Fewer than 1000 prints a warning.

        Returns:
            self: For method chaining.

        Raises:
            InvalidParameter: If *n_iterations* is not a positive integer.
        """
        n_iter, result = _validate_iterations(n_iterations)
        for warning in result.warnings:
            print(f"Warning: {warning}")
        result.raise_if_invalid()
        self.n_iterations = n_iter
        print(f"Iterations per scenario set to: {n_iter}")
        return self

    def set_true_utilization(self, true_utilization: float):
        """Set the population utilization rate (0-1)."""
        _validate_true_utilization(true_utilization).raise_if_invalid()
        self.true_utilization = float(true_utilization)
        print(f"True utilization rate set to: {self.true_utilization:.2f}")
        return self

    def set_scenarios(self, configs: Dict[str, Dict[str, Any]]):
        """Replace all scenarios.

        Args:
            configs: ``{name: {"sample_size": int, "accuracy": float}}``.
                The first entry becomes the reference scenario.

        Returns:
            self: For method chaining.
        """
        self._scenarios = scenarios_from_config(configs)
        print(f"Scenarios set: {self._describe_scenarios()}")
        return self

    def add_scenario(self, name: str, sample_size: int, accuracy: float):
        """Append a scenario (it becomes the new comparison scenario)."""
        if any(s.name == name for s in self._scenarios):
            raise InvalidParameter(f"scenario '{name}' already exists")
        scenario = make_scenario(name, sample_size, accuracy)
        self._scenarios.append(scenario)
        print(f"Scenario added: {scenario.name} (n={scenario.sample_size}, accuracy={scenario.accuracy:.2f})")
        return self

    # =========================================================================
    # Data generation and effect size
    # =========================================================================

    def _resolve_scenario(self, scenario: ScenarioLike) -> Scenario:
        if scenario is None:
            return self.reference_scenario
        if isinstance(scenario, Scenario):
            return scenario
        for s in self._scenarios:
            if s.name == scenario:
                return s
        available = ", ".join(s.name for s in self._scenarios)
        raise InvalidParameter(f"Unknown scenario '{scenario}'. Available: {available}")

    def generate_data(self, scenario: ScenarioLike = None, rng: RngLike = None) -> pd.DataFrame:
        """Generate one dataset of paired true/observed labels.

        Args:
            scenario: Scenario name or object (default: reference scenario).
            rng: Random source; defaults to a generator seeded with ``seed``.

        Returns:
            DataFrame with ``true_label`` and ``observed_label`` columns.
        """
        s = self._resolve_scenario(scenario)
        return generate_observations(
            s.sample_size,
            s.accuracy,
            self.true_utilization,
            rng=rng if rng is not None else resolve_rng(self.seed),
        )

    def effect_size(self, reference: str = "observed", rng: RngLike = None) -> Dict[str, float]:
        """Cohen's *h* between the reference and comparison proportions.

        One dataset is generated per scenario from a single generator, in
        scenario order, and ``p2`` is the observed rate of the comparison
        scenario's dataset.

        Args:
            reference: ``"observed"`` takes ``p1`` from the reference
                scenario's generated dataset; ``"true"`` uses the true
                utilization rate.
            rng: Random source; defaults to a generator seeded with ``seed``.

        Returns:
            Dict with ``p1``, ``p2`` and ``effect_size``.

        Raises:
            InvalidParameter: If *reference* is unknown, or ``"observed"``
                is requested with fewer than two scenarios.
        """
        if reference not in ("observed", "true"):
            raise InvalidParameter(f"reference must be 'observed' or 'true', got {reference!r}")
        if reference == "observed" and len(self._scenarios) < 2:
            raise InvalidParameter("reference='observed' needs at least two scenarios")

        generator = resolve_rng(rng if rng is not None else self.seed)
        datasets = {s.name: self.generate_data(s, rng=generator) for s in self._scenarios}

        if reference == "observed":
            p1 = float(datasets[self.reference_scenario.name]["observed_label"].mean())
        else:
            p1 = self.true_utilization
        p2 = float(datasets[self.comparison_scenario.name]["observed_label"].mean())

        return {"p1": p1, "p2": p2, "effect_size": _effect_size(p1, p2)}

    # =========================================================================
    # Analyses
    # =========================================================================

    def find_power(
        self,
        sample_size: Optional[int] = None,
        reference: str = "observed",
        print_results: bool = True,
        return_results: bool = False,
    ):
        """Analytical power of the one-sample proportion test.

        Args:
            sample_size: Evaluate only this sample size. By default every
                scenario's sample size is evaluated.
            reference: Reference proportion mode, see :meth:`effect_size`.
            print_results: Print a formatted table.
            return_results: Return the result dict.

        Returns:
            dict or None: ``{"model": ..., "results": {"effect", "powers"}}``
            with powers in percent, when *return_results* is ``True``.
        """
        if sample_size is not None:
            _validate_sample_size(sample_size).raise_if_invalid()

        effect = self.effect_size(reference)
        h = effect["effect_size"]

        if sample_size is None:
            targets = [(s.name, s.sample_size) for s in self._scenarios]
        else:
            targets = [("Custom", int(sample_size))]

        powers = {
            name: {
                "sample_size": n,
                "power": proportion_power(h, n, self.alpha, self.alternative) * 100,
            }
            for name, n in targets
        }

        result = build_power_result(
            self._scenarios,
            self.true_utilization,
            self.alpha,
            self.alternative,
            reference,
            effect,
            powers,
        )

        if print_results:
            print(f"\n{'=' * 80}")
            print("POWER ANALYSIS RESULTS")
            print(f"{'=' * 80}")
            print(_format_results("power", result))

        return result if return_results else None

    def find_sample_size(
        self,
        reference: str = "observed",
        print_results: bool = True,
        return_results: bool = False,
    ):
        """Sample size at which the test reaches the target power.

        Uses ``power`` (percent) as the target. A zero effect size has no
        finite solution and is reported as ``None``.

        Returns:
            dict or None: ``{"model": ..., "results": {"effect",
            "required_n", "required_sample_size"}}`` when *return_results*
            is ``True``.

        Raises:
            InvalidParameter: If the target is unreachable for the chosen
                one-sided alternative.
        """
        effect = self.effect_size(reference)
        h = effect["effect_size"]

        if h == 0:
            required_n = None
        else:
            required_n = solve_power(h, nobs=None, alpha=self.alpha, power=self.power / 100, alternative=self.alternative)

        result = build_sample_size_result(
            self.true_utilization,
            self.alpha,
            self.alternative,
            reference,
            self.power,
            effect,
            required_n,
        )

        if print_results:
            print(f"\n{'=' * 80}")
            print("SAMPLE SIZE ANALYSIS RESULTS")
            print(f"{'=' * 80}")
            print(_format_results("sample_size", result))

        return result if return_results else None

    def simulate(
        self,
        print_results: bool = True,
        return_results: bool = False,
        progress_callback=None,
        cancel_check=None,
    ):
        """Monte Carlo sampling distribution of the observed rate per scenario.

        Args:
            print_results: Print a summary table.
            return_results: Return the result dict.
            progress_callback: Progress reporting control:
                - ``None`` (default): auto-use ``PrintReporter`` when
                  *print_results* is ``True``.
                - ``False``: explicitly disable progress.
                - callable ``(current, total, scenario)``: custom callback;
                  counts run over all scenarios, *scenario* is the one
                  being sampled.
            cancel_check: Optional callable returning ``True`` to abort; the
                raised ``SimulationCancelled`` names the interrupted scenario.

        Returns:
            dict or None: ``{"model": ..., "results": {"summaries",
            "samples"}}`` when *return_results* is ``True``. ``samples``
            maps scenario names to arrays of ``n_iterations`` means.
        """
        from .progress import PrintReporter, ProgressReporter

        if progress_callback is None:
            effective_cb = PrintReporter() if print_results else None
        elif progress_callback is False:
            effective_cb = None
        else:
            effective_cb = progress_callback

        reporter = None
        if effective_cb is not None:
            reporter = ProgressReporter(self.n_iterations, [s.name for s in self._scenarios], effective_cb)

        runner = SimulationRunner(self.n_iterations, seed=self.seed, true_utilization=self.true_utilization)
        samples = runner.run_scenarios(self._scenarios, progress=reporter, cancel_check=cancel_check)

        processor = ResultsProcessor(self.true_utilization)
        result = build_simulation_result(
            self._scenarios,
            self.true_utilization,
            self.n_iterations,
            self.seed,
            processor.process_simulations(samples, self._scenarios, include_samples=True),
        )

        if print_results:
            print(f"\n{'=' * 80}")
            print("MONTE CARLO SAMPLING RESULTS")
            print(f"{'=' * 80}")
            print(_format_results("simulation", result))

        return result if return_results else None

    def plot(self, results: Optional[Dict[str, Any]] = None, show: bool = True):
        """Density plot of simulated means, one curve per scenario.

        Args:
            results: Result dict from ``simulate(return_results=True)``.
                Runs a quiet simulation when omitted.
            show: Call ``plt.show()``.

        Returns:
            The matplotlib ``Figure``.
        """
        if results is None:
            results = self.simulate(print_results=False, return_results=True)
        samples: Dict[str, np.ndarray] = results["results"]["samples"]
        return _create_density_plot(
            samples,
            title="Sampling Distribution of Estimated Utilization Rate",
            reference=results["model"]["true_utilization"],
            show=show,
        )

    def run(self, reference: str = "observed", show_plot: bool = True) -> Dict[str, Any]:
        """Full pipeline: power analysis, Monte Carlo sampling and density plot.

        Returns:
            Dict with ``"power"`` and ``"simulation"`` result dicts.
        """
        power_result = self.find_power(reference=reference, return_results=True)
        simulation_result = self.simulate(return_results=True)
        self.plot(simulation_result, show=show_plot)
        return {"power": power_result, "simulation": simulation_result}

    def __repr__(self):
        return (
            f"MCBias(true_utilization={self.true_utilization}, scenarios=[{self._describe_scenarios()}], "
            f"n_iterations={self.n_iterations}, alpha={self.alpha}, seed={self.seed})"
        )
