"""
Data-quality scenarios for MCBias.

A scenario fixes a sample size and a labelling accuracy. The two default
scenarios contrast a small, carefully-labelled study with a large study
whose labels are error-prone.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping

from ..utils.validators import InvalidParameter, _validate_scenario

# Default scenario configurations, keyed by display name.
DEFAULT_SCENARIO_CONFIG = {
    "Small & Accurate": {
        "sample_size": 500,
        "accuracy": 0.95,
    },
    "Large & Error-Prone": {
        "sample_size": 5000,
        "accuracy": 0.60,
    },
}


@dataclass(frozen=True)
class Scenario:
    """One data-quality regime.

    Attributes:
        name: Display label used in tables and plot legends.
        sample_size: Subjects per simulated dataset.
        accuracy: Probability that an observed label matches the true label.
    """

    name: str
    sample_size: int
    accuracy: float

    @property
    def error_rate(self) -> float:
        """Nominal labelling error rate, ``1 - accuracy``."""
        return 1.0 - self.accuracy

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "sample_size": self.sample_size,
            "accuracy": self.accuracy,
            "error_rate": self.error_rate,
        }


def make_scenario(name: str, sample_size: int, accuracy: float) -> Scenario:
    """Validate inputs and build a :class:`Scenario`.

    Raises:
        InvalidParameter: If the name is empty, *sample_size* < 1, or
            *accuracy* is outside [0, 1].
    """
    result = _validate_scenario(name, sample_size, accuracy)
    result.raise_if_invalid()
    for warning in result.warnings:
        print(f"Warning: scenario '{name}': {warning}")
    return Scenario(name=name, sample_size=int(sample_size), accuracy=float(accuracy))


def scenarios_from_config(configs: Mapping[str, Mapping[str, Any]]) -> List[Scenario]:
    """Build scenarios from a ``{name: {"sample_size": ..., "accuracy": ...}}`` mapping.

    Order follows the mapping's iteration order; the first scenario is the
    reference for effect-size comparisons.
    """
    if not isinstance(configs, Mapping):
        raise TypeError("configs must be a dictionary")
    if not configs:
        raise InvalidParameter("at least one scenario is required")

    scenarios = []
    for name, config in configs.items():
        if not isinstance(config, Mapping):
            raise TypeError(f"config for scenario '{name}' must be a dictionary")
        unknown = set(config) - {"sample_size", "accuracy"}
        if unknown:
            raise InvalidParameter(f"unknown keys for scenario '{name}': {', '.join(sorted(unknown))}")
        scenarios.append(make_scenario(name, config.get("sample_size"), config.get("accuracy")))
    return scenarios


def default_scenarios() -> List[Scenario]:
    """The two built-in scenarios, reference first."""
    return scenarios_from_config(DEFAULT_SCENARIO_CONFIG)
