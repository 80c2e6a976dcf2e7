"""MCBias - Monte Carlo view of measurement-error bias.

Simulates a binary utilization outcome (e.g. drug use) recorded with
imperfect accuracy, compares data-quality scenarios with a one-sample
proportion power analysis, and shows how labelling error biases the
observed rate through Monte Carlo replication.

Example:
    >>> from mcbias import MCBias
    >>>
    >>> model = MCBias(true_utilization=0.20)
    >>> model.find_power()
    >>> results = model.simulate(return_results=True)
    >>> model.plot(results)
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .core import Scenario
from .model import MCBias
from .progress import PrintReporter, ProgressReporter, SimulationCancelled, TqdmReporter
from .stats.data_generation import expected_observed_rate, generate_observations
from .stats.power import effect_size, power_curve, proportion_power, solve_power
from .utils.validators import InvalidParameter

try:
    __version__ = _get_version("MCBias")
except PackageNotFoundError:
    __version__ = "0.0.0"
__author__ = "Pawel Lenartowicz"
__email__ = "pawellenartowicz@europe.com"

__all__ = [
    "MCBias",
    "Scenario",
    "InvalidParameter",
    "generate_observations",
    "expected_observed_rate",
    "effect_size",
    "proportion_power",
    "power_curve",
    "solve_power",
    "SimulationCancelled",
    "ProgressReporter",
    "PrintReporter",
    "TqdmReporter",
]
