"""Core components for the MCBias framework.

Re-exports the foundational building blocks:

- ``Scenario``, ``make_scenario``, ``scenarios_from_config``,
  ``DEFAULT_SCENARIO_CONFIG``: data-quality regimes.
- ``SimulationRunner``: Monte Carlo sampling of observed means.
- ``ResultsProcessor``, ``build_simulation_result``, ``build_power_result``,
  ``build_sample_size_result``: summaries and result formatting.
"""

from .results import (
    ResultsProcessor,
    build_power_result,
    build_sample_size_result,
    build_simulation_result,
)
from .scenarios import (
    DEFAULT_SCENARIO_CONFIG,
    Scenario,
    default_scenarios,
    make_scenario,
    scenarios_from_config,
)
from .simulation import SimulationRunner

__all__ = [
    # Scenarios
    "Scenario",
    "make_scenario",
    "scenarios_from_config",
    "default_scenarios",
    "DEFAULT_SCENARIO_CONFIG",
    # Simulation
    "SimulationRunner",
    # Results
    "ResultsProcessor",
    "build_simulation_result",
    "build_power_result",
    "build_sample_size_result",
]
