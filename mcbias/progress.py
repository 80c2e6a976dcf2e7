"""
Per-scenario progress reporting for MCBias sampling runs.

A run walks its scenarios in order and draws ``n_iterations`` datasets for
each. Callbacks are called as ``callback(current, total, scenario)``:
*current* and *total* count iterations over the whole run, *scenario* names
the scenario being sampled.
"""

import sys
from typing import Callable, Optional, Sequence

ProgressCallback = Callable[[int, int, str], None]


class SimulationCancelled(Exception):
    """Raised when ``cancel_check`` stops a sampling run.

    Attributes:
        scenario: Name of the scenario that was being sampled, if known.
        completed: Iterations of that scenario finished before the stop.
    """

    def __init__(self, message: str = "Simulation cancelled by user", scenario: Optional[str] = None, completed: int = 0):
        super().__init__(message)
        self.scenario = scenario
        self.completed = completed


class ProgressReporter:
    """Tracks a sampling run scenario by scenario and forwards updates.

    The callback fires when a scenario begins, every *update_every*
    iterations inside it, and when it completes.

    Args:
        n_iterations: Iterations per scenario.
        scenarios: Scenario names in sampling order.
        callback: ``callback(current, total, scenario)``.
        update_every: Iterations between updates within one scenario.
            Defaults to 5% of *n_iterations*.
    """

    def __init__(
        self,
        n_iterations: int,
        scenarios: Sequence[str],
        callback: ProgressCallback,
        update_every: Optional[int] = None,
    ):
        self.n_iterations = n_iterations
        self.scenarios = list(scenarios)
        self.total = n_iterations * len(self.scenarios)
        self.update_every = update_every if update_every is not None else max(1, n_iterations // 20)
        self._callback = callback
        self._finished = 0
        self._in_scenario = 0
        self._scenario: Optional[str] = None

    @property
    def scenario(self) -> Optional[str]:
        """Scenario currently being sampled."""
        return self._scenario

    @property
    def current(self) -> int:
        """Iterations completed over the whole run."""
        return self._finished + self._in_scenario

    def begin(self, scenario: str):
        """Move on to *scenario*; iterations of the previous one count as done."""
        if scenario not in self.scenarios:
            raise ValueError(f"scenario '{scenario}' is not part of this run")
        if self._scenario is not None:
            self._finished += self.n_iterations
        self._scenario = scenario
        self._in_scenario = 0
        self._callback(self.current, self.total, scenario)

    def tick(self):
        """Record one finished iteration of the current scenario."""
        if self._scenario is None:
            raise RuntimeError("begin() must be called before tick()")
        self._in_scenario += 1
        if self._in_scenario == self.n_iterations or self._in_scenario % self.update_every == 0:
            self._callback(self.current, self.total, self._scenario)


class PrintReporter:
    """Writes ``Sampling <scenario>:  45.2% (904/2000 iterations)`` to stderr.

    The line is rewritten in place while a scenario runs and a new line
    starts when the scenario changes.
    """

    def __init__(self):
        self._scenario = None

    def __call__(self, current: int, total: int, scenario: str):
        if total <= 0:
            return
        if self._scenario is not None and scenario != self._scenario:
            sys.stderr.write("\n")
        self._scenario = scenario

        sys.stderr.write(f"\rSampling {scenario}: {100.0 * current / total:5.1f}% ({current}/{total} iterations)")
        if current >= total:
            sys.stderr.write("\n")
            self._scenario = None
        sys.stderr.flush()


class TqdmReporter:
    """Single tqdm bar for the run, labelled with the current scenario.

    Needs ``pip install mcbias[progress]``::

        model.simulate(progress_callback=TqdmReporter(leave=False))
    """

    def __init__(self, **tqdm_kwargs):
        self._tqdm_kwargs = tqdm_kwargs
        self._bar = None
        self._scenario = None

    def __call__(self, current: int, total: int, scenario: str):
        from tqdm import tqdm

        if self._bar is None:
            self._bar = tqdm(total=total, unit="dataset", **self._tqdm_kwargs)
        if scenario != self._scenario:
            self._bar.set_description(scenario)
            self._scenario = scenario

        self._bar.update(current - self._bar.n)
        if current >= total:
            self._bar.close()
            self._bar = None
            self._scenario = None
