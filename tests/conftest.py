"""
Shared pytest fixtures for MCBias tests.
"""

import contextlib
import io

import numpy as np
import pytest

from tests.config import LARGE_ACCURACY, LARGE_N, SEED, SMALL_ACCURACY, SMALL_N, TRUE_UTILIZATION


@pytest.fixture
def suppress_output():
    """Redirect stdout for tests that only care about return values."""
    with contextlib.redirect_stdout(io.StringIO()):
        yield


@pytest.fixture
def rng():
    """Seeded numpy Generator."""
    return np.random.default_rng(SEED)


@pytest.fixture
def small_scenario():
    from mcbias.core import Scenario

    return Scenario("Small & Accurate", SMALL_N, SMALL_ACCURACY)


@pytest.fixture
def large_scenario():
    from mcbias.core import Scenario

    return Scenario("Large & Error-Prone", LARGE_N, LARGE_ACCURACY)


@pytest.fixture
def model():
    """Default MCBias model with the reference seed, built quietly."""
    from mcbias import MCBias

    with contextlib.redirect_stdout(io.StringIO()):
        m = MCBias(true_utilization=TRUE_UTILIZATION)
        m.set_seed(SEED)
    return m


@pytest.fixture
def small_model():
    """Model with reduced sample sizes for fast simulation tests."""
    from mcbias import MCBias

    with contextlib.redirect_stdout(io.StringIO()):
        m = MCBias(
            true_utilization=TRUE_UTILIZATION,
            scenarios={
                "accurate": {"sample_size": 100, "accuracy": 0.95},
                "noisy": {"sample_size": 400, "accuracy": 0.60},
            },
        )
        m.set_seed(SEED)
        m.set_iterations(200)
    return m
