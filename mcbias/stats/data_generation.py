"""
Synthetic observation data for utilization-bias simulations.

Each simulated subject has a true binary outcome drawn from the population
utilization rate and an observed label that matches it with probability
``accuracy`` and is flipped otherwise. Generated datasets are returned as
``pandas.DataFrame`` objects with columns ``true_label`` and
``observed_label``.
"""

from typing import Optional, Union

import numpy as np
import pandas as pd

from ..utils.validators import (
    _validate_accuracy,
    _validate_sample_size,
    _validate_true_utilization,
)

DEFAULT_TRUE_UTILIZATION = 0.20

RngLike = Optional[Union[int, np.random.Generator]]


def resolve_rng(rng: RngLike = None) -> np.random.Generator:
    """Normalise *rng* into a ``numpy.random.Generator``.

    Args:
        rng: ``None`` for a fresh unseeded generator, an ``int`` seed, or
            an existing ``Generator`` (returned unchanged so the caller's
            stream keeps advancing).

    Raises:
        TypeError: If *rng* is of any other type.
    """
    if rng is None:
        return np.random.default_rng()
    if isinstance(rng, np.random.Generator):
        return rng
    if isinstance(rng, (int, np.integer)) and not isinstance(rng, bool):
        return np.random.default_rng(int(rng))
    raise TypeError(f"rng must be None, int or np.random.Generator (got {type(rng).__name__})")


def _draw_labels(
    sample_size: int,
    accuracy: float,
    true_utilization: float,
    rng: np.random.Generator,
):
    """Draw paired true/observed label arrays without validation."""
    true_labels = rng.binomial(1, true_utilization, size=sample_size)
    u = rng.random(sample_size)
    observed_labels = np.where(u < accuracy, true_labels, 1 - true_labels)
    return true_labels, observed_labels


def generate_observations(
    sample_size: int,
    accuracy: float,
    true_utilization: float = DEFAULT_TRUE_UTILIZATION,
    rng: RngLike = None,
) -> pd.DataFrame:
    """Generate paired (true, observed) utilization labels.

    For every subject a true label is drawn from
    ``Bernoulli(true_utilization)`` and a uniform value ``u`` in [0, 1);
    the observed label equals the true label when ``u < accuracy`` and is
    flipped otherwise.

    Args:
        sample_size: Number of subjects (>= 1).
        accuracy: Probability that the observed label matches the truth.
        true_utilization: Population utilization rate.
        rng: Random source, see :func:`resolve_rng`.

    Returns:
        DataFrame with integer columns ``true_label`` and ``observed_label``
        and ``sample_size`` rows.

    Raises:
        InvalidParameter: If *sample_size* < 1 or a probability is outside [0, 1].
    """
    _validate_sample_size(sample_size).raise_if_invalid()
    _validate_accuracy(accuracy).raise_if_invalid()
    _validate_true_utilization(true_utilization).raise_if_invalid()

    true_labels, observed_labels = _draw_labels(int(sample_size), float(accuracy), float(true_utilization), resolve_rng(rng))
    return pd.DataFrame(
        {
            "true_label": true_labels.astype(np.int64),
            "observed_label": observed_labels.astype(np.int64),
        }
    )


def observed_mean(
    sample_size: int,
    accuracy: float,
    true_utilization: float,
    rng: np.random.Generator,
) -> float:
    """Mean observed label of one freshly generated dataset.

    Same draws as :func:`generate_observations` but without building a
    DataFrame; used inside the Monte Carlo loop. Arguments are assumed
    validated by the caller.
    """
    _, observed_labels = _draw_labels(sample_size, accuracy, true_utilization, rng)
    return float(np.mean(observed_labels))


def expected_observed_rate(true_utilization: float, accuracy: float) -> float:
    """Analytic expectation of the observed utilization rate.

    ``p * a + (1 - p) * (1 - a)``: true positives kept plus true negatives
    flipped into positives.
    """
    _validate_true_utilization(true_utilization).raise_if_invalid()
    _validate_accuracy(accuracy).raise_if_invalid()
    return true_utilization * accuracy + (1 - true_utilization) * (1 - accuracy)


def misclassification_rate(data: pd.DataFrame) -> float:
    """Fraction of rows whose observed label differs from the true label."""
    if len(data) == 0:
        return 0.0
    return float(np.mean(data["true_label"].to_numpy() != data["observed_label"].to_numpy()))
