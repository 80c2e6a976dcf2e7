"""
Effect size and analytical power for a one-sample proportion test.

The effect size is Cohen's *h*, the difference of arcsine-transformed
proportions. Power uses the normal approximation: under the alternative the
test statistic is ``N(h * sqrt(n), 1)``.

All powers in this module are fractions in [0, 1]. The model layer reports
them as percentages.
"""

import math
from typing import Iterable, Optional

import numpy as np
from scipy.optimize import brentq

from ..utils.validators import (
    InvalidParameter,
    _validate_alpha,
    _validate_alternative,
    _validate_nobs,
    _validate_numeric_parameter,
    _validate_probability,
)
from .distributions import critical_value, norm_cdf, norm_cdf_array

__all__ = ["effect_size", "proportion_power", "power_curve", "solve_power"]

# Largest attainable |h|: 2*asin(1) - 2*asin(0)
MAX_EFFECT_SIZE = math.pi

_MAX_NOBS = 1e12


def effect_size(p1: float, p2: float) -> float:
    """Cohen's *h* between two proportions.

    ``h = 2 * asin(sqrt(p1)) - 2 * asin(sqrt(p2))``

    Args:
        p1: Reference proportion.
        p2: Comparison proportion.

    Raises:
        InvalidParameter: If either proportion is outside [0, 1].
    """
    _validate_probability(p1, "p1").raise_if_invalid()
    _validate_probability(p2, "p2").raise_if_invalid()
    return 2 * math.asin(math.sqrt(p1)) - 2 * math.asin(math.sqrt(p2))


def _power_unchecked(h: float, nobs: float, alpha: float, alternative: str) -> float:
    shift = h * math.sqrt(nobs)
    crit = critical_value(alpha, alternative)
    if alternative == "two-sided":
        return norm_cdf(shift - crit) + norm_cdf(-shift - crit)
    if alternative == "larger":
        return norm_cdf(shift - crit)
    return norm_cdf(-shift - crit)


def _check_common(h, alpha, alternative):
    _validate_numeric_parameter(h, "effect_size").raise_if_invalid()
    _validate_alpha(alpha).raise_if_invalid()
    _validate_alternative(alternative).raise_if_invalid()


def proportion_power(
    effect_size: float,
    nobs: float,
    alpha: float = 0.05,
    alternative: str = "two-sided",
) -> float:
    """Power of a one-sample proportion z-test.

    Two-sided: ``Φ(h√n − z) + Φ(−h√n − z)`` with ``z = Φ⁻¹(1 − α/2)``.
    One-sided ``"larger"``: ``Φ(h√n − z_{1−α})``; ``"smaller"``:
    ``Φ(−h√n − z_{1−α})``. At ``h = 0`` every variant returns ``alpha``.

    Args:
        effect_size: Cohen's *h*.
        nobs: Number of observations (> 0, may be fractional).
        alpha: Significance level in (0, 1).
        alternative: ``"two-sided"``, ``"larger"`` or ``"smaller"``.

    Raises:
        InvalidParameter: If *nobs* <= 0 or *alpha* is outside (0, 1).
    """
    _check_common(effect_size, alpha, alternative)
    _validate_nobs(nobs).raise_if_invalid()
    return _power_unchecked(float(effect_size), float(nobs), float(alpha), alternative)


def power_curve(
    effect_size: float,
    sample_sizes: Iterable[float],
    alpha: float = 0.05,
    alternative: str = "two-sided",
) -> np.ndarray:
    """Vectorised :func:`proportion_power` over several sample sizes."""
    _check_common(effect_size, alpha, alternative)
    sizes = np.asarray(list(sample_sizes), dtype=np.float64)
    if sizes.size and np.any(sizes <= 0):
        raise InvalidParameter(f"sample sizes must all be > 0, got min {sizes.min()}")

    shift = effect_size * np.sqrt(sizes)
    crit = critical_value(alpha, alternative)
    if alternative == "two-sided":
        return norm_cdf_array(shift - crit) + norm_cdf_array(-shift - crit)
    if alternative == "larger":
        return norm_cdf_array(shift - crit)
    return norm_cdf_array(-shift - crit)


def _solve_nobs(h: float, alpha: float, power: float, alternative: str) -> float:
    """Smallest (fractional) n whose power equals *power*."""
    if h == 0:
        raise InvalidParameter("effect_size is 0: power stays at alpha for every sample size")
    if power <= alpha:
        raise InvalidParameter(f"target power ({power}) must exceed alpha ({alpha}) when solving for nobs")
    if (alternative == "larger" and h < 0) or (alternative == "smaller" and h > 0):
        raise InvalidParameter(f"effect_size {h} points away from the '{alternative}' alternative; target power is unreachable")

    def objective(n):
        return _power_unchecked(h, n, alpha, alternative) - power

    lower, upper = 1e-10, 1.0
    while objective(upper) < 0:
        lower = upper
        upper *= 2
        if upper > _MAX_NOBS:
            raise InvalidParameter(f"no sample size below {_MAX_NOBS:.0e} reaches power {power}")
    return float(brentq(objective, lower, upper, xtol=1e-10, rtol=1e-12))


def _solve_effect_size(nobs: float, alpha: float, power: float, alternative: str) -> float:
    """Smallest |h| reaching *power*; negative for the ``"smaller"`` alternative."""
    if power <= alpha:
        raise InvalidParameter(f"target power ({power}) must exceed alpha ({alpha}) when solving for effect_size")

    sign = -1.0 if alternative == "smaller" else 1.0

    def objective(magnitude):
        return _power_unchecked(sign * magnitude, nobs, alpha, alternative) - power

    if objective(MAX_EFFECT_SIZE) < 0:
        raise InvalidParameter(f"no effect size reaches power {power} with nobs={nobs}")
    return sign * float(brentq(objective, 0.0, MAX_EFFECT_SIZE, xtol=1e-12))


def solve_power(
    effect_size: Optional[float] = None,
    nobs: Optional[float] = None,
    alpha: float = 0.05,
    power: Optional[float] = None,
    alternative: str = "two-sided",
) -> float:
    """Solve the one-sample proportion power equation for the missing quantity.

    Exactly one of *effect_size*, *nobs* and *power* must be ``None``; that
    one is computed from the others:

    - ``power=None``: achieved power at *nobs*.
    - ``nobs=None``: sample size reaching *power* (root finding, fractional;
      round up for a planning figure).
    - ``effect_size=None``: minimum detectable effect at *nobs* and *power*.

    Args:
        effect_size: Cohen's *h*.
        nobs: Number of observations.
        alpha: Significance level in (0, 1).
        power: Target power as a fraction in (0, 1).
        alternative: ``"two-sided"``, ``"larger"`` or ``"smaller"``.

    Raises:
        InvalidParameter: On out-of-range inputs, when the number of unknowns
            is not exactly one, or when the target is unreachable.
    """
    missing = [name for name, value in (("effect_size", effect_size), ("nobs", nobs), ("power", power)) if value is None]
    if len(missing) != 1:
        raise InvalidParameter(f"exactly one of effect_size, nobs, power must be None, got {len(missing)} unknowns")

    _validate_alpha(alpha).raise_if_invalid()
    _validate_alternative(alternative).raise_if_invalid()

    if power is None:
        return proportion_power(effect_size, nobs, alpha, alternative)

    _validate_numeric_parameter(power, "power", min_val=0, max_val=1, exclusive=True).raise_if_invalid()

    if nobs is None:
        _validate_numeric_parameter(effect_size, "effect_size").raise_if_invalid()
        return _solve_nobs(float(effect_size), float(alpha), float(power), alternative)

    _validate_nobs(nobs).raise_if_invalid()
    return _solve_effect_size(float(nobs), float(alpha), float(power), alternative)
