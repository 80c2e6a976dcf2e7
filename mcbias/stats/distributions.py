"""Standard normal distribution functions for MCBias.

Thin scipy wrappers returning plain floats (or arrays for the ``*_array``
variants) so the power formulas never depend on scipy's frozen-distribution
objects directly.

Usage:
    from mcbias.stats.distributions import norm_cdf, norm_ppf
"""

import numpy as np
from scipy.stats import norm as _norm_dist


def norm_ppf(p):
    """Standard normal quantile function (inverse CDF)."""
    return float(_norm_dist.ppf(p))


def norm_cdf(x):
    """Standard normal CDF."""
    return float(_norm_dist.cdf(x))


def norm_cdf_array(x):
    """Vectorised standard normal CDF."""
    return _norm_dist.cdf(np.asarray(x, dtype=np.float64))


def critical_value(alpha, alternative="two-sided"):
    """Critical z value for a normal test at level *alpha*.

    Args:
        alpha: Significance level in (0, 1).
        alternative: ``"two-sided"`` uses ``z_{1-alpha/2}``; one-sided
            alternatives use ``z_{1-alpha}``.
    """
    if alternative == "two-sided":
        return norm_ppf(1 - alpha / 2)
    return norm_ppf(1 - alpha)
