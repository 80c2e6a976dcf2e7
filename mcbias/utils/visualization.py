"""
Visualization utilities for Monte Carlo bias analysis.

This module provides the density plot comparing the sampling distributions
of the observed utilization rate across scenarios.
"""

from typing import Dict, Optional, Sequence

import numpy as np
from scipy.stats import gaussian_kde

__all__ = []

_GRID_POINTS = 512


def _density_grid(samples: Dict[str, np.ndarray]) -> np.ndarray:
    """Common x grid covering every sample with a 10% margin on each side."""
    values = np.concatenate([np.asarray(v, dtype=np.float64) for v in samples.values()])
    lo, hi = float(values.min()), float(values.max())
    pad = 0.1 * (hi - lo) if hi > lo else 0.01
    return np.linspace(lo - pad, hi + pad, _GRID_POINTS)


def _create_density_plot(
    samples: Dict[str, Sequence[float]],
    title: str = "Sampling Distribution of Estimated Utilization Rate",
    reference: Optional[float] = None,
    show: bool = True,
):
    """Overlay translucent density curves of simulated means.

    Draws one Gaussian-KDE curve per labelled sample with a filled,
    semi-transparent area. A sample with zero variance has no density and
    is drawn as a vertical line at its value instead.

    Args:
        samples: Mapping of legend label to simulated means.
        title: Plot title.
        reference: Optional true rate, drawn as a dashed vertical line.
        show: Call ``plt.show()`` after drawing.

    Returns:
        The matplotlib ``Figure``.

    Raises:
        ImportError: If ``matplotlib`` is not installed.
        ValueError: If *samples* is empty or contains an empty series.
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError("matplotlib required for plotting: pip install matplotlib") from None

    if not samples:
        raise ValueError("samples must contain at least one labelled series")
    arrays = {label: np.asarray(values, dtype=np.float64) for label, values in samples.items()}
    for label, values in arrays.items():
        if values.size == 0:
            raise ValueError(f"sample '{label}' is empty")

    fig, ax = plt.subplots(figsize=(10, 6))
    colors = plt.get_cmap("Set1")(np.linspace(0, 1, max(len(arrays), 2)))
    grid = _density_grid(arrays)

    for i, (label, values) in enumerate(arrays.items()):
        if values.size < 2 or np.ptp(values) == 0:
            ax.axvline(x=float(values[0]), color=colors[i], linewidth=2, label=label)
            continue

        density = gaussian_kde(values)(grid)
        ax.plot(grid, density, color=colors[i], linewidth=2, label=label)
        ax.fill_between(grid, density, color=colors[i], alpha=0.3)

    if reference is not None:
        ax.axvline(
            x=reference,
            color="black",
            linestyle="--",
            linewidth=1.5,
            label=f"True rate ({reference:.2f})",
        )

    ax.set_title(title, fontsize=14, fontweight="bold")
    ax.set_xlabel("Estimated Utilization Rate", fontsize=12)
    ax.set_ylabel("Density", fontsize=12)
    ax.grid(True, alpha=0.3)
    ax.legend(loc="upper right")

    fig.text(
        0.5,
        0.01,
        "made in MCBias: Monte Carlo view of measurement-error bias",
        ha="center",
        fontsize=9,
        color="#888888",
    )
    plt.tight_layout(rect=(0, 0.03, 1, 1))
    if show:
        plt.show()
    return fig
