"""Plotting utilities for visualizing benchmark history."""

from typing import Sequence

import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from crossbench.core.results import BenchmarkResult

from .scalability import ScalabilityChartData


def plot_scalability(
    history: Sequence[BenchmarkResult],
    title: str | None = "Matrix multiplication scalability",
    figsize: tuple[float, float] = (8, 4),
    show_compute: bool = True,
    log_scale: bool = True,
    ax: Axes | None = None,
) -> tuple[Figure, Axes]:
    """Plot general and accelerated time against matrix size.

    Args:
        history: Benchmark results (any order)
        title: Plot title (None for no title)
        figsize: Figure size (width, height) in inches
        show_compute: Also plot accelerated compute time without transfers
        log_scale: Use a logarithmic time axis
        ax: Existing axes to plot on. If None, creates new figure

    Returns:
        Tuple of (figure, axes) objects

    Example:
        >>> fig, ax = plot_scalability(orchestrator.history)
        >>> fig.savefig("scalability.png")
    """
    data = ScalabilityChartData.from_history(history)
    if data.is_empty:
        raise ValueError("Cannot plot an empty benchmark history")

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.get_figure()
        if fig is None:
            raise ValueError("Provided axes must be attached to a figure")

    sizes, general = zip(*data.general_points)
    _, accelerated = zip(*data.accelerated_points)
    ax.plot(sizes, general, "o-", label="General (CPU)")
    ax.plot(sizes, accelerated, "s-", label="Accelerated (total)")

    if show_compute:
        _, compute = zip(*data.compute_points)
        ax.plot(sizes, compute, "^--", alpha=0.6, label="Accelerated (compute only)")

    if data.crossover_size is not None:
        ax.axvline(data.crossover_size, color="gray", linestyle=":", label=f"Crossover N={data.crossover_size}")

    ax.set_xlabel("Matrix size N")
    ax.set_ylabel("Time (ms)")
    if log_scale:
        ax.set_yscale("log")
    if title is not None:
        ax.set_title(title)

    ax.legend()
    ax.grid(True, alpha=0.3)

    # Apply tight_layout if available (SubFigure doesn't have this method)
    if hasattr(fig, "tight_layout"):
        fig.tight_layout()  # type: ignore[union-attr]

    return fig, ax  # type: ignore[return-value]
