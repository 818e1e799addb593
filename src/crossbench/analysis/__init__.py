"""Analysis of accumulated benchmark history."""

from .plotting import plot_scalability
from .scalability import ScalabilityChartData, crossover

__all__ = ["crossover", "ScalabilityChartData", "plot_scalability"]
