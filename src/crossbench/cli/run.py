"""Run CLI command: benchmark a sweep of matrix sizes and report the crossover."""

import logging
import sys
from pathlib import Path

import click

from crossbench.analysis import crossover, plot_scalability
from crossbench.compute.backends import list_backends
from crossbench.configs.default import BenchmarkConfig
from crossbench.core.state import Error, Success
from crossbench.platform import BenchmarkOrchestrator
from crossbench.utils.config import apply_overrides, load_config

logger = logging.getLogger(__name__)


@click.command()
@click.argument("sizes", nargs=-1, type=click.IntRange(min=1))
@click.option(
    "--backend",
    type=click.Choice(list_backends()),
    default=None,
    help="Backend for the accelerated path (default: jax)",
)
@click.option(
    "--platform",
    type=str,
    default=None,
    help="JAX platform for the jax backend (cpu, gpu, tpu)",
)
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Random seed for matrix generation",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML config file (command-line options override it)",
)
@click.option(
    "--plot",
    "plot_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Save a scalability chart to this file",
)
def run(
    sizes: tuple[int, ...],
    backend: str | None,
    platform: str | None,
    seed: int | None,
    config_path: Path | None,
    plot_path: Path | None,
) -> None:
    """Benchmark general vs accelerated matrix multiplication.

    SIZES are matrix dimensions run in order (default: from the config,
    otherwise 64 128 256 512).

    \b
    # Default sweep on the default JAX device
    crossbench run

    \b
    # Custom sizes on the thread-pool backend
    crossbench run 32 64 128 --backend threads --seed 0
    """
    overrides = {
        "sizes": sizes or None,
        "seed": seed,
        "backend.name": backend,
        "backend.platform": platform,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    try:
        if config_path is not None:
            config = load_config(config_path, BenchmarkConfig, overrides)
        else:
            config = BenchmarkConfig(**apply_overrides({}, overrides))
    except ValueError as e:  # includes pydantic.ValidationError
        raise click.UsageError(f"Invalid benchmark configuration:\n{e}") from e

    logger.info(f"Benchmarking sizes {list(config.sizes)} on backend '{config.backend.name}'")

    with BenchmarkOrchestrator.from_config(config) as orchestrator:
        states = orchestrator.run_sweep(config.sizes)
        history = orchestrator.history

    failures = 0
    for state in states:
        if isinstance(state, Success):
            click.echo(state.result.to_log_string())
            click.echo("")
        elif isinstance(state, Error):
            failures += 1
            click.echo(f"Benchmark N={state.size} failed: {state.message}", err=True)

    if history:
        crossover_size = crossover(history)
        if crossover_size is None:
            click.echo("No crossover observed: the general path was faster at every size.")
        else:
            click.echo(f"Crossover size: N={crossover_size}")

        if plot_path is not None:
            fig, _ = plot_scalability(history)
            plot_path.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(plot_path)
            logger.info(f"Saved scalability chart to {plot_path}")

    if failures:
        sys.exit(1)
