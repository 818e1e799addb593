"""crossbench CLI - Command-line interface for the matmul crossover benchmark.

Usage:
    crossbench --help              Show available commands
    crossbench run --help          Show benchmark options
    crossbench devices             Show backends and JAX devices

Examples:
    # Benchmark the default sweep
    crossbench run

    # Benchmark chosen sizes with a fixed seed and save a chart
    crossbench run 64 256 1024 --seed 0 --plot scalability.png
"""

import logging

import click

from crossbench.cli.devices import devices
from crossbench.cli.run import run


@click.group()
@click.version_option(package_name="crossbench-jax")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    help="Logging verbosity",
)
def main(log_level: str) -> None:
    """crossbench: find where accelerated matrix multiplication pays off.

    Times dense square matmul on the host CPU and on a parallel backend,
    phase by phase, and reports the crossover size.
    """
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s: %(message)s")


# Register subcommands
main.add_command(run)
main.add_command(devices)


__all__ = ["main", "run", "devices"]
