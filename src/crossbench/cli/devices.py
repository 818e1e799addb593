"""Devices CLI command: list backends and JAX devices."""

import click

from crossbench.compute.backends import get_backend_info, list_backends
from crossbench.utils.device import get_device_info


@click.command()
def devices() -> None:
    """Show registered backends and the available JAX devices."""
    click.echo("Backends:")
    for name in list_backends():
        info = get_backend_info(name)
        description = info.description if info is not None else ""
        click.echo(f"  {name:<10} {description}")

    info = get_device_info()
    click.echo("")
    click.echo(f"JAX platform: {info['platform']} ({info['device_count']} device(s))")
    for device in info["devices"]:
        click.echo(f"  {device}")
    if "memory_gb" in info:
        click.echo(f"Device memory: {info['memory_gb']:.1f}GB")
