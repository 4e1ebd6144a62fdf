"""
MCP Registry Validators CLI

Runs a single package ownership check from the command line:
- oci: Validate an OCI image given its coordinates
- package: Validate a package descriptor read from a JSON file
"""
from __future__ import annotations

import logging
import typer
from pathlib import Path

from .models import PackageDescriptor, RegistryType
from .operations import run_and_exit
from .settings import create_settings_from_env
from .validators import validate_package

app = typer.Typer(name="mcp-registry-validate", help="MCP registry package ownership validator")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", help="Log registry requests"),
):
    """Validate that published packages belong to the claimed MCP server."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def oci(
    identifier: str = typer.Argument(..., help="Image name, e.g. 'myorg/server' or 'nginx'"),
    owner: str = typer.Option(..., "--owner", help="Claimed server name, e.g. 'io.github.me/server'"),
    version: str = typer.Option("latest", "--version", help="Image tag"),
    registry_base_url: str = typer.Option("", "--registry-base-url", help="Registry base URL (default: Docker Hub)"),
):
    """Check the ownership label of an OCI image."""
    def _run():
        descriptor = PackageDescriptor(
            registry_type=RegistryType.OCI,
            registry_base_url=registry_base_url,
            identifier=identifier,
            version=version,
        )
        validate_package(descriptor, owner, settings=create_settings_from_env())
        return descriptor

    descriptor = run_and_exit(_run)
    typer.echo(f"OK: {descriptor.identifier}:{descriptor.version} belongs to {owner}")


@app.command()
def package(
    path: Path = typer.Argument(..., help="JSON file with a package descriptor"),
    owner: str = typer.Option(..., "--owner", help="Claimed server name"),
):
    """Check a package descriptor from a publish request payload."""
    def _run():
        descriptor = PackageDescriptor.model_validate_json(path.read_text())
        validate_package(descriptor, owner, settings=create_settings_from_env())
        return descriptor

    descriptor = run_and_exit(_run)
    typer.echo(f"OK: {descriptor.identifier}:{descriptor.version} belongs to {owner}")


if __name__ == "__main__":
    app()
