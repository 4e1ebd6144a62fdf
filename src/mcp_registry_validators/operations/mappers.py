"""
Error mapping and CLI utilities.

Provides centralized exception-to-exit-code mapping and a CLI command wrapper
so every Typer command reports validation failures the same way.
"""
from __future__ import annotations

import typer
from typing import Callable, TypeVar

T = TypeVar('T')

EXIT_CODES = {
    "OciNotFound": 1,
    "OciInvalidReference": 2,
    "OciUnsupportedRegistry": 2,
    "UnsupportedRegistryType": 2,
    "ValidationError": 2,
    "ValueError": 2,
    "OciManifestFetchFailed": 3,
    "OciManifestParseFailed": 3,
    "OciConfigDigestMissing": 3,
    "OciConfigFetchFailed": 3,
    "OciConfigParseFailed": 3,
    "OciRateLimited": 3,
    "OciCancelled": 3,
    "OciAuthError": 4,
    "OciMissingAnnotation": 10,
    "OciOwnershipMismatch": 11,
}


def exit_code_for(exc: BaseException) -> int:
    """
    Map exception to standardized exit code.

    Returns:
    - 1: Image not found (OciNotFound)
    - 2: Invalid input (bad reference, unknown registry, bad descriptor)
    - 3: Registry/network error or unknown error
    - 4: Authentication error (OciAuthError)
    - 10: Missing ownership label (OciMissingAnnotation)
    - 11: Ownership mismatch (OciOwnershipMismatch)
    """
    return EXIT_CODES.get(type(exc).__name__, 3)


def run_and_exit(func: Callable[[], T]) -> T:
    """
    Unified error wrapper for CLI commands.

    Executes the given function, prints the error message for any exception
    and converts it to ``typer.Exit`` with the mapped exit code.

    Raises:
        typer.Exit: With appropriate exit code if function raises exception
    """
    try:
        return func()
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=exit_code_for(e)) from e
