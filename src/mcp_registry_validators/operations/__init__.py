"""
Operations package - CLI-facing helpers.

Centralizes error mapping so CLI commands stay thin and testable.
"""
from .mappers import EXIT_CODES, exit_code_for, run_and_exit

__all__ = ["EXIT_CODES", "exit_code_for", "run_and_exit"]
