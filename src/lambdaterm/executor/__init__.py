"""Command execution with per-identity directory persistence."""

from lambdaterm.executor.executor import CommandExecutor
from lambdaterm.executor.shell import ShellError, run_shell

__all__ = ["CommandExecutor", "ShellError", "run_shell"]
