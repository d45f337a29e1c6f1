"""Command executor: one command for one identity.

Restores the identity's working directory, runs the command, appends the
captured output to the identity's transcript and records the directory the
command left the shell in.
"""

from __future__ import annotations

import logging
import os

from lambdaterm.domain.models import CLEAR_COMMAND, ShellResult
from lambdaterm.executor.shell import ShellError, run_shell
from lambdaterm.session.base import SessionStore

logger = logging.getLogger(__name__)

SHELL_NOT_STARTED_EXIT_CODE = 127


class CommandExecutor:
    """Runs commands against a session store.

    The command's own failure never surfaces as an exception: a non-zero
    exit status, a missing program, or a shell that cannot be started all
    end up as text in the transcript.
    """

    def __init__(self, store: SessionStore, shell_executable: str = "/bin/bash") -> None:
        self._store = store
        self._shell_executable = shell_executable

    @property
    def store(self) -> SessionStore:
        return self._store

    def execute(self, identity: str, command: str) -> None:
        """Execute ``command`` in the context of ``identity``'s session.

        ``clear`` truncates the transcript and leaves the working directory
        untouched. Anything else runs in the shell; its output is appended
        and the resulting working directory is recorded even if it failed.
        """
        start_dir = self._resolve_directory(identity)

        if command == CLEAR_COMMAND:
            self._store.clear_output(identity)
            logger.info("Cleared transcript for %r", identity)
            return

        try:
            result = run_shell(command, cwd=start_dir, executable=self._shell_executable)
        except ShellError as e:
            logger.error("Could not start shell for %r: %s", identity, e)
            result = ShellResult(
                output=f"{e}\n".encode("utf-8"),
                exit_code=SHELL_NOT_STARTED_EXIT_CODE,
            )

        self._store.append_output(identity, result.output)
        self._store.set_working_directory(identity, result.cwd or start_dir or os.getcwd())
        logger.info(
            "Ran command for %r (exit=%d, cwd=%s)", identity, result.exit_code, result.cwd
        )

    def _resolve_directory(self, identity: str) -> str | None:
        recorded = self._store.get_working_directory(identity)
        if os.path.isdir(recorded):
            return recorded
        logger.debug("Working directory %s for %r is gone, using ambient cwd", recorded, identity)
        return None
