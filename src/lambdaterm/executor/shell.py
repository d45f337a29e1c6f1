"""One-shot shell invocation.

``run_shell`` is the only place caller-supplied text reaches a shell. The
command travels in the environment and is ``eval``-ed by a fixed
``bash -c`` script with stderr merged into stdout. The script writes the
final directory after the ``eval`` returns. An ``EXIT`` trap writes it
when the command calls ``exit`` instead, so a ``cd`` inside the command
survives into the next invocation either way.
"""

from __future__ import annotations

import logging
import os
import subprocess
import tempfile

from lambdaterm.domain.models import ShellResult

logger = logging.getLogger(__name__)

CWD_FILE_ENV = "LAMBDATERM_CWD_FILE"
COMMAND_ENV = "LAMBDATERM_COMMAND"

# Kept on one line so bash numbers the command's own lines from 1.
_SCRIPT = (
    f"trap 'pwd > \"${CWD_FILE_ENV}\"' EXIT; "
    f"eval \"${COMMAND_ENV}\"; "
    "__lambdaterm_status=$?; "
    f"pwd > \"${CWD_FILE_ENV}\"; "
    "exit $__lambdaterm_status"
)


def run_shell(
    command: str,
    cwd: str | None = None,
    executable: str = "/bin/bash",
    env: dict[str, str] | None = None,
) -> ShellResult:
    """Run ``command`` and capture its combined output and final directory.

    A non-zero exit status is reported in the result, never raised.

    Args:
        command: Shell text, evaluated as-is.
        cwd: Directory to start in; the process cwd when None.
        executable: Shell binary invoked with ``-c``.
        env: Environment for the shell; ``os.environ`` when None.

    Raises:
        ShellError: If the shell process itself cannot be started, or
            the command cannot be handed to it (an embedded NUL byte).
    """
    fd, cwd_file = tempfile.mkstemp(prefix="lambdaterm-cwd-")
    os.close(fd)
    shell_env = dict(os.environ if env is None else env)
    shell_env[CWD_FILE_ENV] = cwd_file
    shell_env[COMMAND_ENV] = command
    if cwd is not None:
        # keeps symlinked paths as the user typed them
        shell_env["PWD"] = cwd
    try:
        try:
            completed = subprocess.run(
                [executable, "-c", _SCRIPT],
                cwd=cwd,
                env=shell_env,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                check=False,
            )
        except OSError as e:
            raise ShellError(f"{executable}: {e.strerror or e}") from e
        except ValueError as e:
            # NUL bytes cannot be passed to a process
            raise ShellError(f"{executable}: {e}") from e
        final_cwd = _read_cwd(cwd_file)
    finally:
        try:
            os.unlink(cwd_file)
        except OSError:
            pass

    logger.debug(
        "Shell exited with %d (%d bytes of output, cwd=%s)",
        completed.returncode, len(completed.stdout), final_cwd,
    )
    return ShellResult(
        output=completed.stdout,
        exit_code=completed.returncode,
        cwd=final_cwd,
    )


def _read_cwd(path: str) -> str | None:
    try:
        with open(path, encoding="utf-8") as f:
            recorded = f.read().rstrip("\n")
    except OSError:
        return None
    return recorded or None


class ShellError(Exception):
    """Raised when the shell process cannot be started."""
