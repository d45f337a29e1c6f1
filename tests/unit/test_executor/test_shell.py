"""Tests for the one-shot shell runner."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from lambdaterm.executor.shell import CWD_FILE_ENV, ShellError, run_shell


class TestRunShell:
    def test_captures_stdout(self, tmp_path: Path) -> None:
        result = run_shell("echo hi", cwd=str(tmp_path))
        assert result.output == b"hi\n"
        assert result.exit_code == 0

    def test_stderr_interleaved_with_stdout(self, tmp_path: Path) -> None:
        result = run_shell("echo out; echo err >&2; echo again", cwd=str(tmp_path))
        assert result.output == b"out\nerr\nagain\n"

    def test_failure_is_reported_not_raised(self, tmp_path: Path) -> None:
        result = run_shell("false", cwd=str(tmp_path))
        assert result.exit_code == 1
        assert result.output == b""

    def test_unknown_command_output(self, tmp_path: Path) -> None:
        result = run_shell("definitely-not-a-command-xyz", cwd=str(tmp_path))
        assert result.exit_code == 127
        assert b"not found" in result.output

    def test_reports_starting_directory(self, tmp_path: Path) -> None:
        result = run_shell("true", cwd=str(tmp_path))
        assert result.cwd == str(tmp_path)

    def test_reports_changed_directory(self, tmp_path: Path) -> None:
        (tmp_path / "sub").mkdir()
        result = run_shell("cd sub", cwd=str(tmp_path))
        assert result.cwd == str(tmp_path / "sub")

    def test_directory_reported_after_exit(self, tmp_path: Path) -> None:
        result = run_shell("cd /; exit 3", cwd=str(tmp_path))
        assert result.exit_code == 3
        assert result.cwd == "/"

    def test_empty_command(self, tmp_path: Path) -> None:
        result = run_shell("", cwd=str(tmp_path))
        assert result.output == b""
        assert result.exit_code == 0
        assert result.cwd == str(tmp_path)

    def test_stdin_is_closed(self, tmp_path: Path) -> None:
        result = run_shell("cat", cwd=str(tmp_path))
        assert result.output == b""
        assert result.exit_code == 0

    def test_uses_given_environment(self, tmp_path: Path) -> None:
        env = {"PATH": os.environ.get("PATH", "/usr/bin:/bin"), "GREETING": "hello"}
        result = run_shell('echo "$GREETING"', cwd=str(tmp_path), env=env)
        assert result.output == b"hello\n"

    def test_scratch_file_removed(self, tmp_path: Path) -> None:
        result = run_shell(f'echo "${CWD_FILE_ENV}"', cwd=str(tmp_path))
        scratch = result.output.decode().strip()
        assert scratch
        assert not Path(scratch).exists()

    def test_user_exit_trap_keeps_directory(self, tmp_path: Path) -> None:
        result = run_shell("trap 'echo bye' EXIT; cd /tmp", cwd=str(tmp_path))
        assert result.cwd == "/tmp"
        assert result.output == b"bye\n"

    def test_exit_status_preserved(self, tmp_path: Path) -> None:
        result = run_shell("cd /; (exit 5)", cwd=str(tmp_path))
        assert result.exit_code == 5
        assert result.cwd == "/"

    def test_error_line_numbers_start_at_one(self, tmp_path: Path) -> None:
        result = run_shell("nosuchcmd-xyz", cwd=str(tmp_path))
        assert b"line 1: nosuchcmd-xyz" in result.output
        assert b"line 2" not in result.output

    def test_multiline_command(self, tmp_path: Path) -> None:
        result = run_shell("echo one\necho two", cwd=str(tmp_path))
        assert result.output == b"one\ntwo\n"

    def test_nul_byte_raises_shell_error(self, tmp_path: Path) -> None:
        with pytest.raises(ShellError, match="null byte"):
            run_shell("echo a\x00b", cwd=str(tmp_path))

    def test_missing_shell_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ShellError, match="/nonexistent/shell"):
            run_shell("echo hi", cwd=str(tmp_path), executable="/nonexistent/shell")
