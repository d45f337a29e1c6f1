"""Shared test fixtures for the lambdaterm test suite.

Provides stores, executors, renderers and handlers wired to temporary
directories, plus a factory for runtime-style events.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from lambdaterm.executor.executor import CommandExecutor
from lambdaterm.handler.request_handler import RequestHandler
from lambdaterm.render.renderer import TranscriptRenderer
from lambdaterm.session.file_store import FileSessionStore
from lambdaterm.session.memory_store import MemorySessionStore


# ---------------------------------------------------------------------------
# Directory Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    """Initial working directory for new sessions."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def sessions_dir(tmp_path: Path) -> Path:
    """Scratch area for file-backed sessions."""
    path = tmp_path / "sessions"
    path.mkdir()
    return path


# ---------------------------------------------------------------------------
# Store Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def file_store(sessions_dir: Path, home_dir: Path) -> FileSessionStore:
    return FileSessionStore(root_dir=sessions_dir, initial_directory=home_dir)


@pytest.fixture
def memory_store(home_dir: Path) -> MemorySessionStore:
    return MemorySessionStore(initial_directory=home_dir)


# ---------------------------------------------------------------------------
# Component Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def executor(file_store: FileSessionStore) -> CommandExecutor:
    return CommandExecutor(file_store)


@pytest.fixture
def renderer(file_store: FileSessionStore) -> TranscriptRenderer:
    return TranscriptRenderer(file_store)


@pytest.fixture
def bin_dir(tmp_path: Path) -> Path:
    """A bundled-binaries directory holding one executable, ``hello-tool``."""
    path = tmp_path / "bin"
    path.mkdir()
    tool = path / "hello-tool"
    tool.write_text("#!/bin/sh\necho tool ok\n")
    tool.chmod(0o755)
    return path


@pytest.fixture
def handler(
    executor: CommandExecutor,
    renderer: TranscriptRenderer,
    bin_dir: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> RequestHandler:
    """A handler over the file store; PATH is restored after the test."""
    monkeypatch.setenv("PATH", "/usr/local/bin:/usr/bin:/bin")
    return RequestHandler(executor, renderer, extra_path=str(bin_dir))


# ---------------------------------------------------------------------------
# Event Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_event() -> Callable[..., dict[str, Any]]:
    """Build a function-URL style event for an address and optional command."""

    def _make(address: str | None = "1.2.3.4", command: str | None = None) -> dict[str, Any]:
        headers = {"host": "example.lambda-url.us-east-1.on.aws"}
        if address is not None:
            headers["x-forwarded-for"] = address
        query = None if command is None else {"command": command}
        return {
            "version": "2.0",
            "rawPath": "/",
            "headers": headers,
            "queryStringParameters": query,
        }

    return _make
