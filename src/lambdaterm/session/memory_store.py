"""In-process session store for long-lived hosting processes and tests."""

from __future__ import annotations

import os
import threading

from lambdaterm.session.base import SessionStore


class MemorySessionStore(SessionStore):
    """Session store held in dictionaries guarded by a single lock.

    State lives only as long as the process; a recycled process starts
    with empty sessions, which callers treat as expected.
    """

    def __init__(
        self,
        initial_directory: str | os.PathLike[str] | None = None,
        max_transcript_bytes: int | None = None,
    ) -> None:
        super().__init__(initial_directory, max_transcript_bytes)
        self._directories: dict[str, str] = {}
        self._transcripts: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def get_working_directory(self, identity: str) -> str:
        with self._lock:
            return self._directories.get(identity, self._initial_directory)

    def set_working_directory(self, identity: str, path: str) -> None:
        with self._lock:
            self._directories[identity] = path

    def append_output(self, identity: str, data: bytes) -> None:
        with self._lock:
            current = self._transcripts.get(identity, b"")
            self._transcripts[identity] = self._bounded(current + data)

    def clear_output(self, identity: str) -> None:
        with self._lock:
            self._transcripts[identity] = b""

    def read_output(self, identity: str) -> bytes:
        with self._lock:
            return self._transcripts.get(identity, b"")

    def identities(self) -> list[str]:
        """Identities that have any recorded state."""
        with self._lock:
            return sorted(set(self._directories) | set(self._transcripts))
