"""Abstract base class for per-identity session storage.

A session is the pair (working directory, transcript) kept for one
identity across otherwise stateless invocations. The executor and the
renderer only talk to this interface, so the backing store can be swapped
(scratch files, in-process memory) without touching either of them.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class SessionStore(ABC):
    """Per-identity working directory and transcript storage.

    Reads for an identity with no prior state return defaults rather than
    failing: the initial directory for the working directory and ``b""``
    for the transcript. Every mutation is persisted before the call
    returns.

    Example usage::

        store = FileSessionStore(root_dir="/tmp")
        store.append_output("1.2.3.4", b"hi\\n")
        store.set_working_directory("1.2.3.4", "/tmp")
        store.read_output("1.2.3.4")  # b"hi\\n"
    """

    def __init__(
        self,
        initial_directory: str | os.PathLike[str] | None = None,
        max_transcript_bytes: int | None = None,
    ) -> None:
        self._initial_directory = (
            os.fspath(initial_directory) if initial_directory is not None else os.getcwd()
        )
        self._max_transcript_bytes = max_transcript_bytes

    @property
    def initial_directory(self) -> str:
        return self._initial_directory

    @abstractmethod
    def get_working_directory(self, identity: str) -> str:
        """Return the last recorded working directory for ``identity``.

        Falls back to the initial directory when nothing is recorded.
        """
        ...

    @abstractmethod
    def set_working_directory(self, identity: str, path: str) -> None:
        """Record ``path`` as the working directory for ``identity``."""
        ...

    @abstractmethod
    def append_output(self, identity: str, data: bytes) -> None:
        """Append one command's output block to the transcript.

        The block is written in a single operation so that concurrent
        appends for the same identity never interleave within a block.
        """
        ...

    @abstractmethod
    def clear_output(self, identity: str) -> None:
        """Truncate the transcript for ``identity``."""
        ...

    @abstractmethod
    def read_output(self, identity: str) -> bytes:
        """Return the whole transcript for ``identity``."""
        ...

    def _bounded(self, transcript: bytes) -> bytes:
        """Keep only the trailing ``max_transcript_bytes`` of a transcript."""
        limit = self._max_transcript_bytes
        if limit is None or len(transcript) <= limit:
            return transcript
        return transcript[-limit:]
