"""Per-identity session storage.

Provides the abstract SessionStore interface, a scratch-file backend that
survives across invocations of one execution environment, and an
in-memory backend for long-lived processes.
"""

from lambdaterm.config.settings import SessionConfig
from lambdaterm.session.base import SessionStore
from lambdaterm.session.file_store import FileSessionStore
from lambdaterm.session.memory_store import MemorySessionStore


def create_session_store(config: SessionConfig | None = None) -> SessionStore:
    """Build the session store selected by ``config.backend``."""
    if config is None:
        config = SessionConfig()
    if config.backend == "memory":
        return MemorySessionStore(
            initial_directory=config.initial_directory,
            max_transcript_bytes=config.max_transcript_bytes,
        )
    return FileSessionStore(
        root_dir=config.root_dir,
        initial_directory=config.initial_directory,
        max_transcript_bytes=config.max_transcript_bytes,
    )


__all__ = [
    "FileSessionStore",
    "MemorySessionStore",
    "SessionStore",
    "create_session_store",
]
