"""Scratch-filesystem session store.

Keeps two files per identity under a shared root directory:
``directory_<key>`` with the last working directory path and
``logger_<key>`` with the accumulated transcript bytes. The key is the
identity percent-encoded, so any identity maps to exactly one file name
and distinct identities never collide.

Storage failures degrade: they are logged and reads return defaults.

There is no locking between requests. The last directory written wins,
and when ``max_transcript_bytes`` is set an append that races a trim of
the same transcript may be lost.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from urllib.parse import quote

from lambdaterm.session.base import SessionStore

logger = logging.getLogger(__name__)

DIRECTORY_PREFIX = "directory_"
TRANSCRIPT_PREFIX = "logger_"


class FileSessionStore(SessionStore):
    """Session store backed by files in a shared scratch directory."""

    def __init__(
        self,
        root_dir: str | os.PathLike[str] = "/tmp",
        initial_directory: str | os.PathLike[str] | None = None,
        max_transcript_bytes: int | None = None,
    ) -> None:
        super().__init__(initial_directory, max_transcript_bytes)
        self._root = Path(root_dir)

    @property
    def root_dir(self) -> Path:
        return self._root

    def directory_file(self, identity: str) -> Path:
        return self._root / f"{DIRECTORY_PREFIX}{_key(identity)}"

    def transcript_file(self, identity: str) -> Path:
        return self._root / f"{TRANSCRIPT_PREFIX}{_key(identity)}"

    def get_working_directory(self, identity: str) -> str:
        path = self.directory_file(identity)
        try:
            recorded = path.read_text(encoding="utf-8").rstrip("\n")
        except FileNotFoundError:
            return self._initial_directory
        except OSError as e:
            logger.warning("Could not read working directory from %s: %s", path, e)
            return self._initial_directory
        return recorded or self._initial_directory

    def set_working_directory(self, identity: str, path: str) -> None:
        target = self.directory_file(identity)
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            target.write_text(f"{path}\n", encoding="utf-8")
        except OSError as e:
            logger.warning("Could not record working directory in %s: %s", target, e)

    def append_output(self, identity: str, data: bytes) -> None:
        if not data:
            return
        target = self.transcript_file(identity)
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            with open(target, "ab") as f:
                f.write(data)
            if self._max_transcript_bytes is not None:
                self._trim(target)
        except OSError as e:
            logger.warning("Could not append to transcript %s: %s", target, e)

    def clear_output(self, identity: str) -> None:
        target = self.transcript_file(identity)
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            target.write_bytes(b"")
        except OSError as e:
            logger.warning("Could not clear transcript %s: %s", target, e)

    def read_output(self, identity: str) -> bytes:
        path = self.transcript_file(identity)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return b""
        except OSError as e:
            logger.warning("Could not read transcript %s: %s", path, e)
            return b""

    def _trim(self, target: Path) -> None:
        # readers see either the old transcript or the trimmed one
        if target.stat().st_size <= self._max_transcript_bytes:
            return
        tail = self._bounded(target.read_bytes())
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", dir=self._root)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(tail)
            os.replace(tmp_name, target)
        except OSError:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise
        logger.debug("Trimmed transcript %s to %d bytes", target, self._max_transcript_bytes)


def _key(identity: str) -> str:
    return quote(identity, safe="")
