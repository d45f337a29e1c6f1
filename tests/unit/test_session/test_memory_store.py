"""Tests for the in-memory session store and the store factory."""

from __future__ import annotations

import threading
from pathlib import Path

from lambdaterm.config.settings import SessionConfig
from lambdaterm.session import (
    FileSessionStore,
    MemorySessionStore,
    create_session_store,
)


class TestMemorySessionStore:
    def test_defaults(self, memory_store: MemorySessionStore, home_dir: Path) -> None:
        assert memory_store.get_working_directory("id") == str(home_dir)
        assert memory_store.read_output("id") == b""

    def test_round_trip(self, memory_store: MemorySessionStore) -> None:
        memory_store.set_working_directory("id", "/tmp")
        memory_store.append_output("id", b"a")
        memory_store.append_output("id", b"b")
        assert memory_store.get_working_directory("id") == "/tmp"
        assert memory_store.read_output("id") == b"ab"

    def test_clear_keeps_directory(self, memory_store: MemorySessionStore) -> None:
        memory_store.set_working_directory("id", "/tmp")
        memory_store.append_output("id", b"a")
        memory_store.clear_output("id")
        assert memory_store.read_output("id") == b""
        assert memory_store.get_working_directory("id") == "/tmp"

    def test_identities(self, memory_store: MemorySessionStore) -> None:
        memory_store.append_output("b", b"x")
        memory_store.set_working_directory("a", "/tmp")
        assert memory_store.identities() == ["a", "b"]

    def test_bounded_transcript(self, home_dir: Path) -> None:
        store = MemorySessionStore(home_dir, max_transcript_bytes=3)
        store.append_output("id", b"12345")
        assert store.read_output("id") == b"345"

    def test_concurrent_blocks_do_not_interleave(self, memory_store: MemorySessionStore) -> None:
        blocks = [bytes([65 + i]) * 100 for i in range(8)]

        def append(block: bytes) -> None:
            for _ in range(20):
                memory_store.append_output("id", block)

        threads = [threading.Thread(target=append, args=(b,)) for b in blocks]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        transcript = memory_store.read_output("id")
        assert len(transcript) == 8 * 20 * 100
        chunks = [transcript[i:i + 100] for i in range(0, len(transcript), 100)]
        assert all(chunk in blocks for chunk in chunks)


class TestCreateSessionStore:
    def test_file_backend_by_default(self) -> None:
        store = create_session_store()
        assert isinstance(store, FileSessionStore)
        assert store.root_dir == Path("/tmp")

    def test_memory_backend(self, home_dir: Path) -> None:
        store = create_session_store(
            SessionConfig(backend="memory", initial_directory=home_dir)
        )
        assert isinstance(store, MemorySessionStore)
        assert store.initial_directory == str(home_dir)
