"""Request handler: the entry point invoked once per platform event.

Extracts the caller identity and command from the event, runs the command
through the executor, renders the caller's transcript and wraps the page
in a base64 response envelope. Every request returns status 200; failures
show up as transcript text.
"""

from __future__ import annotations

import logging
import os
from typing import Any, MutableMapping

from lambdaterm.config.settings import Settings, load_settings
from lambdaterm.domain.models import InboundEvent, ResponseEnvelope
from lambdaterm.executor.executor import CommandExecutor
from lambdaterm.render.renderer import TranscriptRenderer
from lambdaterm.session import SessionStore, create_session_store
from lambdaterm.utils.logging import setup_logging

logger = logging.getLogger(__name__)


class RequestHandler:
    """Drives one request cycle: execute, render, encode."""

    def __init__(
        self,
        executor: CommandExecutor,
        renderer: TranscriptRenderer,
        extra_path: str | None = "/opt/bin",
    ) -> None:
        self._executor = executor
        self._renderer = renderer
        self._extra_path = extra_path

    @classmethod
    def from_settings(cls, settings: Settings) -> RequestHandler:
        store = create_session_store(settings.session)
        return cls(
            executor=CommandExecutor(store, shell_executable=settings.shell.executable),
            renderer=TranscriptRenderer(
                store,
                escape_transcript=settings.render.escape_transcript,
                input_size=settings.render.input_size,
            ),
            extra_path=settings.shell.extra_path,
        )

    @property
    def store(self) -> SessionStore:
        return self._executor.store

    def handle(self, event: Any) -> dict[str, Any]:
        """Handle one inbound event and return the response envelope."""
        request = InboundEvent.from_event(event)
        if self._extra_path:
            ensure_on_path(self._extra_path)

        logger.info("Request from %r: %r", request.identity, request.command)
        self._executor.execute(request.identity, request.command)
        page = self._renderer.render(request.identity)

        return ResponseEnvelope.from_html(page).to_dict()


def ensure_on_path(directory: str, environ: MutableMapping[str, str] | None = None) -> None:
    """Append ``directory`` to ``PATH`` unless it is already listed."""
    if environ is None:
        environ = os.environ
    current = environ.get("PATH", "")
    entries = current.split(os.pathsep) if current else []
    if directory in entries:
        return
    environ["PATH"] = os.pathsep.join([*entries, directory])
    logger.debug("Added %s to PATH", directory)


_handler: RequestHandler | None = None


def lambda_handler(event: Any, context: Any = None) -> dict[str, Any]:
    """Runtime-facing entry point.

    Settings and logging are set up on the first call and the handler is
    reused for every later invocation in the same process.
    """
    global _handler
    if _handler is None:
        settings = load_settings()
        setup_logging(settings.logging)
        _handler = RequestHandler.from_settings(settings)
    return _handler.handle(event)
