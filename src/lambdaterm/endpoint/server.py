"""FastAPI HTTP server for running the terminal locally.

Turns each HTTP request into the same event shape the hosting runtime
delivers, passes it to the request handler and serves the decoded page.
The caller identity is the ``X-Forwarded-For`` header when a proxy sets
it, otherwise the client address.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from lambdaterm import __version__
from lambdaterm.config.settings import Settings
from lambdaterm.domain.models import FORWARDED_FOR_HEADER, ResponseEnvelope
from lambdaterm.handler.request_handler import RequestHandler

logger = logging.getLogger(__name__)


class EndpointStatus(BaseModel):
    status: str = "ok"
    session_backend: str = ""


def create_app(
    handler: RequestHandler | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    if handler is None:
        handler = RequestHandler.from_settings(settings or Settings())

    app = FastAPI(
        title="lambdaterm",
        description="Terminal session emulated over stateless HTTP requests",
        version=__version__,
    )
    app.state.handler = handler
    logger.info("Endpoint created (session backend: %s)", type(handler.store).__name__)

    @app.get("/health")
    async def health_check() -> EndpointStatus:
        h: RequestHandler = app.state.handler
        return EndpointStatus(status="ok", session_backend=type(h.store).__name__)

    @app.get("/", response_class=HTMLResponse)
    def terminal(request: Request) -> HTMLResponse:
        h: RequestHandler = app.state.handler
        event = build_event(request)
        envelope = ResponseEnvelope.model_validate(h.handle(event))
        return HTMLResponse(
            content=envelope.decoded_body(),
            status_code=envelope.status_code,
        )

    return app


def build_event(request: Request) -> dict:
    """Build a runtime-style event from an incoming HTTP request."""
    forwarded = request.headers.get(FORWARDED_FOR_HEADER)
    if not forwarded:
        forwarded = request.client.host if request.client else ""
    return {
        "headers": {FORWARDED_FOR_HEADER: forwarded},
        "queryStringParameters": dict(request.query_params),
    }

