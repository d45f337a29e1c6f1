"""Core domain models for lambdaterm.

These models represent the data flowing through one request cycle: the
inbound platform event, the result of running a shell command, and the
transport response envelope handed back to the runtime.
"""

from __future__ import annotations

import base64
import logging
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

CLEAR_COMMAND = "clear"
FORWARDED_FOR_HEADER = "x-forwarded-for"
COMMAND_PARAMETER = "command"


# ---------------------------------------------------------------------------
# Inbound
# ---------------------------------------------------------------------------


class InboundEvent(BaseModel):
    """The subset of a function-URL / API gateway event the handler reads.

    Header names are normalized to lower case. Absent or null sections
    become empty mappings so that identity and command fall back to ``""``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    headers: dict[str, str] = Field(default_factory=dict)
    query: dict[str, str] = Field(default_factory=dict, alias="queryStringParameters")

    @field_validator("headers", mode="before")
    @classmethod
    def _normalize_headers(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, Mapping):
            return {str(k).lower(): v for k, v in value.items() if v is not None}
        return value

    @field_validator("query", mode="before")
    @classmethod
    def _normalize_query(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, Mapping):
            return {k: v for k, v in value.items() if v is not None}
        return value

    @classmethod
    def from_event(cls, event: Any) -> InboundEvent:
        """Parse a raw event, degrading to an empty event when malformed."""
        if not isinstance(event, Mapping):
            logger.warning("Ignoring non-mapping event of type %s", type(event).__name__)
            return cls()
        try:
            return cls.model_validate(event)
        except ValidationError as e:
            logger.warning("Malformed event (%d validation errors), using defaults", e.error_count())
            return cls()

    @property
    def identity(self) -> str:
        """First address of the forwarded-for chain (the original client)."""
        forwarded = self.headers.get(FORWARDED_FOR_HEADER, "")
        return forwarded.split(",")[0].strip()

    @property
    def command(self) -> str:
        return self.query.get(COMMAND_PARAMETER, "")


# ---------------------------------------------------------------------------
# Execution
# ---------------------------------------------------------------------------


class ShellResult(BaseModel):
    """Outcome of one shell invocation."""

    model_config = ConfigDict(frozen=True)

    output: bytes = Field(default=b"", description="Interleaved stdout/stderr")
    exit_code: int = Field(default=0)
    cwd: str | None = Field(
        default=None, description="Working directory when the shell exited, if reported"
    )


# ---------------------------------------------------------------------------
# Outbound
# ---------------------------------------------------------------------------


class ResponseEnvelope(BaseModel):
    """Transport response envelope returned to the invoking platform."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    is_base64_encoded: bool = Field(default=True, alias="isBase64Encoded")
    status_code: int = Field(default=200, alias="statusCode")
    headers: dict[str, str] = Field(default_factory=lambda: {"Content-Type": "text/html"})
    body: str = Field(default="")

    @classmethod
    def from_html(cls, html: str) -> ResponseEnvelope:
        encoded = base64.b64encode(html.encode("utf-8")).decode("ascii")
        return cls(body=encoded)

    def decoded_body(self) -> str:
        if not self.is_base64_encoded:
            return self.body
        return base64.b64decode(self.body).decode("utf-8")

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
