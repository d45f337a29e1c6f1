"""Domain models shared across lambdaterm components."""

from lambdaterm.domain.models import (
    CLEAR_COMMAND,
    InboundEvent,
    ResponseEnvelope,
    ShellResult,
)

__all__ = [
    "CLEAR_COMMAND",
    "InboundEvent",
    "ResponseEnvelope",
    "ShellResult",
]
