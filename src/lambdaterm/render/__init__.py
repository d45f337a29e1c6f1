"""HTML rendering of session transcripts."""

from lambdaterm.render.renderer import TranscriptRenderer

__all__ = ["TranscriptRenderer"]
