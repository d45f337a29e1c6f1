"""Transcript renderer for the terminal page.

Produces a single self-contained HTML document: the identity's transcript
in a black, monospace ``<pre>`` block followed by a one-field GET form
whose label is the working directory prompt. On load the page scrolls to
the bottom and focuses the input.
"""

from __future__ import annotations

import html
import logging

from lambdaterm.domain.models import COMMAND_PARAMETER
from lambdaterm.session.base import SessionStore

logger = logging.getLogger(__name__)

PROMPT_INPUT_ID = "prompt"

_PAGE_HEAD = """<html>
    <body style='background-color: #000; color: #FFF; font-family: Courier New, Courier, monospace;'>
        <style>
            form {
                background-color: #000;
                color: #FFF;
                padding: 1px;
                font-family: 'Courier New', Courier, monospace;
            }
            pre {
                background-color: #000;
                color: #FFF;
                padding: 0px;
                white-space: pre-wrap;
                word-wrap: break-word;
            }
            input[type='text']:focus {
                outline: none;
            }
        </style>
        <pre>"""

_PAGE_FORM = """</pre>
        <form method='GET' action=''>
            <label>{prompt}$ </label>
            <input id='{input_id}' name='{input_name}' type='text' size='{size}' style='background-color: #000; color: #FFF; border: none;'>
            <input type='submit' style='visibility: hidden;'>
        </form>
        <script>
            window.onload = function() {{
                window.scrollTo(0, document.body.scrollHeight);
                document.getElementById('{input_id}').focus();
            }}
        </script>
    </body>
</html>
"""


class TranscriptRenderer:
    """Renders an identity's session as an HTML terminal page.

    Rendering only reads from the store, so two calls without an
    intervening command return identical documents.

    Args:
        store: Session store to read the transcript and directory from.
        escape_transcript: HTML-escape the transcript instead of inserting
            it verbatim.
        input_size: Width of the command input field, in characters.
    """

    def __init__(
        self,
        store: SessionStore,
        escape_transcript: bool = False,
        input_size: int = 100,
    ) -> None:
        self._store = store
        self._escape_transcript = escape_transcript
        self._input_size = input_size

    def render(self, identity: str) -> str:
        transcript = self._store.read_output(identity).decode("utf-8", errors="replace")
        if self._escape_transcript:
            transcript = html.escape(transcript, quote=False)
        prompt = html.escape(self._store.get_working_directory(identity))

        logger.debug("Rendering %d chars of transcript for %r", len(transcript), identity)
        return "".join(
            (
                _PAGE_HEAD,
                transcript,
                _PAGE_FORM.format(
                    prompt=prompt,
                    input_id=PROMPT_INPUT_ID,
                    input_name=COMMAND_PARAMETER,
                    size=self._input_size,
                ),
            )
        )
