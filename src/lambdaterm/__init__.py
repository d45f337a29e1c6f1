"""lambdaterm -- a terminal session over stateless HTTP invocations.

Each request carries one shell command and a caller identity. The command
runs in that caller's last working directory, its output is appended to
the caller's transcript, and the response is an HTML page showing the
transcript with a prompt for the next command.
"""

__version__ = "0.1.0"
