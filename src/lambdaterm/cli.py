"""Command-line interface for lambdaterm.

Provides the entry point for serving the terminal over local HTTP,
invoking the handler once on a saved event, or running a single command
for an identity.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="lambdaterm",
        description="Terminal session over stateless HTTP invocations",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/lambdaterm.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("serve", help="Serve the terminal page over local HTTP")

    invoke_parser = subparsers.add_parser(
        "invoke", help="Run the handler once on a JSON event and print the envelope",
    )
    invoke_parser.add_argument(
        "--event", type=str, default="-",
        help="Path to the event JSON file, or '-' for stdin",
    )

    exec_parser = subparsers.add_parser(
        "exec", help="Run one command for an identity and print its transcript",
    )
    exec_parser.add_argument(
        "--identity", type=str, default="",
        help="Caller identity (normally the forwarded client address)",
    )
    exec_parser.add_argument("shell_command", type=str, help="Command to run")

    return parser.parse_args(argv)


def _invoke(settings, event_source: str) -> None:
    """Feed one event through the handler and print the response envelope."""
    from lambdaterm.handler.request_handler import RequestHandler

    if event_source == "-":
        event = json.load(sys.stdin)
    else:
        with open(event_source) as f:
            event = json.load(f)

    handler = RequestHandler.from_settings(settings)
    envelope = handler.handle(event)
    print(json.dumps(envelope, indent=2))


def _exec(settings, identity: str, command: str) -> None:
    """Execute a command for ``identity`` and print the updated transcript."""
    from lambdaterm.executor.executor import CommandExecutor
    from lambdaterm.handler.request_handler import ensure_on_path
    from lambdaterm.session import create_session_store

    store = create_session_store(settings.session)
    if settings.shell.extra_path:
        ensure_on_path(settings.shell.extra_path)
    executor = CommandExecutor(store, shell_executable=settings.shell.executable)
    executor.execute(identity, command)

    sys.stdout.write(store.read_output(identity).decode("utf-8", errors="replace"))
    print(f"{store.get_working_directory(identity)}$ ")


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the lambdaterm CLI."""
    args = parse_args(argv)

    if args.command is None:
        parse_args(["--help"])
        return

    from lambdaterm.config.settings import load_settings
    from lambdaterm.utils.logging import setup_logging

    settings = load_settings(args.config)

    if args.verbose:
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging)

    if args.command == "serve":
        logger.info("Starting endpoint server")
        from lambdaterm.endpoint.server import create_app
        import uvicorn
        ep = settings.endpoint
        app = create_app(settings=settings)
        uvicorn.run(
            app,
            host=ep.host,
            port=ep.port,
        )

    elif args.command == "invoke":
        logger.info("Invoking handler with event from %s", args.event)
        _invoke(settings, args.event)

    elif args.command == "exec":
        _exec(settings, args.identity, args.shell_command)


if __name__ == "__main__":
    main()
