"""
Main entry point for the devenv Language Server.

This file is executed when running: python -m devenvls

The server communicates with editors via stdin/stdout using JSON-RPC, so
all logging goes to stderr.
"""
import logging
import sys

from devenvls.config import Settings
from devenvls.lsp.server import create_server
from devenvls.options.schema import OptionSchemaError, OptionSchemaIndex


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if settings.debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main():
    """Start the language server on stdin/stdout."""
    settings = Settings.from_env()
    configure_logging(settings)

    option_index = None
    if settings.options_file is not None:
        try:
            option_index = OptionSchemaIndex.from_file(settings.options_file)
        except OptionSchemaError as e:
            print(f"devenvls: {e}", file=sys.stderr)
            sys.exit(1)

    server = create_server(option_index=option_index, settings=settings)

    # Start the server - it will listen on stdin/stdout for LSP messages
    # from the editor client
    server.start_io()


if __name__ == "__main__":
    main()
