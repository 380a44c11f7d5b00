"""Entry point for the CSS LSP server."""

import sys

from csslsp.cli import run


def main() -> None:
    """Parse command-line arguments and start the server."""
    sys.exit(run())


if __name__ == "__main__":
    main()
