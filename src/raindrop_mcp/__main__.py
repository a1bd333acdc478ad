"""Entry point for running the Raindrop MCP bridge."""

import sys

from .main import main

if __name__ == "__main__":
    sys.exit(main())
