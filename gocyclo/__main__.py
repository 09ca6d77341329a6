"""
Entry point for running gocyclo as a module.

Usage:
    python -m gocyclo --over 10 ./src
    python -m gocyclo --help
"""

import sys
from gocyclo.cli import main

if __name__ == "__main__":
    sys.exit(main())
