"""Entry point for python -m seavan."""

import sys

from seavan.cli import main

if __name__ == "__main__":
    sys.exit(main())
