"""
Module execution entry point.

Allows running with: python -m shielded_cli
"""

import sys
from shielded_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
