"""
Entry point for running kmodsetup as a module.

Usage:
    python -m kmodsetup [options]
"""

import sys
from kmodsetup.cli import main

if __name__ == "__main__":
    sys.exit(main())
