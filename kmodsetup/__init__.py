"""
kmodsetup - Kernel Module Setup Runner

A small command-line utility that exports the installed kernel module
version as LINUX_MODULES and runs a clean parallel make in the setup
directory.
"""

__version__ = "0.1.0"
__author__ = "kmodsetup Contributors"
__license__ = "MIT"

from .cli import main

__all__ = ["main"]
