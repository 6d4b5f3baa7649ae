"""
Command-line interface implementation.

The CLI module makes jarsearch accessible from the command line: the ``find``
command runs one search, the ``list`` command prints the archive report.
"""

from .main import main

__all__ = [
    "main",
]
