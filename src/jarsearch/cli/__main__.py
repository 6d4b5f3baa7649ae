"""
CLI entry point for jarsearch.

This module serves as the entry point when jarsearch.cli is executed as a module
with `python -m jarsearch.cli`.
"""

from .main import cli

if __name__ == "__main__":
    cli(prog_name="jarsearch")
