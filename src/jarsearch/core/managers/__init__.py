"""Execution managers used by the search engine."""

from .parallel_processing import ParallelSearchManager, UnitFunction

__all__ = ["ParallelSearchManager", "UnitFunction"]
