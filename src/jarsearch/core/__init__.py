"""
Core functionality for jarsearch.

- api: the JarSearch engine and the ``run`` function
- config: SearchConfig
- aggregator: thread-safe result and statistics sink
- types: shared data types
- managers: worker pool fan-out
"""

from .aggregator import Aggregator
from .api import JarSearch, compile_pattern, run
from .config import SearchConfig

__all__ = [
    "Aggregator",
    "JarSearch",
    "SearchConfig",
    "compile_pattern",
    "run",
]
