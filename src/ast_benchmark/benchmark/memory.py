"""Memory profiling for tokenize+parse runs."""

import tracemalloc
from dataclasses import dataclass
from typing import Any, Callable

from ast_benchmark.parsers import parse_source


@dataclass
class MemoryStats:
    """Memory usage statistics."""
    peak_mb: float
    current_mb: float
    allocations: int


class MemoryProfiler:
    """Profile memory usage of parser operations."""

    @staticmethod
    def profile(func: Callable, *args, **kwargs) -> tuple[Any, MemoryStats]:
        """Profile memory usage of a function call.

        Args:
            func: Function to profile.
            *args: Positional arguments.
            **kwargs: Keyword arguments.

        Returns:
            Tuple of (function result, MemoryStats).
        """
        tracemalloc.start()
        try:
            result = func(*args, **kwargs)
            current, peak = tracemalloc.get_traced_memory()
            snapshot = tracemalloc.take_snapshot()
        finally:
            tracemalloc.stop()

        stats = MemoryStats(
            peak_mb=peak / 1024 / 1024,
            current_mb=current / 1024 / 1024,
            allocations=len(snapshot.statistics('lineno'))
        )

        return result, stats

    @staticmethod
    def profile_sources(sources: dict[str, str]) -> dict[str, MemoryStats]:
        """Profile tokenize+parse for several named sources.

        Args:
            sources: Mapping of input name to program text.

        Returns:
            Dictionary mapping input names to MemoryStats.
        """
        results = {}
        for name, source in sources.items():
            _, stats = MemoryProfiler.profile(parse_source, source)
            results[name] = stats
        return results
