"""Benchmark suite for parser timing and output equivalence."""

from .runner import BenchmarkRunner, BenchmarkConfig, BenchmarkResult, TimingResult
from .metrics import EquivalenceReport, compare_outputs, compare_json_files
from .memory import MemoryProfiler, MemoryStats

__all__ = [
    "BenchmarkRunner",
    "BenchmarkConfig",
    "BenchmarkResult",
    "TimingResult",
    "EquivalenceReport",
    "compare_outputs",
    "compare_json_files",
    "MemoryProfiler",
    "MemoryStats",
]
