"""Benchmark runner timing the parse and marshal phases."""

import logging
import statistics
import time
from dataclasses import dataclass, field
from pathlib import Path

from ast_benchmark.benchmark.memory import MemoryProfiler, MemoryStats
from ast_benchmark.errors import BenchmarkInputError
from ast_benchmark.parsers import parse, parse_source, tokenize
from ast_benchmark.serializer import to_json

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkConfig:
    """Configuration for benchmark runs."""
    iterations: int = 100
    warmup_iterations: int = 10
    measure_memory: bool = False
    indent: int | None = 2

    def __post_init__(self):
        if self.iterations < 1:
            raise ValueError("iterations must be at least 1")
        if self.warmup_iterations < 0:
            raise ValueError("warmup_iterations cannot be negative")


@dataclass
class TimingResult:
    """Timing statistics for one benchmark phase."""
    total_ms: float
    mean_ms: float
    median_ms: float
    min_ms: float
    max_ms: float
    p95_ms: float
    p99_ms: float
    std_dev_ms: float
    iterations: int
    runs_per_second: float

    @classmethod
    def from_samples(cls, times: list[float]) -> "TimingResult":
        """Summarize per-iteration durations in milliseconds."""
        times_sorted = sorted(times)
        total_time = sum(times)

        p95_idx = int(len(times_sorted) * 0.95)
        p99_idx = int(len(times_sorted) * 0.99)

        return cls(
            total_ms=total_time,
            mean_ms=statistics.mean(times),
            median_ms=statistics.median(times),
            min_ms=min(times),
            max_ms=max(times),
            p95_ms=times_sorted[min(p95_idx, len(times_sorted) - 1)],
            p99_ms=times_sorted[min(p99_idx, len(times_sorted) - 1)],
            std_dev_ms=statistics.stdev(times) if len(times) > 1 else 0.0,
            iterations=len(times),
            runs_per_second=(len(times) / total_time) * 1000 if total_time > 0 else 0
        )


@dataclass
class BenchmarkResult:
    """Complete result from benchmarking one input."""
    name: str
    parse: TimingResult
    marshal: TimingResult
    output: str
    token_count: int
    memory: MemoryStats | None = field(default=None)


class BenchmarkRunner:
    """Runs tokenize+parse and serialization benchmarks over source inputs.

    A malformed input aborts the run: the parse error propagates to the
    caller, since one bad input invalidates the whole comparison.
    """

    def __init__(self, config: BenchmarkConfig | None = None):
        """Initialize the benchmark runner.

        Args:
            config: Benchmark configuration.
        """
        self.config = config or BenchmarkConfig()

    def run(self, name: str, source: str) -> BenchmarkResult:
        """Benchmark a single source text.

        Args:
            name: Label for the input (usually the file stem).
            source: Program text.

        Returns:
            BenchmarkResult with parse and marshal timings and the JSON output.
        """
        logger.debug("Warming up %s (%d iterations)", name, self.config.warmup_iterations)
        for _ in range(self.config.warmup_iterations):
            to_json(parse(tokenize(source)), indent=self.config.indent)

        parse_times: list[float] = []
        marshal_times: list[float] = []
        output = ""
        token_count = 0

        for _ in range(self.config.iterations):
            start = time.perf_counter()
            tokens = tokenize(source)
            program = parse(tokens)
            end_parse = time.perf_counter()
            output = to_json(program, indent=self.config.indent)
            end = time.perf_counter()

            parse_times.append((end_parse - start) * 1000)
            marshal_times.append((end - end_parse) * 1000)
            token_count = len(tokens)

        memory = None
        if self.config.measure_memory:
            _, memory = MemoryProfiler.profile(parse_source, source)

        result = BenchmarkResult(
            name=name,
            parse=TimingResult.from_samples(parse_times),
            marshal=TimingResult.from_samples(marshal_times),
            output=output,
            token_count=token_count,
            memory=memory,
        )
        logger.info(
            "%s: %d tokens, parse %.4f ms, marshal %.4f ms (mean of %d)",
            name, token_count, result.parse.mean_ms, result.marshal.mean_ms,
            self.config.iterations,
        )
        return result

    def run_files(self, paths: list[Path]) -> dict[str, BenchmarkResult]:
        """Benchmark each file in order, keyed by file stem.

        Raises:
            BenchmarkInputError: If a file cannot be read, or two files
                share a stem and would overwrite each other's output.
        """
        results = {}
        for path in paths:
            path = Path(path)
            if path.stem in results:
                raise BenchmarkInputError(
                    f"Duplicate input name {path.stem!r}: {path} would overwrite an earlier output"
                )
            try:
                source = path.read_text(encoding="utf-8")
            except OSError as e:
                raise BenchmarkInputError(f"Cannot read {path}: {e}") from e
            results[path.stem] = self.run(path.stem, source)
        return results

    @staticmethod
    def write_outputs(results: dict[str, BenchmarkResult], output_dir: Path) -> list[Path]:
        """Write each result's JSON output to ``<output_dir>/<name>.json``."""
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        written = []
        for name, result in results.items():
            target = output_dir / f"{name}.json"
            target.write_text(result.output, encoding="utf-8")
            logger.debug("Wrote %s", target)
            written.append(target)
        return written

    @staticmethod
    def summary(results: dict[str, BenchmarkResult]) -> dict[str, float]:
        """Total parse and marshal time across all inputs, in milliseconds."""
        return {
            "parse": sum(r.parse.total_ms for r in results.values()),
            "marshal": sum(r.marshal.total_ms for r in results.values()),
        }

    def format_results(self, results: dict[str, BenchmarkResult]) -> str:
        """Format benchmark results as a table.

        Args:
            results: Dictionary of benchmark results.

        Returns:
            Formatted string table.
        """
        lines = []
        lines.append("=" * 80)
        lines.append("BENCHMARK RESULTS")
        lines.append("=" * 80)
        lines.append(
            f"{'Input':<20} {'Tokens':<10} {'Parse (ms)':<12} {'p95 (ms)':<12} "
            f"{'Marshal (ms)':<14} {'Parses/s':<12}"
        )
        lines.append("-" * 80)

        for name, result in results.items():
            lines.append(
                f"{name:<20} {result.token_count:<10} "
                f"{result.parse.mean_ms:<12.4f} "
                f"{result.parse.p95_ms:<12.4f} "
                f"{result.marshal.mean_ms:<14.4f} "
                f"{result.parse.runs_per_second:<12,.0f}"
            )
            if result.memory is not None:
                lines.append(
                    f"{'':<20} peak {result.memory.peak_mb:.3f} MB, "
                    f"{result.memory.allocations} allocation sites"
                )

        lines.append("=" * 80)
        return "\n".join(lines)
