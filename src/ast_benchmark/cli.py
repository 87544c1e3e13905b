"""
AST Benchmark Driver

Tokenizes, parses and serializes toy-language source files, timing the
parse and marshal phases separately, and writes the JSON AST for each
input so it can be diffed against other implementations.

Usage:
    ast-benchmark example/a.tst example/b.tst
    ast-benchmark example/*.tst --iterations 1000 --output-dir output/python
    ast-benchmark example/*.tst --compare output/rust --verbose
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from ast_benchmark.benchmark import BenchmarkConfig, BenchmarkRunner, compare_json_files
from ast_benchmark.errors import AstBenchmarkError

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    arg_parser = argparse.ArgumentParser(
        prog="ast-benchmark",
        description="Benchmark the toy-language tokenizer, parser and serializer",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    arg_parser.add_argument(
        "files",
        nargs="+",
        type=Path,
        help="Source files to parse"
    )
    arg_parser.add_argument(
        "--iterations", "-i",
        type=int,
        default=100,
        help="Number of timed iterations per file (default: 100)"
    )
    arg_parser.add_argument(
        "--warmup", "-w",
        type=int,
        default=10,
        help="Number of untimed warmup iterations per file (default: 10)"
    )
    arg_parser.add_argument(
        "--output-dir", "-o",
        type=Path,
        default=Path("output/python"),
        help="Directory for the JSON ASTs (default: output/python)"
    )
    arg_parser.add_argument(
        "--compare", "-c",
        type=Path,
        default=None,
        help="Directory of reference JSON outputs to diff against"
    )
    arg_parser.add_argument(
        "--memory", "-m",
        action="store_true",
        help="Profile peak memory of one parse per file"
    )
    arg_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show detailed output"
    )
    return arg_parser


def compare_with_reference(written: list[Path], reference_dir: Path) -> bool:
    """Diff each written output against the same-named reference file.

    Returns:
        True if every output matches its reference.
    """
    all_match = True
    for path in written:
        report = compare_json_files(path, reference_dir / path.name)
        if report.equivalent:
            print(f"  {path.name:<20} identical ({report.node_count} nodes)")
            continue
        all_match = False
        print(f"  {path.name:<20} DIFFERS")
        for mismatch in report.mismatches:
            print(f"    {mismatch}")
    return all_match


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = BenchmarkConfig(
            iterations=args.iterations,
            warmup_iterations=args.warmup,
            measure_memory=args.memory,
        )
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    runner = BenchmarkRunner(config)
    logger.debug("Running %d file(s) with %s", len(args.files), config)

    try:
        results = runner.run_files(args.files)
        written = runner.write_outputs(results, args.output_dir)
    except AstBenchmarkError as e:
        logger.error("Benchmark aborted: %s", e)
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.verbose or args.memory:
        print(runner.format_results(results))

    exit_code = 0
    if args.compare is not None:
        print(f"\nComparing against {args.compare}...")
        try:
            if not compare_with_reference(written, args.compare):
                exit_code = 1
        except AstBenchmarkError as e:
            print(f"error: {e}", file=sys.stderr)
            return 1

    print(json.dumps(runner.summary(results), indent=2))
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
