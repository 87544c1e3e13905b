"""Output equivalence checks across implementations.

Independent implementations of the benchmark must produce the same
structured AST for the same input. These helpers diff two serialized trees
and report every path where they disagree.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ast_benchmark.errors import BenchmarkInputError


@dataclass
class EquivalenceReport:
    """Result of comparing two serialized ASTs."""
    equivalent: bool
    node_count: int
    mismatches: list[str] = field(default_factory=list)


def compare_outputs(
    actual: Any,
    expected: Any,
    max_mismatches: int = 50,
) -> EquivalenceReport:
    """Compare two serialized trees.

    Args:
        actual: Structured output of this implementation.
        expected: Structured output of the reference implementation.
        max_mismatches: Stop recording differences after this many.

    Returns:
        EquivalenceReport listing mismatches as ``"<path>: <detail>"``.
    """
    mismatches: list[str] = []

    def record(path: str, detail: str) -> None:
        if len(mismatches) < max_mismatches:
            mismatches.append(f"{path or '$'}: {detail}")

    # Depth-first with an explicit stack: chains nest one level per operand
    pending: list[tuple[Any, Any, str]] = [(actual, expected, "")]
    while pending:
        a, e, path = pending.pop()
        children = []
        if isinstance(a, dict) and isinstance(e, dict):
            for key in sorted(a.keys() | e.keys()):
                if key not in e:
                    record(path, f"unexpected key {key!r}")
                elif key not in a:
                    record(path, f"missing key {key!r}")
                else:
                    children.append((a[key], e[key], f"{path}.{key}"))
        elif isinstance(a, list) and isinstance(e, list):
            if len(a) != len(e):
                record(path, f"length {len(a)} != {len(e)}")
            for i, (item_a, item_e) in enumerate(zip(a, e)):
                children.append((item_a, item_e, f"{path}[{i}]"))
        elif type(a) is not type(e) or a != e:
            record(path, f"{a!r} != {e!r}")
        pending.extend(reversed(children))

    return EquivalenceReport(
        equivalent=not mismatches,
        node_count=_count_nodes(actual),
        mismatches=mismatches,
    )


def _count_nodes(data: Any) -> int:
    """Count serialized AST nodes (objects with a ``data`` payload)."""
    count = 0
    pending = [data]
    while pending:
        item = pending.pop()
        if isinstance(item, list):
            pending.extend(item)
        elif isinstance(item, dict):
            if "type" in item and "data" in item:
                count += 1
            pending.extend(item.values())
    return count


def compare_json_files(actual_path: Path, expected_path: Path) -> EquivalenceReport:
    """Load two JSON outputs from disk and compare them.

    Raises:
        BenchmarkInputError: If either file cannot be read or decoded.
    """
    return compare_outputs(_load_json(actual_path), _load_json(expected_path))


def _load_json(path: Path) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise BenchmarkInputError(f"Cannot load {path}: {e}") from e
