#!/usr/bin/env python
"""
AST Benchmark Suite

Runs the tokenizer, parser and serializer over toy-language source files.

Usage:
    python benchmark.py example/a.tst example/b.tst example/c.tst
    python benchmark.py example/*.tst --iterations 1000 --verbose
"""

import sys

sys.path.insert(0, 'src')

from ast_benchmark.cli import main


if __name__ == "__main__":
    sys.exit(main())
