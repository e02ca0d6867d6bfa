#!/usr/bin/env python3
"""Board Generation Benchmark Script.

Generates a number of boards per size, checks each one against the board
rules and reports timing statistics.

Usage:
    python benchmark_generation.py [--boards N] [--size small|standard|all] [--seed S] [--output FILE]
"""

import argparse
import json
import logging
import random
import statistics
import sys
import time
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from tiwanaku.core.generator import generate_game_board
from tiwanaku.core.validator import get_validator
from tiwanaku.models.cell import BoardSize
from tiwanaku.models.generation import GameConfig
from tiwanaku.utils.helpers import configure_logging, extract_board_statistics, format_board_for_display

logger = logging.getLogger(__name__)


@dataclass
class SizeBenchmark:
    """Benchmark results for one board size."""
    size: str
    boards: int
    invalid_boards: int
    total_time_ms: float
    avg_time_ms: float
    median_time_ms: float
    max_time_ms: float
    avg_groups: float
    avg_hints: float


@dataclass
class BenchmarkSuite:
    """Complete benchmark suite results."""
    timestamp: str
    seed: Optional[int]
    results: List[Dict] = field(default_factory=list)

    def to_json(self) -> str:
        return json.dumps(asdict(self), indent=2)


def benchmark_size(size: BoardSize, boards: int, rng: random.Random, show: bool = False) -> SizeBenchmark:
    """Generate and validate ``boards`` boards of one size."""
    validator = get_validator()
    config = GameConfig.for_size(size)
    times: List[float] = []
    groups: List[int] = []
    hints: List[int] = []
    invalid = 0

    for i in range(boards):
        start = time.perf_counter()
        result = generate_game_board(size, rng=rng)
        times.append((time.perf_counter() - start) * 1000)

        report = validator.validate(result.board, config)
        if not report.valid:
            invalid += 1
            logger.warning("Board %d (%s) is invalid: %s", i, size.value, report.violations)

        board_stats = extract_board_statistics(result.board)
        groups.append(board_stats["group_count"])
        hints.append(len(result.hints))

        if show:
            print(format_board_for_display(result.board, reveal_all=True))

    return SizeBenchmark(
        size=size.value,
        boards=boards,
        invalid_boards=invalid,
        total_time_ms=sum(times),
        avg_time_ms=statistics.mean(times),
        median_time_ms=statistics.median(times),
        max_time_ms=max(times),
        avg_groups=statistics.mean(groups),
        avg_hints=statistics.mean(hints),
    )


def print_summary(suite: BenchmarkSuite) -> None:
    print("\n" + "=" * 60)
    print("BOARD GENERATION BENCHMARK")
    print("=" * 60)
    for r in suite.results:
        print(
            f"  {r['size'].upper():9} - Avg: {r['avg_time_ms']:7.1f}ms, "
            f"Median: {r['median_time_ms']:7.1f}ms, Max: {r['max_time_ms']:7.1f}ms"
        )
        print(
            f"  {'':9}   Groups: {r['avg_groups']:.1f}, Hints: {r['avg_hints']:.1f}, "
            f"Invalid: {r['invalid_boards']}/{r['boards']}"
        )


def main():
    parser = argparse.ArgumentParser(description="Benchmark board generation")
    parser.add_argument("--boards", "-n", type=int, default=20,
                        help="Boards per size (default: 20)")
    parser.add_argument("--size", "-s", type=str, choices=["small", "standard", "all"],
                        default="all", help="Which size(s) to benchmark")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for reproducible runs")
    parser.add_argument("--output", "-o", type=str, default=None,
                        help="Output file for results (JSON)")
    parser.add_argument("--show", action="store_true",
                        help="Print every generated board")
    parser.add_argument("--log-level", type=str, default="WARNING",
                        help="Log level (default: WARNING)")

    args = parser.parse_args()
    configure_logging(args.log_level)

    sizes = list(BoardSize) if args.size == "all" else [BoardSize(args.size)]
    rng = random.Random(args.seed)

    suite = BenchmarkSuite(timestamp=datetime.now().isoformat(), seed=args.seed)
    for size in sizes:
        suite.results.append(asdict(benchmark_size(size, args.boards, rng, show=args.show)))

    print_summary(suite)

    if args.output:
        output_path = Path(args.output)
        output_path.write_text(suite.to_json(), encoding="utf-8")
        print(f"\nResults saved to: {output_path}")


if __name__ == "__main__":
    main()
