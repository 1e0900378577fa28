#!/usr/bin/env python3
"""
Tactical Benchmark Runner

Runs the tactical suite at several search depths. Every position is solved
at depth 1, so the interesting columns are the cost ones: nodes, speed and
how often the transposition table answered.

Usage:
    python tools/run_benchmark.py [--depths 1,2,3] [--time-limit 60000]
                                  [--positions TAC.01,TAC.04] [--verbose]
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Dict, List, Optional

sys.path.insert(0, str(Path(__file__).parent.parent))

from vanquish_engine.utils.testing import TACTICAL_POSITIONS, run_tactics

logger = logging.getLogger(__name__)


def format_time(seconds: float) -> str:
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    if seconds < 60:
        return f"{seconds:.1f}s"
    return f"{int(seconds // 60)}m {seconds % 60:.0f}s"


def summarize_depth(depth: int, suite: Dict, elapsed: float) -> Dict:
    """Collapse one run_tactics() result into a row of the summary table."""
    nodes = sum(result.nodes_searched for result in suite['results'])
    lookups = suite['tt_hits'] + suite['tt_misses']
    return {
        'depth': depth,
        'correct': suite['score'],
        'total': suite['total'],
        'percentage': suite['percentage'],
        'deepest': max((result.depth for result in suite['results']), default=0),
        'nodes': nodes,
        'nodes_per_sec': nodes / elapsed if elapsed > 0 else 0,
        'tt_hit_rate': 100 * suite['tt_hits'] / lookups if lookups > 0 else 0,
        'elapsed': elapsed,
        'failed': [result for result in suite['results'] if not result.correct],
    }


def print_summary(rows: List[Dict]):
    print("\n" + "=" * 80)
    print("SUMMARY")
    print("=" * 80)
    print(f"{'Depth':<7}{'Reached':<9}{'Correct':<11}{'Nodes':>10}{'Nodes/s':>12}{'TT hit %':>10}{'Time':>10}")
    print("-" * 80)
    for row in rows:
        correct = f"{row['correct']}/{row['total']}"
        print(
            f"{row['depth']:<7}{row['deepest']:<9}{correct:<11}{row['nodes']:>10,}"
            f"{row['nodes_per_sec']:>12,.0f}{row['tt_hit_rate']:>9.1f}%{format_time(row['elapsed']):>10}"
        )
    print("=" * 80)

    # Positions no depth solved
    if rows:
        never_solved = set.intersection(
            *({result.position.id for result in row['failed']} for row in rows)
        )
        if never_solved:
            print(f"Never solved: {', '.join(sorted(never_solved))}")


def run_benchmark(
    depths: List[int],
    time_limit_ms: int = 60_000,
    position_ids: Optional[List[str]] = None,
    verbose: bool = False,
) -> List[Dict]:
    """
    Run the tactical suite once per depth.

    Args:
        depths: Maximum search depths to test
        time_limit_ms: Time budget per position
        position_ids: Only run these positions (all if None)
        verbose: If True, print every position's search

    Returns:
        One summary row per depth
    """
    positions = TACTICAL_POSITIONS
    if position_ids:
        positions = [position for position in TACTICAL_POSITIONS if position.id in position_ids]
        if not positions:
            raise ValueError(f"No tactical positions match {position_ids}")

    print("=" * 80)
    print(f"TACTICAL BENCHMARK: {len(positions)} positions, depths {depths}, {time_limit_ms} ms budget")
    print("=" * 80)

    rows = []
    for depth in depths:
        start = time.time()
        suite = run_tactics(
            depth=depth, positions=positions, time_limit_ms=time_limit_ms, verbose=verbose
        )
        row = summarize_depth(depth, suite, time.time() - start)
        rows.append(row)

        print(
            f"depth {depth}: {row['correct']}/{row['total']} correct, "
            f"{row['nodes']:,} nodes in {format_time(row['elapsed'])}"
        )
        for result in row['failed']:
            expected = ", ".join(str(move) for move in result.position.best_moves)
            print(f"  {result.position.id}: expected {expected}, got {result.found_move}")

    print_summary(rows)
    return rows


def main():
    parser = argparse.ArgumentParser(description="Run the tactical benchmark at several depths")
    parser.add_argument("--depths", type=str, default="1,2,3",
                        help="Comma-separated search depths (default: 1,2,3)")
    parser.add_argument("--time-limit", type=int, default=60_000,
                        help="Time budget per position in ms (default: 60000)")
    parser.add_argument("--positions", type=str, default=None,
                        help="Comma-separated position ids (default: all)")
    parser.add_argument("--verbose", action="store_true",
                        help="Print every position's search")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        depths = [int(part) for part in args.depths.split(",")]
    except ValueError:
        print(f"Error: --depths must be comma-separated integers, got {args.depths!r}")
        sys.exit(1)
    position_ids = args.positions.split(",") if args.positions else None

    try:
        run_benchmark(depths, args.time_limit, position_ids, verbose=args.verbose)
    except KeyboardInterrupt:
        print("\nBenchmark interrupted")
        sys.exit(1)
    except ValueError as e:
        logger.error(f"Benchmark failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
