"""
Engine Testing and Benchmarking

This module provides a tactical test suite for measuring how well the
engine finds decisive moves.

Test Suite:
    Tactical positions, each with a known winning move: a unit that can
    take the enemy's last General. Every position is solved at depth 1, so
    deeper runs measure speed (nodes, time, table hits) rather than accuracy.

Evaluation Metrics:
    - Correct Moves: Number of positions where engine found best move
    - Time per Position: Average thinking time
    - Nodes Searched: Total nodes evaluated
    - Depth Reached: Deepest completed iteration
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from vanquish_engine.board.representation import Board, Coordinate, Move
from vanquish_engine.evaluation.base import Evaluator
from vanquish_engine.search.config import SearchConfig
from vanquish_engine.search.negamax import SearchEngine

logger = logging.getLogger(__name__)


def _move(origin, destination) -> Move:
    return Move(Coordinate(*origin), Coordinate(*destination))


@dataclass
class TacticalPosition:
    """
    A test position with expected best move(s).

    Attributes:
        diagram: Board in diagram notation (see Board.from_diagram)
        best_moves: Acceptable best moves
        side: Side to move (True = uppercase units)
        description: Human-readable description of the position
        id: Position identifier (e.g., "TAC.01")
    """
    diagram: str
    best_moves: List[Move]
    side: bool = True
    description: str = ""
    id: str = ""

    @property
    def board(self) -> Board:
        return Board.from_diagram(self.diagram)


@dataclass
class TacticalResult:
    """
    Result of testing a single position.

    Attributes:
        position: The test position
        found_move: Move the engine found (None if it could not move)
        score: Evaluation score for the move
        correct: Whether the engine found a best move
        time_taken: Time spent searching (seconds)
        nodes_searched: Number of nodes evaluated
        depth: Deepest completed depth
    """
    position: TacticalPosition
    found_move: Optional[Move]
    score: float
    correct: bool
    time_taken: float
    nodes_searched: int = 0
    depth: int = 0


# ============================================================================
# Tactical Suite
# ============================================================================

TACTICAL_POSITIONS = [
    TacticalPosition(
        id="TAC.01",
        diagram="""
            ........
            ........
            ........
            ...S....
            ....g...
            ........
            ........
            G.......
        """,
        best_moves=[_move((3, 3), (4, 4))],
        description="Soldier takes the last General diagonally",
    ),
    TacticalPosition(
        id="TAC.02",
        diagram="""
            ........
            ........
            ..A.g...
            ........
            ........
            ........
            ........
            .......G
        """,
        best_moves=[_move((2, 2), (2, 4))],
        description="Archer strikes the General two squares away",
    ),
    TacticalPosition(
        id="TAC.03",
        diagram="""
            P.......
            ........
            ........
            ...g....
            ........
            ........
            ........
            G.......
        """,
        best_moves=[_move((0, 0), (3, 3))],
        description="Pikeman runs the long diagonal",
    ),
    TacticalPosition(
        id="TAC.04",
        diagram="""
            ........
            ........
            ........
            ........
            .....g..
            .....W..
            ........
            G.......
        """,
        best_moves=[_move((5, 5), (4, 5))],
        description="Sorcerer vanishes the adjacent General",
    ),
    TacticalPosition(
        id="TAC.05",
        diagram="""
            ........
            ........
            ........
            ........
            .g......
            ........
            .E......
            .......G
        """,
        best_moves=[_move((6, 1), (4, 1))],
        description="Sergeant charges two squares and is promoted",
    ),
    TacticalPosition(
        id="TAC.06",
        diagram="""
            .......g
            ........
            ........
            ........
            ........
            ....s...
            .....G..
            ........
        """,
        best_moves=[_move((5, 4), (6, 5))],
        side=False,
        description="Lowercase side to move: Soldier takes the last General",
    ),
]


def evaluate_position(
    position: TacticalPosition,
    engine: SearchEngine,
    verbose: bool = False,
) -> TacticalResult:
    """
    Evaluate a single test position.

    Args:
        position: Test position to evaluate
        engine: Search engine to test
        verbose: If True, print detailed output

    Returns:
        TacticalResult with engine's move and whether it was correct
    """
    if verbose:
        print(f"\nTesting {position.id}: {position.description}")
        print(position.board)
        print(f"Expected moves: {[str(move) for move in position.best_moves]}")

    start_time = time.time()

    try:
        result = engine.search(position.board, position.side)
    except ValueError as e:
        logger.error(f"Error evaluating position {position.id}: {e}")
        return TacticalResult(
            position=position,
            found_move=None,
            score=0.0,
            correct=False,
            time_taken=time.time() - start_time,
        )

    time_taken = time.time() - start_time
    correct = result.move in position.best_moves

    if verbose:
        print(f"Engine found: {result.move} (score: {result.score})")
        print(f"Nodes searched: {result.nodes_searched:,}")
        print(f"Time: {time_taken:.2f}s")
        print(f"Result: {'✓ CORRECT' if correct else '✗ WRONG'}")

    return TacticalResult(
        position=position,
        found_move=result.move,
        score=result.score,
        correct=correct,
        time_taken=time_taken,
        nodes_searched=result.nodes_searched,
        depth=result.depth_reached,
    )


def run_tactics(
    depth: int = 3,
    evaluator: Optional[Evaluator] = None,
    positions: Sequence[TacticalPosition] = TACTICAL_POSITIONS,
    time_limit_ms: int = 60_000,
    verbose: bool = True,
) -> Dict[str, Any]:
    """
    Run the tactical test suite.

    Args:
        depth: Maximum search depth
        evaluator: Position evaluator (engine default if None)
        positions: Positions to test
        time_limit_ms: Time budget per position
        verbose: If True, print detailed results

    Returns:
        Dictionary with test results:
            - score: Number of correct positions
            - total: Total number of positions
            - percentage: Success percentage
            - results: List of TacticalResult objects
            - avg_time: Average time per position
            - total_time: Time for the whole suite
            - tt_hits / tt_misses: Table statistics summed over the suite
    """
    if verbose:
        print("=" * 70)
        print("TACTICAL TEST SUITE")
        print("=" * 70)

    config = SearchConfig(max_depth=depth, time_limit_ms=time_limit_ms)

    results = []
    correct_count = 0
    total_time = 0.0
    tt_hits = 0
    tt_misses = 0

    for position in positions:
        # A fresh engine per position, so results do not depend on suite order
        engine = SearchEngine(config, evaluator)
        result = evaluate_position(position, engine, verbose=verbose)
        results.append(result)

        if result.correct:
            correct_count += 1

        total_time += result.time_taken
        tt_hits += engine.transposition_table.hits
        tt_misses += engine.transposition_table.misses

    avg_time = total_time / len(positions) if positions else 0
    percentage = (correct_count / len(positions) * 100) if positions else 0

    if verbose:
        print("\n" + "=" * 70)
        print("SUMMARY")
        print("=" * 70)
        print(f"Score: {correct_count}/{len(positions)} ({percentage:.1f}%)")
        print(f"Average time: {avg_time:.2f}s")
        print(f"Total time: {total_time:.2f}s")

    return {
        'score': correct_count,
        'total': len(positions),
        'percentage': percentage,
        'results': results,
        'avg_time': avg_time,
        'total_time': total_time,
        'tt_hits': tt_hits,
        'tt_misses': tt_misses,
    }
