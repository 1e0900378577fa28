"""
Negamax Search with Alpha-Beta Pruning

This module implements the engine's search. Negamax explores the game tree
to find the best move for one side, and alpha-beta pruning cuts the branches
that cannot change the result.

Key Concepts:
    - Negamax: Minimax where each level negates the child's score, so one
      code path serves both sides
    - Alpha-Beta: Skip branches that are proven no better than one already found
    - Iterative Deepening: Search depth 1, 2, 3... reusing the transposition
      table, until the depth limit or the time budget is reached
    - Quiescence: At the horizon, keep searching captures only, so that a
      position in the middle of an exchange is never judged statically
    - Move Ordering: TT move, captures, killer moves, history

Algorithm (one node):
    1. Probe the transposition table (tighten alpha/beta or return)
    2. Decided game → static evaluation
    3. depth == 0 → static evaluation if quiet, quiescence otherwise
    4. For each ordered move: make, recurse negated, undo, cut off when
       alpha >= beta (a non-capture that cuts off becomes a killer and
       earns history)
    5. Store the result with its bound type

Time management:
    The clock is only looked at between completed depths. A depth that has
    started always runs to completion, and the returned move is always the
    deepest completed depth's choice.

References:
    - Negamax: https://www.chessprogramming.org/Negamax
    - Alpha-Beta: https://www.chessprogramming.org/Alpha-Beta
    - Quiescence Search: https://www.chessprogramming.org/Quiescence_Search
    - Killer Heuristic: https://www.chessprogramming.org/Killer_Heuristic
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from vanquish_engine.board.representation import Board, Move
from vanquish_engine.evaluation.base import INFINITY, Evaluator
from vanquish_engine.evaluation.material import MaterialEvaluator
from vanquish_engine.search.config import SearchConfig
from vanquish_engine.search.game_state import GameState
from vanquish_engine.search.ordering import MoveOrdering
from vanquish_engine.search.transposition import NodeType, TranspositionTable
from vanquish_engine.search.zobrist import ZobristHasher

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """Result of one top-level search."""
    move: Move
    score: float
    depth_reached: int
    depth_moves: List[Move] = field(default_factory=list)
    nodes_searched: int = 0
    time_ms: int = 0
    tt_stats: Dict[str, float] = field(default_factory=dict)


class SearchEngine:
    """
    Iterative-deepening negamax engine.

    Each engine owns its own Zobrist key table and transposition table, so
    separate engines never share mutable state. A search never touches the
    board it is given: it works on a private GameState copy.

    Attributes:
        config: Search limits
        evaluator: Static evaluation function
        hasher: Zobrist key table
        transposition_table: Working set of the current search
        move_ordering: Killer/history tables of the current search
    """

    def __init__(
        self,
        config: Optional[SearchConfig] = None,
        evaluator: Optional[Evaluator] = None,
        hasher: Optional[ZobristHasher] = None,
    ):
        """
        Initialize the engine.

        Args:
            config: Search limits (defaults to SearchConfig())
            evaluator: Evaluation function (defaults to MaterialEvaluator())
            hasher: Zobrist table (defaults to one seeded with config.zobrist_seed)
        """
        self.config = config if config is not None else SearchConfig()
        self.evaluator = evaluator if evaluator is not None else MaterialEvaluator()
        self.hasher = hasher if hasher is not None else ZobristHasher(self.config.zobrist_seed)
        self.transposition_table = TranspositionTable(max_size=self.config.max_table_size)
        self.move_ordering = MoveOrdering(max_ply=self.config.max_depth + 1)

        # Search statistics
        self.nodes_searched = 0
        self.start_time = 0.0
        self._iteration_depth = 0

    # ------------------------------------------------------------------
    # Driver
    # ------------------------------------------------------------------

    def find_best_move(self, board: Board, side: bool = True) -> Move:
        """Best move for `side` on `board`."""
        return self.search(board, side).move

    def search(self, board: Board, side: bool = True) -> SearchResult:
        """
        Iterative deepening from depth 1 up to config.max_depth.

        Depth 1 always runs. Each further depth runs only while the time
        budget is not exhausted.

        Args:
            board: Position to search (not modified)
            side: Side to move (True = friendly)

        Returns:
            SearchResult of the deepest completed depth

        Raises:
            ValueError: If `side` has no legal move
        """
        state = GameState(board, self.hasher, side_to_move=side)
        if not state.possible_moves(side):
            raise ValueError("No legal moves available")

        self.move_ordering = MoveOrdering(max_ply=self.config.max_depth + 1)
        self.nodes_searched = 0
        self.start_time = time.perf_counter()

        depth_moves = []
        depth = 1
        while True:
            score, move = self._search_root(state, depth, side)
            best_move, best_score, depth_reached = move, score, depth
            depth_moves.append(move)
            logger.debug(
                f"depth {depth}: move {move} score {score} "
                f"nodes {self.nodes_searched} ({self._elapsed_ms()} ms)"
            )

            depth += 1
            if depth > self.config.max_depth or self._out_of_time():
                break

        swept = self.transposition_table.sweep()
        elapsed_ms = self._elapsed_ms()
        logger.info(
            f"Search done: {best_move} score {best_score} depth {depth_reached} "
            f"nodes {self.nodes_searched} time {elapsed_ms} ms (swept {swept} TT entries)"
        )

        return SearchResult(
            move=best_move,
            score=best_score,
            depth_reached=depth_reached,
            depth_moves=depth_moves,
            nodes_searched=self.nodes_searched,
            time_ms=elapsed_ms,
            tt_stats=self.transposition_table.get_stats(),
        )

    def _elapsed_ms(self) -> int:
        return int((time.perf_counter() - self.start_time) * 1000)

    def _out_of_time(self) -> bool:
        """Has the time budget been used up?"""
        return self._elapsed_ms() >= self.config.time_limit_ms

    # ------------------------------------------------------------------
    # Tree search
    # ------------------------------------------------------------------

    def _search_root(self, state: GameState, depth: int, side: bool) -> Tuple[float, Move]:
        """
        Root node: every move is searched, the best one is returned.

        The table is only used at the root to order moves, never to cut off.
        """
        self._iteration_depth = depth
        self.nodes_searched += 1

        tt_move = self.transposition_table.best_move(state.zobrist_hash)
        moves = self.move_ordering.order_moves(
            state.board, state.possible_moves(side), tt_move, ply=0
        )

        alpha, beta = -INFINITY, INFINITY
        best_score = -INFINITY
        best_move = moves[0]
        for move in moves:
            state.make_move(move)
            score = -self._negamax(state, depth - 1, -beta, -alpha, not side)
            state.undo_move()

            if score > best_score:
                best_score = score
                best_move = move
            alpha = max(alpha, score)

        self._store(state, depth, best_score, NodeType.EXACT, best_move, side)
        return best_score, best_move

    def _negamax(self, state: GameState, depth: int, alpha: float, beta: float, side: bool) -> float:
        """
        Negamax alpha-beta search.

        Args:
            state: Position (modified in place, restored before returning)
            depth: Remaining depth
            alpha: Alpha bound
            beta: Beta bound
            side: Side to move

        Returns:
            Score from `side`'s perspective
        """
        self.nodes_searched += 1
        original_alpha = alpha

        # Probe transposition table
        entry = self.transposition_table.lookup(state.zobrist_hash, depth)
        if entry is not None:
            value = entry.value if side else -entry.value
            if entry.node_type == NodeType.EXACT:
                return value
            if entry.node_type == NodeType.LOWER_BOUND:
                alpha = max(alpha, value)
            else:
                beta = min(beta, value)
            if alpha >= beta:
                return value

        if state.is_game_over():
            return self.evaluator.evaluate_for(state.board, side)

        if depth == 0:
            if state.is_quiet():
                return self.evaluator.evaluate_for(state.board, side)
            return self._quiescence(state, self.config.quiescence_depth, alpha, beta, side)

        moves = state.possible_moves(side)
        if not moves:
            return self.evaluator.evaluate_for(state.board, side)

        ply = self._iteration_depth - depth
        tt_move = self.transposition_table.best_move(state.zobrist_hash)
        moves = self.move_ordering.order_moves(state.board, moves, tt_move, ply)

        best_score = -INFINITY
        best_move = moves[0]
        for move in moves:
            is_capture = state.board[move.destination].occupied
            state.make_move(move)
            score = -self._negamax(state, depth - 1, -beta, -alpha, not side)
            state.undo_move()

            if score > best_score:
                best_score = score
                best_move = move
            alpha = max(alpha, score)

            if alpha >= beta:
                if not is_capture:
                    self.move_ordering.update_killers(move, ply)
                    self.move_ordering.update_history(move, depth)
                break

        if best_score <= original_alpha:
            node_type = NodeType.UPPER_BOUND
        elif best_score >= beta:
            node_type = NodeType.LOWER_BOUND
        else:
            node_type = NodeType.EXACT
        self._store(state, depth, best_score, node_type, best_move, side)

        return best_score

    def _quiescence(self, state: GameState, depth: int, alpha: float, beta: float, side: bool) -> float:
        """
        Capture-only search past the horizon (fail-soft).

        Args:
            state: Position
            depth: Remaining capture plies
            alpha: Alpha bound
            beta: Beta bound
            side: Side to move

        Returns:
            Score from `side`'s perspective
        """
        self.nodes_searched += 1

        stand_pat = self.evaluator.evaluate_for(state.board, side)
        if depth == 0 or state.is_quiet() or state.is_game_over():
            return stand_pat
        if stand_pat >= beta:
            return stand_pat
        alpha = max(alpha, stand_pat)

        best_score = stand_pat
        moves = self.move_ordering.order_moves(state.board, state.capture_moves(side))
        for move in moves:
            state.make_move(move)
            score = -self._quiescence(state, depth - 1, -beta, -alpha, not side)
            state.undo_move()

            best_score = max(best_score, score)
            alpha = max(alpha, score)
            if alpha >= beta:
                break

        return best_score

    def _store(
        self,
        state: GameState,
        depth: int,
        value: float,
        node_type: NodeType,
        best_move: Move,
        side: bool,
    ):
        # Values are kept from the friendly side's perspective
        self.transposition_table.store(
            state.zobrist_hash, depth, value if side else -value, node_type, best_move
        )

    def __repr__(self) -> str:
        return (
            f"SearchEngine(max_depth={self.config.max_depth}, "
            f"evaluator={self.evaluator!r}, tt={self.transposition_table!r})"
        )


def find_best_move(
    board: Board,
    side: bool = True,
    config: Optional[SearchConfig] = None,
    evaluator: Optional[Evaluator] = None,
) -> Move:
    """
    Find the best move with a one-off engine.

    Args:
        board: Current position
        side: Side to move (True = friendly)
        config: Search limits
        evaluator: Position evaluation function

    Returns:
        The chosen move

    Raises:
        ValueError: If no legal moves available
    """
    return SearchEngine(config, evaluator).find_best_move(board, side)
