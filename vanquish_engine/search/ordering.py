"""
Move ordering heuristics for alpha-beta search.

Good move ordering is critical for alpha-beta pruning efficiency. The goal is to
search the best moves first to maximize cutoffs.

Ordering priority (high to low):
1. TT move (best move stored for this position)
2. Favourable captures (capture score > 0)
3. Even captures (capture score == 0)
4. Unfavourable captures (capture score < 0)
5. Primary killer move for the current ply
6. Secondary killer move for the current ply
7. History heuristic (non-captures that caused cutoffs, weighted by depth²)

Killer moves and history only ever record non-capturing moves.
"""

from typing import List, Optional, Sequence

import numpy as np

from vanquish_engine.board.representation import BOARD_SIZE, Board, Move
from vanquish_engine.rules.movement import capture_score

TT_MOVE_SCORE = 2_000_000
GOOD_CAPTURE_BASE = 1_100_000
EVEN_CAPTURE_SCORE = 1_000_000
BAD_CAPTURE_BASE = 950_000
PRIMARY_KILLER_SCORE = 900_000
SECONDARY_KILLER_SCORE = 800_000


class MoveOrdering:
    """
    Killer and history tables plus the move scoring that uses them.

    A fresh instance is created for every top-level search.
    """

    def __init__(self, max_ply: int = 64):
        """
        Args:
            max_ply: Number of plies with killer slots
        """
        self.max_ply = max_ply

        # Killer moves: 2 killers per ply (non-capture moves that caused a cutoff)
        self.killer_moves: List[List[Optional[Move]]] = [[None, None] for _ in range(max_ply)]

        # History heuristic: [from_x, from_y, to_x, to_y] -> score
        self.history = np.zeros((BOARD_SIZE,) * 4, dtype=np.int64)

    def reset(self):
        """Reset killer moves and history."""
        self.killer_moves = [[None, None] for _ in range(self.max_ply)]
        self.history.fill(0)

    def update_killers(self, move: Move, ply: int):
        """
        Record a non-capturing move that caused a cutoff at `ply`.

        The previous primary killer becomes the secondary one.
        """
        if ply < 0 or ply >= self.max_ply:
            return

        killers = self.killer_moves[ply]
        if killers[0] != move:
            killers[1] = killers[0]
            killers[0] = move

    def update_history(self, move: Move, depth: int):
        """Increment by depth² (deeper cutoffs are more valuable)."""
        origin, dest = move
        self.history[origin.x, origin.y, dest.x, dest.y] += depth * depth

    def history_score(self, move: Move) -> int:
        origin, dest = move
        return int(self.history[origin.x, origin.y, dest.x, dest.y])

    def score_move(
        self,
        board: Board,
        move: Move,
        tt_move: Optional[Move] = None,
        ply: Optional[int] = None,
    ) -> float:
        """
        Ordering score of one move (higher = searched earlier).

        Args:
            board: Position before the move
            move: Move to score
            tt_move: Best move from the transposition table
            ply: Ply for killer lookup (None disables killers)
        """
        if tt_move is not None and move == tt_move:
            return TT_MOVE_SCORE

        attacker = board[move.origin]
        defender = board[move.destination]
        if defender.is_enemy_to(attacker.friendly):
            score = capture_score(attacker.kind, defender.kind, move.origin, move.destination)
            if score > 0:
                return score + GOOD_CAPTURE_BASE
            if score == 0:
                return EVEN_CAPTURE_SCORE
            return score + BAD_CAPTURE_BASE

        if ply is not None and 0 <= ply < self.max_ply:
            killers = self.killer_moves[ply]
            if move == killers[0]:
                return PRIMARY_KILLER_SCORE
            if move == killers[1]:
                return SECONDARY_KILLER_SCORE

        return self.history_score(move)

    def order_moves(
        self,
        board: Board,
        moves: Sequence[Move],
        tt_move: Optional[Move] = None,
        ply: Optional[int] = None,
    ) -> List[Move]:
        """
        Sort moves best-first.

        The sort is stable, so moves with equal scores keep their generation
        order and the result is deterministic.

        Args:
            board: Position before the moves
            moves: Legal moves to order
            tt_move: Best move from the transposition table (highest priority)
            ply: Current ply in search tree (None disables killers)

        Returns:
            New list, highest score first
        """
        return sorted(
            moves,
            key=lambda move: self.score_move(board, move, tt_move, ply),
            reverse=True,
        )
