"""
Game State / Move Applier

GameState wraps one board and its rolling Zobrist hash with make/undo
semantics. Moves are applied in place: the search walks the tree by making a
move, recursing and undoing it, instead of copying the board at every node.

Every make_move() pushes exactly one UndoEntry and every undo_move() pops one,
so after make_move(m); undo_move() the board and the hash are bit-for-bit
identical to what they were before.
"""

from dataclasses import dataclass
from typing import List, Optional

from vanquish_engine.board.representation import Board, Move, Space, UnitKind
from vanquish_engine.rules.movement import PATTERNS, any_general_capturable, generals_remaining
from vanquish_engine.rules.transition import DEMOTIONS, execute_outcome, resolve_move
from vanquish_engine.search.zobrist import ZobristHasher

NULL_MOVE_MIN_UNITS = 10


@dataclass
class UndoEntry:
    """
    Everything needed to take back one move.

    Attributes:
        move: The move made (None for a null move)
        captured: Kind that stood on the destination before the move
        zobrist_hash: Hash before the move
        promotion: True if the mover was promoted
        strike: True if the move was an Archer strike
    """
    move: Optional[Move]
    captured: UnitKind
    zobrist_hash: int
    promotion: bool = False
    strike: bool = False


class GameState:
    """
    A private, mutable copy of a board plus its rolling hash.

    Attributes:
        board: Working board (a copy, never the caller's board)
        hasher: Zobrist key table used for the rolling hash
        side_to_move: True while the friendly side is to move
        zobrist_hash: Hash of the current position
    """

    def __init__(self, board: Board, hasher: ZobristHasher, side_to_move: bool = True):
        self.board = board.copy()
        self.hasher = hasher
        self.side_to_move = side_to_move
        self.zobrist_hash = hasher.hash_board(self.board, side_to_move)
        self.undo_stack: List[UndoEntry] = []

    # ------------------------------------------------------------------
    # Make / undo
    # ------------------------------------------------------------------

    def make_move(self, move: Move):
        """
        Apply a move in place.

        Captures, Archer strikes and promotions follow resolve_move(). The
        hash is updated from the pre-move board.

        Raises:
            ValueError: If the origin square is empty
        """
        outcome = resolve_move(self.board, move)
        new_hash = self.hasher.update(self.board, self.zobrist_hash, move, outcome)

        self.undo_stack.append(
            UndoEntry(move, outcome.captured, self.zobrist_hash, outcome.promoted, outcome.strike)
        )
        execute_outcome(self.board, move, outcome)
        self.zobrist_hash = new_hash
        self.side_to_move = not self.side_to_move

    def make_null_move(self):
        """Pass the turn. Only the side to move (and its hash key) changes."""
        self.undo_stack.append(UndoEntry(None, UnitKind.NONE, self.zobrist_hash))
        self.zobrist_hash = self.hasher.toggle_side(self.zobrist_hash)
        self.side_to_move = not self.side_to_move

    def undo_move(self):
        """
        Take back the most recent move (or null move).

        An Archer strike puts the struck unit back on its square, owned by
        the side opposing the Archer.

        Raises:
            RuntimeError: If there is no move to undo
        """
        if not self.undo_stack:
            raise RuntimeError("No move to undo")

        entry = self.undo_stack.pop()
        self.zobrist_hash = entry.zobrist_hash
        self.side_to_move = not self.side_to_move
        if entry.move is None:
            return

        origin, dest = entry.move
        if entry.strike:
            archer = self.board[origin]
            self.board[dest] = Space(entry.captured, not archer.friendly)
            return

        mover = self.board[dest]
        kind = DEMOTIONS[mover.kind] if entry.promotion else mover.kind
        self.board[origin] = Space(kind, mover.friendly)
        if entry.captured != UnitKind.NONE:
            self.board[dest] = Space(entry.captured, not mover.friendly)
        else:
            self.board.clear(dest)

    # ------------------------------------------------------------------
    # Move generation
    # ------------------------------------------------------------------

    def possible_moves(self, side: bool) -> List[Move]:
        """Every legal move for `side`, unit by unit."""
        moves = []
        for origin in self.board.units(side):
            pattern = PATTERNS[self.board.kind_at(origin)]
            moves.extend(Move(origin, dest) for dest in pattern.destinations(self.board, origin))
        return moves

    def capture_moves(self, side: bool) -> List[Move]:
        """Legal moves for `side` that remove an enemy unit."""
        moves = []
        for origin in self.board.units(side):
            pattern = PATTERNS[self.board.kind_at(origin)]
            moves.extend(Move(origin, dest) for dest in pattern.captures(self.board, origin))
        return moves

    # ------------------------------------------------------------------
    # Position predicates
    # ------------------------------------------------------------------

    def is_game_over(self) -> bool:
        """True once either side has no General left."""
        return generals_remaining(self.board, True) == 0 or generals_remaining(self.board, False) == 0

    def last_move_was_capture(self) -> bool:
        return bool(self.undo_stack) and self.undo_stack[-1].captured != UnitKind.NONE

    def is_quiet(self) -> bool:
        """
        No capture just happened and no General can be taken.

        Quiet positions can be evaluated statically; the others are
        extended by quiescence search.
        """
        return not self.last_move_was_capture() and not any_general_capturable(self.board)

    def can_do_null_move(self) -> bool:
        """Null-move reasoning is only trusted with enough units on the board."""
        return self.board.occupied_count() >= NULL_MOVE_MIN_UNITS

    def verify_hash(self) -> bool:
        """Compare the rolling hash with a full recomputation."""
        return self.hasher.verify_hash(self.board, self.side_to_move, self.zobrist_hash)

    @property
    def ply(self) -> int:
        """Number of moves currently applied."""
        return len(self.undo_stack)

    def __repr__(self) -> str:
        return (
            f"GameState(units={self.board.occupied_count()}, "
            f"side_to_move={'friendly' if self.side_to_move else 'enemy'}, ply={self.ply})"
        )
