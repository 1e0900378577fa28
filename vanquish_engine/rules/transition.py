"""
Move Resolution and State Transitions

resolve_move() decides what a move does to the board (relocation, capture,
Archer strike, promotion) without touching it. Both the in-place Move Applier
used by the search and the pure apply_move() transition used by game sessions
build on it, so the two can never disagree about the rules.

Capture rules:
    - A unit landing on an enemy removes it
    - A Soldier that captures becomes a Sergeant
    - A Sergeant that captures becomes a General
    - An Archer never moves when it captures: the enemy is removed and the
      Archer stays on its square (a "strike")
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from vanquish_engine.board.representation import Board, Coordinate, Move, Space, UnitKind
from vanquish_engine.rules.movement import generals_remaining, legal_destinations

PROMOTIONS = {
    UnitKind.SOLDIER: UnitKind.SERGEANT,
    UnitKind.SERGEANT: UnitKind.GENERAL,
}
DEMOTIONS = {promoted: original for original, promoted in PROMOTIONS.items()}


@dataclass(frozen=True)
class MoveOutcome:
    """
    Effect of a move, computed on the board before the move.

    Attributes:
        mover: Kind of the moving unit
        side: Side flag of the moving unit
        captured: Kind of the unit removed (NONE if nothing is captured)
        strike: True for an Archer capture (the Archer stays on origin)
        result_kind: Kind of the moving unit after the move
    """
    mover: UnitKind
    side: bool
    captured: UnitKind
    strike: bool
    result_kind: UnitKind

    @property
    def is_capture(self) -> bool:
        return self.captured != UnitKind.NONE

    @property
    def promoted(self) -> bool:
        return self.result_kind != self.mover


def resolve_move(board: Board, move: Move) -> MoveOutcome:
    """
    Work out what `move` does, without checking legality.

    Raises:
        ValueError: If the origin is empty or a square is off the board
    """
    origin = board[move.origin]
    if not origin.occupied:
        raise ValueError(f"No unit on origin square {tuple(move.origin)}")
    target = board[move.destination]

    if not target.occupied:
        return MoveOutcome(origin.kind, origin.friendly, UnitKind.NONE, False, origin.kind)
    if origin.kind == UnitKind.ARCHER:
        return MoveOutcome(origin.kind, origin.friendly, target.kind, True, origin.kind)
    result_kind = PROMOTIONS.get(origin.kind, origin.kind)
    return MoveOutcome(origin.kind, origin.friendly, target.kind, False, result_kind)


def execute_outcome(board: Board, move: Move, outcome: MoveOutcome):
    """Apply a resolved move to `board` in place."""
    if outcome.strike:
        board.clear(move.destination)
        return
    board[move.destination] = Space(outcome.result_kind, outcome.side)
    board.clear(move.origin)


# ============================================================================
# Pure transition with events
# ============================================================================

class EventKind(Enum):
    """Things a move can cause, for whoever presents the game."""
    MOVE = "move"
    CAPTURE = "capture"
    STRIKE = "strike"
    PROMOTION = "promotion"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class GameEvent:
    """
    One consequence of a move.

    Attributes:
        kind: What happened
        square: Where it happened
        unit: Unit involved (moved, captured or promoted-to kind)
        friendly: Side flag of that unit; for GAME_OVER, True if the
            friendly side won
    """
    kind: EventKind
    square: Optional[Coordinate] = None
    unit: UnitKind = UnitKind.NONE
    friendly: bool = False


@dataclass
class Transition:
    """Result of apply_move(): the new board and what happened."""
    board: Board
    events: List[GameEvent] = field(default_factory=list)

    @property
    def game_over(self) -> bool:
        return any(event.kind == EventKind.GAME_OVER for event in self.events)


def winner(board: Board) -> Optional[bool]:
    """
    Side that has won on `board`, if any.

    Returns:
        True if the enemy has no General left, False if the friendly side
        has none, None while both sides still have a General
    """
    if generals_remaining(board, False) == 0:
        return True
    if generals_remaining(board, True) == 0:
        return False
    return None


def apply_move(board: Board, move: Move) -> Transition:
    """
    Play a legal move on a copy of `board`.

    The input board is never modified.

    Args:
        board: Position before the move
        move: Move to play; must be legal for the unit on its origin

    Returns:
        Transition with the new board and the emitted events

    Raises:
        ValueError: If the origin is empty or the move is not legal
    """
    move = Move(Coordinate(*move.origin), Coordinate(*move.destination))
    if move.destination not in legal_destinations(board, move.origin):
        raise ValueError(f"Illegal move: {move}")

    outcome = resolve_move(board, move)
    new_board = board.copy()
    execute_outcome(new_board, move, outcome)

    events = []
    if outcome.strike:
        events.append(GameEvent(EventKind.STRIKE, move.destination, outcome.captured, not outcome.side))
    else:
        events.append(GameEvent(EventKind.MOVE, move.destination, outcome.mover, outcome.side))
        if outcome.is_capture:
            events.append(GameEvent(EventKind.CAPTURE, move.destination, outcome.captured, not outcome.side))
        if outcome.promoted:
            events.append(GameEvent(EventKind.PROMOTION, move.destination, outcome.result_kind, outcome.side))

    victor = winner(new_board)
    if victor is not None:
        events.append(GameEvent(EventKind.GAME_OVER, friendly=victor))

    return Transition(new_board, events)
