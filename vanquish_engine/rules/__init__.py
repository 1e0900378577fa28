"""
Rules Module

This module implements the rules of the game as pure functions of a board:
where each unit may move, what a move does, and when the game is over.

Key Components:
    - legal_destinations / capturing_destinations: per-square move generation
    - MovePattern variants: one per unit kind (closed set in PATTERNS)
    - piece_value / capture_score: static values for evaluation and ordering
    - resolve_move: what a move does (capture, strike, promotion)
    - apply_move: pure state transition returning a new board plus events

Data Flow:
    Board + Move → apply_move() → Transition(new board, [GameEvent, ...])
"""

from vanquish_engine.rules.movement import (
    DIRECTIONS,
    PATTERNS,
    MovePattern,
    legal_destinations,
    capturing_destinations,
    general_capturable,
    any_general_capturable,
    generals_remaining,
    piece_value,
    capture_score,
)
from vanquish_engine.rules.transition import (
    EventKind,
    GameEvent,
    MoveOutcome,
    Transition,
    apply_move,
    resolve_move,
    winner,
)

__all__ = [
    'DIRECTIONS',
    'PATTERNS',
    'MovePattern',
    'legal_destinations',
    'capturing_destinations',
    'general_capturable',
    'any_general_capturable',
    'generals_remaining',
    'piece_value',
    'capture_score',
    'EventKind',
    'GameEvent',
    'MoveOutcome',
    'Transition',
    'apply_move',
    'resolve_move',
    'winner',
]
