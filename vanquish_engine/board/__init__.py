"""
Board Module

This module provides the board model the engine searches on and the starting
army layouts.

Key Components:
    - Board: 8x8 grid of Spaces (unit kind + side flag), backed by numpy arrays
    - Coordinate / Move / Space / UnitKind: the value types of the game
    - Army layouts: classic army, random modern army, initial board set-up

Data Flow:
    authoritative board → Board.from_owners(..., perspective) → search snapshot
"""

from vanquish_engine.board.representation import (
    Board,
    Coordinate,
    Move,
    Space,
    UnitKind,
    EMPTY,
    all_coordinates,
)
from vanquish_engine.board.armies import CLASSIC_ARMY, modern_army, initial_board

__all__ = [
    'Board',
    'Coordinate',
    'Move',
    'Space',
    'UnitKind',
    'EMPTY',
    'all_coordinates',
    'CLASSIC_ARMY',
    'modern_army',
    'initial_board',
]
