"""
Utilities Module

This module provides utility functions for testing and benchmarking the
engine.

Key Components:
    - Tactical test suite: positions with a known decisive move
    - setup_logger: file logging for long runs

Testing Methodology:
    Each position has a known best move and the engine's task is to find
    it within a given depth. Every position is solvable at depth 1.
"""

from vanquish_engine.utils.log import setup_logger
from vanquish_engine.utils.testing import (
    TACTICAL_POSITIONS,
    TacticalPosition,
    TacticalResult,
    evaluate_position,
    run_tactics,
)

__all__ = [
    'setup_logger',
    'TACTICAL_POSITIONS',
    'TacticalPosition',
    'TacticalResult',
    'evaluate_position',
    'run_tactics',
]
