"""
Material and Position Evaluation

This module implements the engine's evaluation function:
    1. Material counting (static unit values)
    2. Position weighting (units in the centre are worth more)

Evaluation Components:
    - Material: Soldier=1, Sergeant/Sorcerer/Archer/Pikeman/Militia=2, General=3
    - Position: multiplier 8 on the outer ring, 9 on the next ring,
      11 on the ring after and 14 on the central 2x2 core

Score = Σ friendly (value × multiplier) − Σ enemy (value × multiplier)
"""

import numpy as np

from vanquish_engine.board.representation import Board
from vanquish_engine.evaluation.base import Evaluator
from vanquish_engine.rules.movement import PIECE_VALUE_ARRAY, POSITION_TABLE


class MaterialEvaluator(Evaluator):
    """
    Evaluation using unit values weighted by a position table.

    Attributes:
        position_table: 8x8 multiplier applied to each unit's static value
    """

    def __init__(self, position_table: np.ndarray = POSITION_TABLE):
        """Initialize the evaluator with a position table."""
        self.position_table = np.asarray(position_table)

    def unit_values(self, board: Board) -> np.ndarray:
        """
        Positional value of every square's unit (0 on empty squares).

        Returns:
            8x8 int array
        """
        return PIECE_VALUE_ARRAY[board.kinds] * self.position_table

    def evaluate(self, board: Board) -> float:
        """
        Evaluate position using material + position table.

        Args:
            board: Board to evaluate

        Returns:
            float: Evaluation (friendly side's perspective)
        """
        # Check for decided positions first
        terminal_score = self.evaluate_terminal(board)
        if terminal_score is not None:
            return terminal_score

        values = self.unit_values(board)
        friendly = int(values[board.friendly].sum())
        enemy = int(values.sum()) - friendly
        return float(friendly - enemy)
