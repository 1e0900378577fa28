"""
Abstract Evaluator Interface

This module defines the abstract base class for all position evaluators.
By defining a common interface, we can swap between
evaluators without modifying the search algorithm.

Key Principles:
    1. Evaluators are stateless
    2. evaluate() always returns a score from the friendly side's perspective
    3. Positive = friendly advantage, Negative = enemy advantage
    4. Decided positions return ±INFINITY

Convention:
    - Scores are unit values weighted by board position
    - Return 0 for perfectly equal positions
    - The search negates the score when the enemy side is to move
"""

from abc import ABC, abstractmethod
from typing import Optional

from vanquish_engine.board.representation import Board
from vanquish_engine.rules.movement import generals_remaining


# Evaluation constants
INFINITY = float("inf")  # Represents certain victory/defeat


class Evaluator(ABC):
    """
    Abstract base class for position evaluation.

    All evaluator implementations must inherit from this class and implement
    the evaluate() method. This ensures compatibility with the search algorithm.

    Methods:
        evaluate(board): Returns position evaluation for the friendly side
    """

    @abstractmethod
    def evaluate(self, board: Board) -> float:
        """
        Evaluate a position from the friendly side's perspective.

        Args:
            board: Board to evaluate

        Returns:
            float: Evaluation score
        """
        pass

    def evaluate_for(self, board: Board, side: bool) -> float:
        """Evaluation from the point of view of `side`."""
        score = self.evaluate(board)
        return score if side else -score

    def evaluate_terminal(self, board: Board) -> Optional[float]:
        """
        Evaluate decided positions (a side without Generals).

        This is a helper method that evaluators call before scoring material,
        so a lost General always dominates any material count.

        Args:
            board: Board to evaluate

        Returns:
            float: -INFINITY if the friendly side has lost, +INFINITY if it won
            None: If the game is not decided
        """
        if generals_remaining(board, True) == 0:
            return -INFINITY
        if generals_remaining(board, False) == 0:
            return INFINITY
        return None

    def __repr__(self) -> str:
        """String representation of evaluator."""
        return f"{self.__class__.__name__}()"
