"""
Unit Tests for Evaluation Module

Tests for position evaluation functions, focusing on:
    - Material counting accuracy
    - Position table weighting
    - Symmetry (flipped position = negated evaluation)
    - Decided positions (a side without Generals)
"""

import numpy as np
import pytest

from vanquish_engine.board import CLASSIC_ARMY, Board, Space, UnitKind, initial_board
from vanquish_engine.evaluation import INFINITY, Evaluator, MaterialEvaluator


def board_with(*units):
    board = Board()
    for x, y, kind, friendly in units:
        board[x, y] = Space(kind, friendly)
    return board


class TestMaterialEvaluator:
    """Tests for MaterialEvaluator."""

    @pytest.fixture
    def evaluator(self):
        """Create a MaterialEvaluator instance."""
        return MaterialEvaluator()

    def test_starting_position_is_equal(self, evaluator):
        """Mirrored armies on a symmetric table evaluate to exactly 0."""
        board = initial_board(CLASSIC_ARMY)

        assert evaluator.evaluate(board) == 0.0

    def test_weighted_material(self, evaluator):
        """
        Score = friendly (value x multiplier) - enemy (value x multiplier).

        General on the core: 3 * 14 = 42
        Enemy General in the corner: 3 * 8 = 24
        Enemy Soldier in the corner: 1 * 8 = 8
        """
        board = board_with(
            (3, 3, UnitKind.GENERAL, True),
            (0, 0, UnitKind.GENERAL, False),
            (7, 7, UnitKind.SOLDIER, False),
        )

        assert evaluator.evaluate(board) == 10.0

    def test_centre_is_worth_more(self, evaluator):
        """The same unit scores higher in the centre than on the edge."""
        generals = [(0, 0, UnitKind.GENERAL, True), (7, 7, UnitKind.GENERAL, False)]
        edge = board_with(*generals, (0, 3, UnitKind.MILITIA, True))
        centre = board_with(*generals, (3, 3, UnitKind.MILITIA, True))

        assert evaluator.evaluate(centre) > evaluator.evaluate(edge)

    def test_symmetry(self, evaluator):
        """Flipping the side flags negates the evaluation."""
        board = Board.from_diagram("""
            g.......
            ........
            ..a.....
            ..Aa....
            ...Sa...
            ....s...
            .E.e....
            .......G
        """)
        score = evaluator.evaluate(board)

        assert score != 0
        assert evaluator.evaluate(board.flipped()) == -score

    def test_evaluate_for_enemy_side(self, evaluator):
        board = board_with(
            (3, 3, UnitKind.GENERAL, True),
            (0, 0, UnitKind.GENERAL, False),
        )

        assert evaluator.evaluate_for(board, True) == 18.0
        assert evaluator.evaluate_for(board, False) == -18.0

    def test_custom_position_table(self):
        """A flat table reduces the score to plain material."""
        evaluator = MaterialEvaluator(position_table=np.ones((8, 8), dtype=np.int32))
        board = board_with(
            (3, 3, UnitKind.GENERAL, True),
            (4, 4, UnitKind.ARCHER, True),
            (0, 0, UnitKind.GENERAL, False),
        )

        assert evaluator.evaluate(board) == 2.0

    def test_consistency(self, evaluator):
        """Test that evaluator is deterministic."""
        board = initial_board(CLASSIC_ARMY)
        board[5, 1] = Space()

        scores = [evaluator.evaluate(board) for _ in range(5)]

        assert len(set(scores)) == 1, f"Evaluator is not deterministic: {scores}"


class TestDecidedPositions:
    """Tests for positions where a side has no General."""

    @pytest.fixture
    def evaluator(self):
        return MaterialEvaluator()

    def test_enemy_without_general_is_won(self, evaluator):
        board = board_with(
            (0, 0, UnitKind.GENERAL, True),
            (4, 4, UnitKind.SORCERER, False),
            (4, 5, UnitKind.SORCERER, False),
        )

        assert evaluator.evaluate(board) == INFINITY
        assert evaluator.evaluate_for(board, False) == -INFINITY

    def test_friendly_without_general_is_lost(self, evaluator):
        """Material does not matter once the last General is gone."""
        board = board_with(
            (0, 0, UnitKind.GENERAL, False),
            (3, 3, UnitKind.SORCERER, True),
            (3, 4, UnitKind.SORCERER, True),
        )

        assert evaluator.evaluate(board) == -INFINITY

    def test_terminal_helper(self, evaluator):
        both = board_with((0, 0, UnitKind.GENERAL, True), (7, 7, UnitKind.GENERAL, False))

        assert evaluator.evaluate_terminal(both) is None
        assert evaluator.evaluate_terminal(Board()) == -INFINITY


class TestEvaluatorInterface:
    """Tests for Evaluator abstract interface."""

    def test_evaluator_is_abstract(self):
        """Evaluator cannot be instantiated directly."""
        with pytest.raises(TypeError):
            Evaluator()

    def test_custom_evaluator(self):
        """Any subclass with evaluate() plugs into the interface."""

        class CountingEvaluator(Evaluator):
            def evaluate(self, board):
                return float(sum(1 for _ in board.units(True)) - sum(1 for _ in board.units(False)))

        board = board_with((0, 0, UnitKind.GENERAL, True), (1, 1, UnitKind.SOLDIER, True))

        assert CountingEvaluator().evaluate_for(board, False) == -2.0
        assert repr(CountingEvaluator()) == "CountingEvaluator()"
