"""
Unit Tests for the Game State / Move Applier

Tests for in-place make/undo, focusing on:
    - Round-trip law (undo restores board and hash exactly)
    - Rolling hash agreement with full recomputation
    - Promotions, strikes and their undo
    - Null moves
    - Position predicates used by the search
"""

from unittest.mock import patch

import numpy as np
import pytest

from vanquish_engine.board import CLASSIC_ARMY, Board, Coordinate, Move, Space, UnitKind, initial_board
from vanquish_engine.board.armies import modern_army
from vanquish_engine.rules import capturing_destinations, legal_destinations
from vanquish_engine.search import GameState, ZobristHasher


def mv(origin, destination):
    return Move(Coordinate(*origin), Coordinate(*destination))


@pytest.fixture
def hasher():
    return ZobristHasher(seed=0)


@pytest.fixture
def skirmish():
    return Board.from_diagram("""
        g.......
        ........
        ..a.....
        ..Aa....
        ...Sa...
        ....s...
        .E.e....
        .......G
    """)


class TestMakeMove:
    """Tests for make_move()."""

    def test_soldier_promotion_scenario(self, hasher):
        """A Soldier capturing at (4, 4) becomes a Sergeant and leaves (3, 3)."""
        board = Board()
        board[3, 3] = Space(UnitKind.SOLDIER, True)
        board[4, 4] = Space(UnitKind.SOLDIER, False)
        state = GameState(board, hasher)

        assert Coordinate(4, 4) in legal_destinations(state.board, (3, 3))
        state.make_move(mv((3, 3), (4, 4)))

        assert state.board[4, 4] == Space(UnitKind.SERGEANT, True), \
            f"Soldier was not promoted: {state.board[4, 4]}"
        assert not state.board[3, 3].occupied
        assert state.verify_hash()

    def test_state_copies_the_board(self, hasher, skirmish):
        """The caller's board is never modified."""
        before = skirmish.copy()
        state = GameState(skirmish, hasher)
        state.make_move(mv((4, 3), (4, 4)))

        assert skirmish == before
        assert state.board != skirmish

    def test_strike(self, hasher, skirmish):
        state = GameState(skirmish, hasher)
        state.make_move(mv((3, 2), (3, 3)))

        assert state.board[3, 2] == Space(UnitKind.ARCHER, True)
        assert not state.board[3, 3].occupied
        assert state.last_move_was_capture()
        assert state.verify_hash()

    def test_move_resolved_once(self, hasher, skirmish):
        """The hash update reuses the outcome make_move already resolved."""
        state = GameState(skirmish, hasher)

        with patch("vanquish_engine.search.zobrist.resolve_move") as hasher_resolve:
            state.make_move(mv((4, 3), (4, 4)))

        assert not hasher_resolve.called, "make_move resolved the move twice"
        assert state.verify_hash()

    def test_empty_origin_raises(self, hasher, skirmish):
        state = GameState(skirmish, hasher)

        with pytest.raises(ValueError):
            state.make_move(mv((1, 1), (2, 2)))
        assert state.ply == 0
        assert state.board == skirmish

    def test_side_to_move_alternates(self, hasher, skirmish):
        state = GameState(skirmish, hasher, side_to_move=True)
        state.make_move(mv((6, 1), (5, 1)))

        assert state.side_to_move is False
        state.make_move(mv((0, 0), (1, 0)))
        assert state.side_to_move is True
        assert state.ply == 2


class TestUndoMove:
    """Tests for undo_move()."""

    def test_undo_empty_stack_raises(self, hasher, skirmish):
        state = GameState(skirmish, hasher)

        with pytest.raises(RuntimeError):
            state.undo_move()

    @pytest.mark.parametrize("side", [True, False])
    def test_round_trip_every_move(self, hasher, skirmish, side):
        """make_move(m); undo_move() restores board and hash for every legal move."""
        state = GameState(skirmish, hasher, side_to_move=side)
        board_before = state.board.copy()
        hash_before = state.zobrist_hash

        for move in state.possible_moves(side):
            state.make_move(move)
            assert state.verify_hash(), f"Hash drifted after {move}"
            state.undo_move()

            assert state.board == board_before, f"Board not restored after {move}"
            assert state.zobrist_hash == hash_before
            assert state.side_to_move is side
            assert state.ply == 0

    def test_undo_strike_restores_struck_unit(self, hasher):
        """The struck unit comes back owned by the side opposing the Archer."""
        board = Board.from_diagram("""
            ........
            ........
            ........
            ........
            A.g.....
            ........
            ........
            .......G
        """)
        state = GameState(board, hasher)
        state.make_move(mv((4, 0), (4, 2)))
        state.undo_move()

        assert state.board[4, 2] == Space(UnitKind.GENERAL, False)
        assert state.board[4, 0] == Space(UnitKind.ARCHER, True)
        assert state.board == board

    def test_undo_enemy_strike(self, hasher):
        board = Board.from_diagram("""
            .......g
            ........
            ........
            ...a....
            ...S....
            ........
            ........
            G.......
        """)
        state = GameState(board, hasher, side_to_move=False)
        state.make_move(mv((3, 3), (4, 3)))

        assert not state.board[4, 3].occupied
        state.undo_move()
        assert state.board[4, 3] == Space(UnitKind.SOLDIER, True)
        assert state.board == board

    def test_undo_double_promotion(self, hasher):
        """Soldier → Sergeant → General, then back again."""
        board = Board.from_diagram("""
            g.......
            ........
            ........
            ..s.....
            ........
            ..s.....
            ...S....
            .......G
        """)
        state = GameState(board, hasher)
        state.make_move(mv((6, 3), (5, 2)))
        assert state.board[5, 2] == Space(UnitKind.SERGEANT, True)

        state.make_move(mv((0, 0), (0, 1)))
        state.make_move(mv((5, 2), (3, 2)))
        assert state.board[3, 2] == Space(UnitKind.GENERAL, True), \
            f"Sergeant was not promoted: {state.board[3, 2]}"
        assert state.verify_hash()

        state.undo_move()
        assert state.board[5, 2] == Space(UnitKind.SERGEANT, True)
        assert state.board[3, 2] == Space(UnitKind.SOLDIER, False)
        state.undo_move()
        state.undo_move()
        assert state.board == board
        assert state.verify_hash()

    @pytest.mark.parametrize("seed", range(6))
    def test_random_playouts(self, hasher, seed):
        """Long random games keep the hash consistent and unwind exactly."""
        rng = np.random.default_rng(seed)
        start = initial_board(modern_army(rng), modern_army(rng))
        state = GameState(start, hasher)
        start_hash = state.zobrist_hash

        side = True
        for _ in range(60):
            if state.is_game_over():
                break
            moves = state.possible_moves(side)
            if not moves:
                break
            state.make_move(moves[int(rng.integers(len(moves)))])
            assert state.verify_hash()
            side = not side

        while state.ply:
            state.undo_move()

        assert state.board == start
        assert state.zobrist_hash == start_hash


class TestNullMove:
    """Tests for null moves."""

    def test_null_move_only_toggles_side(self, hasher, skirmish):
        state = GameState(skirmish, hasher)
        hash_before = state.zobrist_hash
        state.make_null_move()

        assert state.board == skirmish
        assert state.zobrist_hash == hash_before ^ hasher.side_to_move_key
        assert state.side_to_move is False
        assert state.verify_hash()
        assert not state.last_move_was_capture()

        state.undo_move()
        assert state.zobrist_hash == hash_before
        assert state.side_to_move is True

    def test_can_do_null_move(self, hasher, skirmish):
        """Null moves need at least ten units on the board."""
        state = GameState(skirmish, hasher)
        assert state.board.occupied_count() == 10
        assert state.can_do_null_move()

        state.make_move(mv((4, 3), (4, 4)))
        assert not state.can_do_null_move()

        assert GameState(initial_board(CLASSIC_ARMY), hasher).can_do_null_move()


class TestMoveGeneration:
    """Tests for possible_moves() and capture_moves()."""

    def test_possible_moves_match_rules(self, hasher, skirmish):
        state = GameState(skirmish, hasher)

        for side in (True, False):
            expected = {
                Move(origin, dest)
                for origin in skirmish.units(side)
                for dest in legal_destinations(skirmish, origin)
            }
            moves = state.possible_moves(side)
            assert set(moves) == expected
            assert len(moves) == len(expected)

    def test_capture_moves_match_rules(self, hasher, skirmish):
        state = GameState(skirmish, hasher)
        expected = {
            Move(origin, dest)
            for origin in skirmish.units(True)
            for dest in capturing_destinations(skirmish, origin)
        }

        assert set(state.capture_moves(True)) == expected
        assert mv((3, 2), (3, 3)) in expected
        assert mv((4, 3), (4, 4)) in expected

    def test_move_order_is_deterministic(self, hasher, skirmish):
        first = GameState(skirmish, hasher).possible_moves(True)
        second = GameState(skirmish, hasher).possible_moves(True)

        assert first == second


class TestPredicates:
    """Tests for game over and quietness."""

    def test_game_over(self, hasher):
        board = Board()
        board[0, 0] = Space(UnitKind.GENERAL, True)
        assert GameState(board, hasher).is_game_over()

        board[7, 7] = Space(UnitKind.GENERAL, False)
        assert not GameState(board, hasher).is_game_over()

    def test_quiet_position(self, hasher):
        board = Board.from_diagram("""
            g.......
            ........
            ........
            ........
            ........
            ........
            ........
            .......G
        """)
        state = GameState(board, hasher)

        assert state.is_quiet()
        state.make_move(mv((7, 7), (6, 7)))
        assert state.is_quiet()

    def test_capture_is_not_quiet(self, hasher, skirmish):
        state = GameState(skirmish, hasher)
        state.make_move(mv((4, 3), (4, 4)))

        assert state.last_move_was_capture()
        assert not state.is_quiet()

    def test_capturable_general_is_not_quiet(self, hasher):
        board = Board.from_diagram("""
            g.......
            .S......
            ........
            ........
            ........
            ........
            ........
            .......G
        """)

        assert not GameState(board, hasher).is_quiet()
