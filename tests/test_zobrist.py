"""
Unit Tests for Zobrist Hashing

Tests for the engine-owned key table and incremental hash updates.
"""

import numpy as np
import pytest

from vanquish_engine.board import CLASSIC_ARMY, Board, Coordinate, Move, UnitKind, initial_board
from vanquish_engine.rules import apply_move, resolve_move
from vanquish_engine.search import ZobristHasher


def mv(origin, destination):
    return Move(Coordinate(*origin), Coordinate(*destination))


@pytest.fixture
def hasher():
    return ZobristHasher(seed=42)


@pytest.fixture
def board():
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


class TestKeyTable:
    """Tests for key table construction."""

    def test_table_shape(self, hasher):
        assert hasher.keys.shape == (2, 7, 8, 8)
        assert hasher.keys.dtype == np.uint64

    def test_seed_is_reproducible(self):
        """Two hashers built from the same seed agree on every key."""
        first = ZobristHasher(seed=7)
        second = ZobristHasher(seed=7)

        assert np.array_equal(first.keys, second.keys)
        assert first.side_to_move_key == second.side_to_move_key

    def test_hashers_are_independent(self):
        """Different seeds give different tables."""
        assert not np.array_equal(ZobristHasher(seed=1).keys, ZobristHasher(seed=2).keys)

    def test_keys_are_distinct(self, hasher):
        assert len(np.unique(hasher.keys)) == hasher.keys.size


class TestFullHash:
    """Tests for hash_board()."""

    def test_empty_board(self, hasher):
        assert hasher.hash_board(Board(), perspective_to_move=False) == 0
        assert hasher.hash_board(Board(), perspective_to_move=True) == hasher.side_to_move_key

    def test_hash_is_64_bit_int(self, hasher, board):
        value = hasher.hash_board(board)

        assert isinstance(value, int)
        assert 0 <= value < 2 ** 64

    def test_side_to_move_changes_hash(self, hasher, board):
        friendly_to_move = hasher.hash_board(board, True)
        enemy_to_move = hasher.hash_board(board, False)

        assert friendly_to_move ^ enemy_to_move == hasher.side_to_move_key

    def test_side_flag_matters(self, hasher, board):
        """The same units with swapped sides hash differently."""
        assert hasher.hash_board(board) != hasher.hash_board(board.flipped())

    def test_hash_is_xor_of_pieces(self, hasher):
        board = Board.from_diagram("G.......\n" + "........\n" * 6 + ".......s\n")
        expected = (
            hasher.piece_key(True, UnitKind.GENERAL, 0, 0)
            ^ hasher.piece_key(False, UnitKind.SOLDIER, 7, 7)
        )

        assert hasher.hash_board(board, False) == expected


class TestIncrementalUpdate:
    """update() must always agree with a full recomputation."""

    @pytest.mark.parametrize("move", [
        ((6, 1), (5, 1)),   # quiet Sergeant move
        ((4, 3), (4, 4)),   # Soldier captures, becomes Sergeant
        ((6, 1), (6, 3)),   # Sergeant captures, becomes General
        ((3, 2), (3, 3)),   # adjacent Archer strike
        ((3, 2), (4, 2)),   # quiet Archer step
        ((7, 7), (4, 7)),   # General slide
    ])
    def test_update_matches_recompute(self, hasher, board, move):
        move = mv(*move)
        before = hasher.hash_board(board, True)
        after = apply_move(board, move).board

        assert hasher.update(board, before, move) == hasher.hash_board(after, False)

    @pytest.mark.parametrize("move", [((4, 3), (4, 4)), ((3, 2), (3, 3)), ((6, 1), (5, 1))])
    def test_precomputed_outcome(self, hasher, board, move):
        """Passing the resolved outcome gives the same hash as resolving it again."""
        move = mv(*move)
        before = hasher.hash_board(board, True)
        outcome = resolve_move(board, move)

        assert hasher.update(board, before, move, outcome) == hasher.update(board, before, move), \
            f"Precomputed outcome changed the hash of {move}"

    def test_enemy_move_update(self, hasher, board):
        move = mv((5, 4), (4, 3))
        before = hasher.hash_board(board, False)
        after = apply_move(board, move).board

        assert hasher.update(board, before, move) == hasher.hash_board(after, True)

    def test_ranged_strike_update(self, hasher):
        board = Board.from_diagram("""
            g.......
            ........
            ........
            ........
            A.s.....
            ........
            ........
            .......G
        """)
        move = mv((4, 0), (4, 2))
        before = hasher.hash_board(board, True)
        expected = before ^ hasher.side_to_move_key ^ hasher.piece_key(False, UnitKind.SOLDIER, 4, 2)

        assert hasher.update(board, before, move) == expected

    def test_toggle_side(self, hasher, board):
        value = hasher.hash_board(board, True)

        assert hasher.toggle_side(value) == hasher.hash_board(board, False)
        assert hasher.toggle_side(hasher.toggle_side(value)) == value

    def test_transpositions_hash_identically(self, hasher):
        """Different move orders reaching the same position share a hash."""
        start = initial_board(CLASSIC_ARMY)
        first = [mv((5, 1), (4, 1)), mv((2, 1), (3, 1)), mv((5, 3), (4, 3)), mv((2, 3), (3, 3))]
        second = [mv((5, 3), (4, 3)), mv((2, 3), (3, 3)), mv((5, 1), (4, 1)), mv((2, 1), (3, 1))]

        hashes = []
        for moves in (first, second):
            board, value = start, hasher.hash_board(start, True)
            for move in moves:
                value = hasher.update(board, value, move)
                board = apply_move(board, move).board
            hashes.append(value)
            assert value == hasher.hash_board(board, True)

        assert hashes[0] == hashes[1]
