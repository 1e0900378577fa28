"""
Zobrist Hashing

Zobrist hashing gives every position a 64-bit fingerprint, used as the key
of the transposition table. The hash is updated incrementally as moves are
made, so it costs a handful of XORs per move instead of a board scan.

Implementation:
    - One random 64-bit key per (side, unit kind, x, y):
      2 sides * 7 kinds * 64 squares = 896 keys
    - One extra key meaning "the perspective side is to move"
    - Hash = XOR of the keys of every occupied square,
      XOR the side-to-move key when the perspective side is to move

XOR is order independent, so the same position reached through different
move orders always hashes to the same value.

Each hasher owns its own key table, drawn once from a private numpy
Generator in the constructor. The table is read-only afterwards.

References:
    - Zobrist Hashing: https://www.chessprogramming.org/Zobrist_Hashing
"""

from typing import Optional

import numpy as np

from vanquish_engine.board.representation import Board, Move, UnitKind
from vanquish_engine.rules.transition import MoveOutcome, resolve_move

SIDES = 2
KINDS = 7  # UnitKind.NONE has no key


class ZobristHasher:
    """
    Zobrist key table for one engine.

    Attributes:
        keys: uint64 array [side][kind - 1][x][y], side 0 = friendly, 1 = enemy
        side_to_move_key: XORed in while the perspective side is to move
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Fill the key table.

        Args:
            seed: Random seed for reproducible hashes (None = OS entropy)
        """
        rng = np.random.default_rng(seed)
        max_key = np.iinfo(np.uint64).max
        self.keys = rng.integers(0, max_key, size=(SIDES, KINDS, 8, 8), dtype=np.uint64, endpoint=True)
        self.side_to_move_key = int(rng.integers(0, max_key, dtype=np.uint64, endpoint=True))

        # Plain ints are much faster to XOR than numpy scalars
        self._keys = self.keys.tolist()

    def piece_key(self, friendly: bool, kind: UnitKind, x: int, y: int) -> int:
        """Key of one unit on one square."""
        return self._keys[0 if friendly else 1][kind - 1][x][y]

    def hash_board(self, board: Board, perspective_to_move: bool = True) -> int:
        """
        Compute the hash of a position from scratch.

        Args:
            board: Position to hash
            perspective_to_move: True if the friendly side is to move

        Returns:
            64-bit hash value (int)
        """
        hash_value = 0
        for x, y in np.argwhere(board.kinds != UnitKind.NONE):
            x, y = int(x), int(y)
            hash_value ^= self.piece_key(bool(board.friendly[x, y]), int(board.kinds[x, y]), x, y)
        if perspective_to_move:
            hash_value ^= self.side_to_move_key
        return hash_value

    def update(
        self,
        board: Board,
        current_hash: int,
        move: Move,
        outcome: Optional[MoveOutcome] = None,
    ) -> int:
        """
        Hash after `move`, computed from the board BEFORE the move is made.

        Ordinary move: the mover leaves origin, arrives on destination with
        its resulting kind (after promotion) and any captured unit is removed.
        Archer strike: only the struck unit is removed.

        Args:
            board: Position before the move
            current_hash: Hash of that position
            move: Move about to be made
            outcome: resolve_move(board, move), if the caller already has it

        Returns:
            Updated hash value
        """
        if outcome is None:
            outcome = resolve_move(board, move)
        origin, dest = move
        new_hash = current_hash ^ self.side_to_move_key

        if outcome.is_capture:
            new_hash ^= self.piece_key(not outcome.side, outcome.captured, dest.x, dest.y)
        if outcome.strike:
            return new_hash

        new_hash ^= self.piece_key(outcome.side, outcome.mover, origin.x, origin.y)
        new_hash ^= self.piece_key(outcome.side, outcome.result_kind, dest.x, dest.y)
        return new_hash

    def toggle_side(self, current_hash: int) -> int:
        """Hash after a null move (only the side to move changes)."""
        return current_hash ^ self.side_to_move_key

    def verify_hash(self, board: Board, perspective_to_move: bool, claimed_hash: int) -> bool:
        """
        Check a claimed hash against a full recomputation.

        Useful for debugging incremental updates.
        """
        return self.hash_board(board, perspective_to_move) == claimed_hash

    def __repr__(self) -> str:
        return f"ZobristHasher(keys={self.keys.size + 1})"
