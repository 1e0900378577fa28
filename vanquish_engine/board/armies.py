"""
Army Layouts

Starting positions for a game. An army is a 3x8 grid of UnitKind values
(0 = no unit). The local player's army fills rows 5-7 with its first row
facing the centre; the opponent gets the mirrored army on rows 0-2.

Game modes:
    - classic: the fixed CLASSIC_ARMY for both players
    - modern: a random army (2-3 Generals, 4-8 Soldiers, the rest drawn from
      Sorcerer/Archer/Pikeman/Militia), see modern_army()
"""

from typing import Optional

import numpy as np

from vanquish_engine.board.representation import Board, Space, UnitKind

ARMY_ROWS = 3
PLAYER_ROW_OFFSET = 5
ARMY_SIZE = 12

S, G, W, A, P, M = (
    UnitKind.SOLDIER, UnitKind.GENERAL, UnitKind.SORCERER,
    UnitKind.ARCHER, UnitKind.PIKEMAN, UnitKind.MILITIA,
)

# fmt: off
CLASSIC_ARMY = np.array([
    [0, S, 0, S, 0, S, 0, S],
    [P, 0, G, 0, P, 0, G, 0],
    [0, M, 0, A, 0, M, 0, W],
], dtype=np.int8)
# fmt: on

SPECIALISTS = (UnitKind.SORCERER, UnitKind.ARCHER, UnitKind.PIKEMAN, UnitKind.MILITIA)


def modern_army(rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """
    Draw a random army for modern play.

    Generals never stand on the first row, so they start out of reach.

    Args:
        rng: numpy random generator (a fresh unseeded one if None)

    Returns:
        (3, 8) int8 array of UnitKind values
    """
    rng = rng if rng is not None else np.random.default_rng()

    general_count = int(rng.integers(2, 4))
    soldier_count = int(rng.integers(4, 9))
    rest_count = ARMY_SIZE - soldier_count - general_count

    units = [int(rng.choice(SPECIALISTS)) for _ in range(rest_count)]
    units += [int(UnitKind.SOLDIER)] * soldier_count
    rng.shuffle(units)
    units = [int(UnitKind.GENERAL)] * general_count + units[::-1]

    # Generals are among the first eight, which fill the back two rows
    back = units[:8]
    rng.shuffle(back)
    units = units[8:] + back

    army = np.zeros((ARMY_ROWS, 8), dtype=np.int8)
    army[0, 0::2] = units[0:4]
    army[1, 1::2] = units[4:8]
    army[2, 0::2] = units[8:12]
    return army


def mirrored_army(army: np.ndarray) -> np.ndarray:
    """The army as seen across the board (first and last rows swapped)."""
    return np.asarray(army)[::-1].copy()


def initial_board(army: np.ndarray, opponent_army: Optional[np.ndarray] = None) -> Board:
    """
    Set up a starting position from the local player's point of view.

    Args:
        army: Local player's army (friendly, rows 5-7)
        opponent_army: Opponent's army before mirroring (defaults to `army`)

    Returns:
        Board with friendly units on rows 5-7 and enemy units on rows 0-2
    """
    army = np.asarray(army, dtype=np.int8)
    if army.shape != (ARMY_ROWS, 8):
        raise ValueError(f"Invalid army shape: {army.shape}. Expected (3, 8)")
    opponent = mirrored_army(army if opponent_army is None else opponent_army)

    board = Board()
    for row in range(ARMY_ROWS):
        for col in range(8):
            if army[row, col]:
                board[row + PLAYER_ROW_OFFSET, col] = Space(UnitKind(int(army[row, col])), True)
            if opponent[row, col]:
                board[row, col] = Space(UnitKind(int(opponent[row, col])), False)
    return board
