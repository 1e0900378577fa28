"""
Movement Rules

Legal destinations for every kind of unit, plus the static values used by
evaluation and move ordering.

All units move along the eight compass/diagonal directions. DIRECTIONS is
ordered so that even indices are orthogonal and odd indices are diagonal:

    0: ( 1, 0)   1: ( 1, 1)   2: (-1, 0)   3: ( 1,-1)
    4: ( 0, 1)   5: (-1, 1)   6: ( 0,-1)   7: (-1,-1)

Move patterns:
    Soldier   one step, any direction, not onto a friendly unit
    Sergeant  up to 2 steps per direction
    General   up to 3 steps per direction, but only adjacent enemies when
              any enemy stands next to it (mandatory capture)
    Sorcerer  any adjacent enemy, or any empty square on the board
    Archer    one step onto a non-friendly square, or an enemy exactly
              2 squares away orthogonally
    Pikeman   up to 3 steps along the diagonals
    Militia   up to 3 steps along the orthogonals

Sliding units (Sergeant, General, Pikeman, Militia) stop at the first
occupied square of a ray: an enemy square is included, a friendly one is not.

Each kind is one MovePattern variant. The set of kinds is fixed, so the
variants live in the closed PATTERNS mapping.
"""

from abc import ABC, abstractmethod
from typing import FrozenSet, Iterable, List

import numpy as np

from vanquish_engine.board.representation import (
    Board,
    Coordinate,
    UnitKind,
    all_coordinates,
    check_coordinate,
    inside_bounds,
)

DIRECTIONS = (
    (1, 0), (1, 1), (-1, 0), (1, -1),
    (0, 1), (-1, 1), (0, -1), (-1, -1),
)
ORTHOGONAL = DIRECTIONS[0::2]
DIAGONAL = DIRECTIONS[1::2]


# ============================================================================
# Unit values
# ============================================================================

PIECE_VALUES = {
    UnitKind.SOLDIER: 1,
    UnitKind.SERGEANT: 2,
    UnitKind.SORCERER: 2,
    UnitKind.ARCHER: 2,
    UnitKind.PIKEMAN: 2,
    UnitKind.MILITIA: 2,
    UnitKind.GENERAL: 3,
}

# Indexed by UnitKind value, for vectorized evaluation
PIECE_VALUE_ARRAY = np.array(
    [0] + [PIECE_VALUES[UnitKind(kind)] for kind in range(1, 8)], dtype=np.int32
)

OUTER = 8
OUTER_CENTER = 9
INNER_CENTER = 11
CORE = 14

# fmt: off
# Multiplier applied to a unit's static value depending on where it stands
POSITION_TABLE = np.array([
    [OUTER, OUTER,        OUTER,        OUTER,        OUTER,        OUTER,        OUTER,        OUTER],
    [OUTER, OUTER_CENTER, OUTER_CENTER, OUTER_CENTER, OUTER_CENTER, OUTER_CENTER, OUTER_CENTER, OUTER],
    [OUTER, OUTER_CENTER, INNER_CENTER, INNER_CENTER, INNER_CENTER, INNER_CENTER, OUTER_CENTER, OUTER],
    [OUTER, OUTER_CENTER, INNER_CENTER, CORE,         CORE,         INNER_CENTER, OUTER_CENTER, OUTER],
    [OUTER, OUTER_CENTER, INNER_CENTER, CORE,         CORE,         INNER_CENTER, OUTER_CENTER, OUTER],
    [OUTER, OUTER_CENTER, INNER_CENTER, INNER_CENTER, INNER_CENTER, INNER_CENTER, OUTER_CENTER, OUTER],
    [OUTER, OUTER_CENTER, OUTER_CENTER, OUTER_CENTER, OUTER_CENTER, OUTER_CENTER, OUTER_CENTER, OUTER],
    [OUTER, OUTER,        OUTER,        OUTER,        OUTER,        OUTER,        OUTER,        OUTER],
], dtype=np.int32)
# fmt: on


def piece_value(kind: UnitKind, coord=None) -> int:
    """
    Value of a unit, optionally weighted by the square it stands on.

    Args:
        kind: Unit kind (must not be NONE)
        coord: Square of the unit; if None, the static value is returned

    Raises:
        ValueError: If kind is NONE
    """
    if kind == UnitKind.NONE:
        raise ValueError("An empty square has no piece value")
    value = PIECE_VALUES[UnitKind(kind)]
    if coord is None:
        return value
    x, y = check_coordinate(coord)
    return value * int(POSITION_TABLE[x, y])


def capture_score(
    attacker: UnitKind,
    defender: UnitKind,
    origin: Coordinate,
    destination: Coordinate,
) -> float:
    """
    Score of a capture, used to search good captures first.

    Soldiers and Sergeants are cheap attackers and promote on capture, so
    their captures are worth the full defender value.

    Returns:
        -inf if either side of the capture is NONE,
        defender value if the attacker is a Soldier or Sergeant,
        defender value minus attacker value otherwise
    """
    if attacker == UnitKind.NONE or defender == UnitKind.NONE:
        return float("-inf")
    defender_value = piece_value(defender, destination)
    if attacker in (UnitKind.SOLDIER, UnitKind.SERGEANT):
        return defender_value
    return defender_value - piece_value(attacker, origin)


# ============================================================================
# Move patterns
# ============================================================================

class MovePattern(ABC):
    """
    Movement capability of one unit kind.

    Subclasses implement destinations(). captures() is derived from it: the
    legal destinations that currently hold an enemy unit.
    """

    kind: UnitKind = UnitKind.NONE

    @abstractmethod
    def destinations(self, board: Board, origin: Coordinate) -> List[Coordinate]:
        """Every square the unit on origin may move to (or strike)."""

    def captures(self, board: Board, origin: Coordinate) -> List[Coordinate]:
        side = board[origin].friendly
        return [
            dest for dest in self.destinations(board, origin)
            if board[dest].is_enemy_to(side)
        ]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


def _adjacent(origin: Coordinate) -> Iterable[Coordinate]:
    for dx, dy in DIRECTIONS:
        x, y = origin.x + dx, origin.y + dy
        if inside_bounds(x, y):
            yield Coordinate(x, y)


def _slide(board: Board, origin: Coordinate, directions, max_steps: int) -> List[Coordinate]:
    side = board[origin].friendly
    result = []
    for dx, dy in directions:
        x, y = origin
        for _ in range(max_steps):
            x, y = x + dx, y + dy
            if not inside_bounds(x, y):
                break
            space = board[x, y]
            if space.is_friendly_to(side):
                break
            result.append(Coordinate(x, y))
            if space.occupied:
                break
    return result


def _adjacent_enemies(board: Board, origin: Coordinate) -> List[Coordinate]:
    side = board[origin].friendly
    return [coord for coord in _adjacent(origin) if board[coord].is_enemy_to(side)]


class SoldierPattern(MovePattern):
    kind = UnitKind.SOLDIER

    def destinations(self, board, origin):
        side = board[origin].friendly
        return [coord for coord in _adjacent(origin) if not board[coord].is_friendly_to(side)]


class SergeantPattern(MovePattern):
    kind = UnitKind.SERGEANT

    def destinations(self, board, origin):
        return _slide(board, origin, DIRECTIONS, 2)


class GeneralPattern(MovePattern):
    """Mandatory capture: adjacent enemies, when present, are the only moves."""
    kind = UnitKind.GENERAL

    def destinations(self, board, origin):
        enemies = _adjacent_enemies(board, origin)
        if enemies:
            return enemies
        return _slide(board, origin, DIRECTIONS, 3)


class SorcererPattern(MovePattern):
    kind = UnitKind.SORCERER

    def destinations(self, board, origin):
        result = _adjacent_enemies(board, origin)
        result.extend(coord for coord in all_coordinates() if not board[coord].occupied)
        return result


class ArcherPattern(MovePattern):
    """Steps like a Soldier; shoots enemies two squares away orthogonally."""
    kind = UnitKind.ARCHER

    def destinations(self, board, origin):
        side = board[origin].friendly
        result = [coord for coord in _adjacent(origin) if not board[coord].is_friendly_to(side)]
        for dx, dy in ORTHOGONAL:
            x, y = origin.x + 2 * dx, origin.y + 2 * dy
            if inside_bounds(x, y) and board[x, y].is_enemy_to(side):
                result.append(Coordinate(x, y))
        return result


class PikemanPattern(MovePattern):
    kind = UnitKind.PIKEMAN

    def destinations(self, board, origin):
        return _slide(board, origin, DIAGONAL, 3)


class MilitiaPattern(MovePattern):
    kind = UnitKind.MILITIA

    def destinations(self, board, origin):
        return _slide(board, origin, ORTHOGONAL, 3)


PATTERNS = {
    pattern.kind: pattern
    for pattern in (
        SoldierPattern(),
        SergeantPattern(),
        GeneralPattern(),
        SorcererPattern(),
        ArcherPattern(),
        PikemanPattern(),
        MilitiaPattern(),
    )
}


def pattern_for(board: Board, origin) -> MovePattern:
    """
    Move pattern of the unit on origin.

    Raises:
        ValueError: If origin is off the board or empty
    """
    kind = board.kind_at(origin)
    if kind == UnitKind.NONE:
        raise ValueError(f"No unit on origin square {tuple(origin)}")
    return PATTERNS[kind]


def legal_destinations(board: Board, origin) -> FrozenSet[Coordinate]:
    """Every square the unit on origin may move to."""
    origin = check_coordinate(origin)
    return frozenset(pattern_for(board, origin).destinations(board, origin))


def capturing_destinations(board: Board, origin) -> FrozenSet[Coordinate]:
    """The legal destinations of the unit on origin that hold an enemy."""
    origin = check_coordinate(origin)
    return frozenset(pattern_for(board, origin).captures(board, origin))


# ============================================================================
# Static board predicates
# ============================================================================

def general_capturable(board: Board, coord) -> bool:
    """
    Is there a General on coord with an enemy unit next to it?

    Independent of whose turn it is.
    """
    space = board[coord]
    if space.kind != UnitKind.GENERAL:
        return False
    return any(board[adj].is_enemy_to(space.friendly) for adj in _adjacent(Coordinate(*coord)))


def any_general_capturable(board: Board) -> bool:
    """Is any General on the board (of either side) capturable?"""
    for x, y in np.argwhere(board.kinds == UnitKind.GENERAL):
        if general_capturable(board, (int(x), int(y))):
            return True
    return False


def generals_remaining(board: Board, side: bool) -> int:
    """Number of Generals controlled by `side`."""
    return board.count(UnitKind.GENERAL, side)
