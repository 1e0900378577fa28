"""
Board Representation

This module defines the minimal, copyable board model the engine searches on.
Every square holds a unit kind and a side flag. The side flag is always
relative to one player (the "perspective" side): True means the unit belongs
to that player, False means it belongs to the opponent.

Storage:
    Two 8x8 numpy arrays
        kinds[x, y]     int8, a UnitKind value (0 = empty)
        friendly[x, y]  bool, side flag (always False on empty squares)

Coordinates:
    - x indexes the row (armies are laid out along rows)
    - y indexes the column
    - (0, 0) is a fixed corner, both axes range over [0, 7]

Diagram notation (used by tests, the tactical suite and logging):
    .  empty square
    S  Soldier     E  Sergeant    G  General    W  Sorcerer
    A  Archer      P  Pikeman     M  Militia
    Uppercase = friendly unit, lowercase = enemy unit.
    Row 0 is the first line of the diagram.
"""

from enum import IntEnum
from typing import Iterator, NamedTuple

import numpy as np

BOARD_SIZE = 8


class UnitKind(IntEnum):
    """Kind of unit standing on a square. NONE marks an empty square."""
    NONE = 0
    SOLDIER = 1
    SERGEANT = 2
    GENERAL = 3
    SORCERER = 4
    ARCHER = 5
    PIKEMAN = 6
    MILITIA = 7


KIND_TO_SYMBOL = {
    UnitKind.SOLDIER: "S",
    UnitKind.SERGEANT: "E",
    UnitKind.GENERAL: "G",
    UnitKind.SORCERER: "W",
    UnitKind.ARCHER: "A",
    UnitKind.PIKEMAN: "P",
    UnitKind.MILITIA: "M",
}
SYMBOL_TO_KIND = {symbol: kind for kind, symbol in KIND_TO_SYMBOL.items()}
EMPTY_SYMBOL = "."


def inside_bounds(x: int, y: int) -> bool:
    """Is (x, y) a square of the board?"""
    return 0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE


class Coordinate(NamedTuple):
    """A board square. x is the row, y is the column."""
    x: int
    y: int


class Move(NamedTuple):
    """An ordered pair of squares: the unit on origin goes to destination."""
    origin: Coordinate
    destination: Coordinate

    def __str__(self) -> str:
        return (
            f"({self.origin.x},{self.origin.y})->"
            f"({self.destination.x},{self.destination.y})"
        )


class Space(NamedTuple):
    """
    Contents of one square.

    Attributes:
        kind: Unit standing on the square (UnitKind.NONE if empty)
        friendly: True if the unit belongs to the perspective side
    """
    kind: UnitKind = UnitKind.NONE
    friendly: bool = False

    @property
    def occupied(self) -> bool:
        return self.kind != UnitKind.NONE

    def is_friendly_to(self, side: bool) -> bool:
        """Occupied by a unit of `side`."""
        return self.kind != UnitKind.NONE and self.friendly == side

    def is_enemy_to(self, side: bool) -> bool:
        """Occupied by a unit of the side opposing `side`."""
        return self.kind != UnitKind.NONE and self.friendly != side


EMPTY = Space()


def check_coordinate(coord) -> Coordinate:
    """
    Validate a square.

    Raises:
        ValueError: If either component lies outside [0, 7]
    """
    x, y = coord
    if not inside_bounds(x, y):
        raise ValueError(f"Coordinate out of range: ({x}, {y})")
    return Coordinate(x, y)


def all_coordinates() -> Iterator[Coordinate]:
    """Every square, row by row."""
    for x in range(BOARD_SIZE):
        for y in range(BOARD_SIZE):
            yield Coordinate(x, y)


class Board:
    """
    8x8 board of Spaces.

    Boards are mutable (the Move Applier changes them in place) and cheap to
    copy. Two boards compare equal when every square holds the same kind and
    side flag.
    """

    def __init__(self):
        self.kinds = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)
        self.friendly = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=bool)

    # ------------------------------------------------------------------
    # Square access
    # ------------------------------------------------------------------

    def __getitem__(self, coord) -> Space:
        x, y = check_coordinate(coord)
        kind = int(self.kinds[x, y])
        if kind == UnitKind.NONE:
            return EMPTY
        return Space(UnitKind(kind), bool(self.friendly[x, y]))

    def __setitem__(self, coord, space: Space):
        x, y = check_coordinate(coord)
        kind = UnitKind(space.kind)
        self.kinds[x, y] = kind
        # Empty squares always carry the default side flag
        self.friendly[x, y] = bool(space.friendly) if kind != UnitKind.NONE else False

    def clear(self, coord):
        """Empty a square."""
        self[coord] = EMPTY

    def kind_at(self, coord) -> UnitKind:
        x, y = check_coordinate(coord)
        return UnitKind(int(self.kinds[x, y]))

    # ------------------------------------------------------------------
    # Whole-board queries
    # ------------------------------------------------------------------

    def occupied_count(self) -> int:
        """Number of squares holding a unit."""
        return int(np.count_nonzero(self.kinds))

    def units(self, side: bool) -> Iterator[Coordinate]:
        """Squares holding a unit of `side`, row by row."""
        mask = (self.kinds != UnitKind.NONE) & (self.friendly == side)
        for x, y in np.argwhere(mask):
            yield Coordinate(int(x), int(y))

    def count(self, kind: UnitKind, side: bool) -> int:
        """Number of units of `kind` belonging to `side`."""
        return int(np.count_nonzero((self.kinds == kind) & (self.friendly == side)))

    def copy(self) -> "Board":
        clone = Board.__new__(Board)
        clone.kinds = self.kinds.copy()
        clone.friendly = self.friendly.copy()
        return clone

    def flipped(self) -> "Board":
        """Same position seen from the other side (side flags inverted)."""
        clone = self.copy()
        clone.friendly = (clone.kinds != UnitKind.NONE) & ~clone.friendly
        return clone

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(
            np.array_equal(self.kinds, other.kinds)
            and np.array_equal(self.friendly, other.friendly)
        )

    __hash__ = None

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_owners(cls, kinds, owners, perspective) -> "Board":
        """
        Copy an externally owned board into a perspective-relative snapshot.

        Args:
            kinds: 8x8 nested sequence (or array) of UnitKind values
            owners: 8x8 nested sequence of owner ids (ignored on empty squares)
            perspective: Owner id whose units become friendly

        Returns:
            A new Board. Nothing from the inputs is aliased.
        """
        board = cls()
        kind_array = np.asarray(kinds, dtype=np.int8)
        if kind_array.shape != (BOARD_SIZE, BOARD_SIZE):
            raise ValueError(f"Invalid board shape: {kind_array.shape}. Expected (8, 8)")
        board.kinds = kind_array.copy()
        for x, y in np.argwhere(board.kinds != UnitKind.NONE):
            board.friendly[x, y] = owners[x][y] == perspective
        return board

    @classmethod
    def from_diagram(cls, diagram: str) -> "Board":
        """
        Build a board from an 8-line diagram (see module docstring).

        Whitespace inside a line is ignored, so rows may be written spaced out.

        Raises:
            ValueError: On a wrong number of rows/columns or unknown symbols
        """
        rows = [line.replace(" ", "") for line in diagram.strip().splitlines()]
        rows = [row for row in rows if row]
        if len(rows) != BOARD_SIZE:
            raise ValueError(f"Diagram must have 8 rows, got {len(rows)}")

        board = cls()
        for x, row in enumerate(rows):
            if len(row) != BOARD_SIZE:
                raise ValueError(f"Diagram row {x} must have 8 squares, got {len(row)}")
            for y, symbol in enumerate(row):
                if symbol == EMPTY_SYMBOL:
                    continue
                kind = SYMBOL_TO_KIND.get(symbol.upper())
                if kind is None:
                    raise ValueError(f"Unknown diagram symbol: {symbol!r}")
                board[x, y] = Space(kind, symbol.isupper())
        return board

    def to_diagram(self) -> str:
        lines = []
        for x in range(BOARD_SIZE):
            symbols = []
            for y in range(BOARD_SIZE):
                space = self[x, y]
                if not space.occupied:
                    symbols.append(EMPTY_SYMBOL)
                    continue
                symbol = KIND_TO_SYMBOL[space.kind]
                symbols.append(symbol if space.friendly else symbol.lower())
            lines.append("".join(symbols))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.to_diagram()

    def __repr__(self) -> str:
        return f"Board(units={self.occupied_count()})"
