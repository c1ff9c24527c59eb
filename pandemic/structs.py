"""Core value types of the game: directions, positions, cells, units and input tokens."""

from __future__ import annotations

import enum
import functools
from dataclasses import dataclass

GAME_NAME = "Pandemic"
VERSION = "1.0"


class GameError(Exception):
    """Raised when game data or a request breaks one of the rules of the game."""


class Dir(enum.IntEnum):
    """Directions a unit can move in."""

    BOTTOM = 0  # South
    RIGHT = 1  # East
    TOP = 2  # North
    LEFT = 3  # West
    NONE = 4  # No movement


_DELTAS = {
    Dir.BOTTOM: (1, 0),
    Dir.RIGHT: (0, 1),
    Dir.TOP: (-1, 0),
    Dir.LEFT: (0, -1),
    Dir.NONE: (0, 0),
}


def dir_ok(direction) -> bool:
    """Return whether ``direction`` is a valid direction."""
    if direction is None or isinstance(direction, bool) or not isinstance(direction, int):
        return False
    return Dir.BOTTOM <= direction <= Dir.NONE


@functools.total_ordering
@dataclass(frozen=True)
class Pos:
    """A position on the board: row ``i`` and column ``j``."""

    i: int = 0
    j: int = 0

    def __add__(self, other):
        if isinstance(other, Pos):
            return Pos(self.i + other.i, self.j + other.j)
        if isinstance(other, int) and not isinstance(other, bool):
            di, dj = _DELTAS.get(other, (0, 0))
            return Pos(self.i + di, self.j + dj)
        return NotImplemented

    def __lt__(self, other):
        if not isinstance(other, Pos):
            return NotImplemented
        return (self.i, self.j) < (other.i, other.j)

    def __str__(self):
        return f"({self.i}, {self.j})"


class CellType(enum.IntEnum):
    """Kind of terrain of a cell."""

    WALL = 0
    GRASS = 1
    CITY = 2
    PATH = 3


WALL_CHAR = "W"
GRASS_CHAR = "."
CITY_CHAR = ";"
PATH_CHAR = ","

_CHAR_TO_TYPE = {
    WALL_CHAR: CellType.WALL,
    GRASS_CHAR: CellType.GRASS,
    CITY_CHAR: CellType.CITY,
    PATH_CHAR: CellType.PATH,
}
_TYPE_TO_CHAR = {cell_type: c for c, cell_type in _CHAR_TO_TYPE.items()}


def char_to_cell_type(c: str) -> CellType:
    """Return the cell type written as ``c`` in a grid."""
    try:
        return _CHAR_TO_TYPE[c]
    except KeyError:
        raise GameError(f"{c} in grid definition.") from None


def cell_type_to_char(cell_type) -> str:
    """Return the grid character of ``cell_type``, or 'X' when it is not a cell type."""
    return _TYPE_TO_CHAR.get(cell_type, "X")


@dataclass
class Cell:
    """A cell of the board and what it holds."""

    type: CellType | None = None
    unit_id: int = -1
    city_id: int = -1
    path_id: int = -1
    virus: int = 0
    mask: bool = False


@dataclass
class Unit:
    """A unit on the board and its condition."""

    id: int = -1
    player: int = -1
    pos: Pos = Pos()
    health: int = 0
    damage: int = 0
    turns: int = 0
    immune: bool = False
    mask: bool = False


class TokenStream:
    """Reads whitespace-separated tokens from a text, one at a time."""

    def __init__(self, text):
        if not isinstance(text, str):
            text = text.read()
        self._items = text.split()
        self._index = 0

    def _peek(self, what: str) -> str:
        if self._index >= len(self._items):
            raise GameError(f"Unexpected end of input while reading {what}.")
        return self._items[self._index]

    def word(self) -> str:
        """Return the next token."""
        item = self._peek("a word")
        self._index += 1
        return item

    def integer(self) -> int:
        """Return the next token as an integer; a token that is not one is left unread."""
        item = self._peek("an integer")
        try:
            value = int(item)
        except ValueError:
            raise GameError(f"Expected an integer, found {item!r}.") from None
        self._index += 1
        return value

    def number(self) -> float:
        """Return the next token as a real number; a token that is not one is left unread."""
        item = self._peek("a number")
        try:
            value = float(item)
        except ValueError:
            raise GameError(f"Expected a number, found {item!r}.") from None
        self._index += 1
        return value

    def at_end(self) -> bool:
        """Return whether every token has been read."""
        return self._index >= len(self._items)