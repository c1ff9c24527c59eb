"""Commands that a player asks for in one round, and their text form."""

from __future__ import annotations

import sys
from dataclasses import dataclass

from pandemic.structs import Dir, GameError, TokenStream

_CHAR_TO_DIR = {
    "b": Dir.BOTTOM,
    "r": Dir.RIGHT,
    "t": Dir.TOP,
    "l": Dir.LEFT,
    "n": Dir.NONE,
}
_DIR_TO_CHAR = {d: c for c, d in _CHAR_TO_DIR.items()}


def char_to_dir(c: str) -> Dir | None:
    """Return the direction written as ``c``, or None when ``c`` names none."""
    return _CHAR_TO_DIR.get(c)


def dir_to_char(direction) -> str:
    """Return the letter that stands for ``direction``."""
    try:
        return _DIR_TO_CHAR[direction]
    except (KeyError, TypeError):
        raise GameError("Unreachable code reached.") from None


@dataclass(frozen=True)
class Command:
    """A request to move one unit in one direction."""

    unit_id: int
    direction: Dir | None


class Action:
    """The commands a player requests during one round."""

    MAX_COMMANDS = 1000

    def __init__(self):
        self._tried = 0
        self._units: set[int] = set()
        self.commands: list[Command] = []

    def execute(self, command: Command) -> None:
        """Add ``command``; a second command for the same unit is ignored with a warning."""
        self._tried += 1
        if self._tried > self.MAX_COMMANDS:
            raise GameError("Too many commands.")
        if command.unit_id in self._units:
            print(
                f"warning: command already requested for unit {command.unit_id}",
                file=sys.stderr,
            )
            return
        self._units.add(command.unit_id)
        self.commands.append(command)

    def move(self, unit_id: int, direction) -> None:
        """Ask to move unit ``unit_id`` in ``direction``."""
        self.execute(Command(unit_id, direction))


def parse_action(tokens: TokenStream) -> Action:
    """Read commands up to a terminating -1 or the first token that is not an integer."""
    action = Action()
    while True:
        try:
            unit_id = tokens.integer()
        except GameError:
            break
        if unit_id == -1:
            break
        if tokens.at_end():
            print(
                f"warning: only half an operation given for unit {unit_id}",
                file=sys.stderr,
            )
            break
        letter = tokens.word()
        action._units.add(unit_id)
        action.commands.append(Command(unit_id, char_to_dir(letter)))
    return action


def format_commands(commands) -> str:
    """Return ``commands`` as text, one per line, ended by -1."""
    lines = [f"{c.unit_id} {dir_to_char(c.direction)}" for c in commands]
    lines.append("-1")
    return "\n".join(lines) + "\n"