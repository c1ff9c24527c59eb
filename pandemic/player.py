"""Base class for players: game information, a random generator and a command list."""

from __future__ import annotations

from pandemic.action import Action
from pandemic.info import Info
from pandemic.rng import RandomGenerator
from pandemic.settings import Settings
from pandemic.structs import CellType, GameError, Pos, TokenStream, Unit


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise GameError(message)


class Player(Info, RandomGenerator, Action):
    """A player; subclasses decide their moves in ``play``."""

    def __init__(self):
        Info.__init__(self, None)
        RandomGenerator.__init__(self, 0)
        Action.__init__(self)
        self._me = -1

    def play(self) -> None:
        """Decide the moves of this round. The base player does nothing."""

    def me(self) -> int:
        """Return the identifier of this player."""
        return self._me

    def setup(self, me: int, settings: Settings, seed: int) -> None:
        """Set the player's identifier, the game settings and the random seed."""
        self._me = me
        self.settings = settings
        self.set_random_seed(seed)

    def reset(self, info: Info) -> None:
        """Clear the commands and take a copy of the state of ``info``."""
        Action.__init__(self)
        self.copy_state_from(info)

    def reset_from_stream(self, tokens: TokenStream) -> None:
        """Clear the commands and read the state as a board prints it."""
        Action.__init__(self)
        self.read_grid(tokens)
        settings = self.settings

        word = tokens.word()
        _require(word == "round", f"Expected 'round' while parsing. Found {word}")
        self.round = tokens.integer()
        _require(0 <= self.round < settings.nb_rounds, "Round is not ok.")

        _require(tokens.word() == "total_score", "Expected 'total_score' while parsing.")
        scores = []
        for _ in range(settings.nb_players):
            score = tokens.integer()
            _require(score >= 0, "Total score cannot be negative.")
            scores.append(score)
        self.total_scores = scores

        _require(tokens.word() == "status", "Expected 'status' while parsing.")
        statuses = []
        for _ in range(settings.nb_players):
            st = tokens.number()
            _require(st == -1 or 0 <= st <= 1, "Status is not ok.")
            statuses.append(st)
        self.cpu_status = statuses

        _require(tokens.word() == "city_owners", "Expected 'city_owners' while parsing.")
        self.city_owners = [
            self._read_owner(tokens, "City owner is not ok.")
            for _ in range(self.nb_cities())
        ]

        _require(tokens.word() == "path_owners", "Expected 'path_owners' while parsing.")
        self.path_owners = [
            self._read_owner(tokens, "Path owner is not ok.")
            for _ in range(self.nb_paths())
        ]

        _require(tokens.word() == "units", "Expected 'units' while parsing.")
        self.units = []
        self.player_units = [[] for _ in range(settings.nb_players)]
        for unit_id in range(settings.nb_players * settings.nb_units):
            try:
                pl, i, j, health, damage, turns, immune, mask = (
                    tokens.integer() for _ in range(8)
                )
            except GameError:
                raise GameError(f"Could not read info for unit {unit_id}.") from None
            pos = Pos(i, j)
            _require(settings.player_ok(pl), "Player is not ok.")
            _require(settings.pos_ok(pos), "Position is not ok.")
            c = self.grid[i][j]
            _require(c.type != CellType.WALL, "Cell should not be wall.")
            _require(c.unit_id == -1, "Cell should not have any unit.")
            _require(health >= 0, "Health should be non-negative")
            c.unit_id = unit_id
            self.units.append(
                Unit(unit_id, pl, pos, health, damage, turns, bool(immune), bool(mask))
            )
            self.player_units[pl].append(unit_id)

        _require(self.ok(), "Invariants are not satisfied.")

    def _read_owner(self, tokens: TokenStream, message: str) -> int:
        owner = tokens.integer()
        _require(owner == -1 or 0 <= owner <= self.settings.nb_players, message)
        return owner