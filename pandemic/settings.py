"""Game settings that stay fixed during a game, and how they are read and written."""

from __future__ import annotations

from dataclasses import dataclass

from pandemic.structs import GAME_NAME, VERSION, GameError, Pos, TokenStream

_KEY_WIDTH = 28


def version() -> str:
    """Return the game name and version."""
    return f"{GAME_NAME} {VERSION}"


@dataclass(frozen=True)
class Settings:
    """The fixed parameters of a game."""

    nb_players: int
    rows: int
    cols: int
    nb_rounds: int
    initial_health: int
    nb_units: int
    bonus_per_city_cell: int
    bonus_per_path_cell: int
    factor_connected_component: int
    infection_factor: float
    mask_protection: float

    def player_ok(self, pl: int) -> bool:
        """Return whether ``pl`` is a valid player identifier."""
        return 0 <= pl < self.nb_players

    def pos_ok(self, pos: Pos) -> bool:
        """Return whether ``pos`` lies inside the board."""
        return 0 <= pos.i < self.rows and 0 <= pos.j < self.cols

    def format(self) -> str:
        """Return the settings in the configuration-file layout."""
        entries = [
            ("nb_players", self.nb_players),
            ("rows", self.rows),
            ("cols", self.cols),
            ("nb_rounds", self.nb_rounds),
            ("initial_health", self.initial_health),
            ("nb_units", self.nb_units),
            ("bonus_per_city_cell", self.bonus_per_city_cell),
            ("bonus_per_path_cell", self.bonus_per_path_cell),
            ("factor_connected_component", self.factor_connected_component),
            ("infection_factor", self.infection_factor),
            ("mask_protection", self.mask_protection),
        ]
        lines = [version()]
        for key, value in entries:
            text = f"{value:g}" if isinstance(value, float) else str(value)
            lines.append(key.ljust(_KEY_WIDTH) + text)
        return "\n".join(lines) + "\n"


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise GameError(message)


def _field(tokens: TokenStream, key: str, read):
    name = tokens.word()
    _require(name == key, f"Expected '{key}' while parsing.")
    return read()


def read_settings(tokens: TokenStream) -> Settings:
    """Read and validate settings from ``tokens``."""
    for expected in version().split():
        _require(tokens.word() == expected, "Problems when reading.")

    nb_players = _field(tokens, "nb_players", tokens.integer)
    _require(nb_players == 4, "Wrong number of players.")

    rows = _field(tokens, "rows", tokens.integer)
    _require(rows >= 20, "Wrong number of rows.")

    cols = _field(tokens, "cols", tokens.integer)
    _require(cols >= 20, "Wrong number of columns.")

    nb_rounds = _field(tokens, "nb_rounds", tokens.integer)
    _require(nb_rounds >= 1, "Wrong number of rounds.")

    initial_health = _field(tokens, "initial_health", tokens.integer)
    _require(initial_health > 0, "Wrong initial health.")

    nb_units = _field(tokens, "nb_units", tokens.integer)
    _require(nb_units >= 1, "Wrong number of units.")
    _require(rows * cols >= 25 * nb_players * nb_units, "Wrong parameters.")

    bonus_per_city_cell = _field(tokens, "bonus_per_city_cell", tokens.integer)
    _require(bonus_per_city_cell >= 1, "Wrong bonus per city cell.")

    bonus_per_path_cell = _field(tokens, "bonus_per_path_cell", tokens.integer)
    _require(bonus_per_path_cell >= 1, "Wrong bonus per path cell.")

    factor = _field(tokens, "factor_connected_component", tokens.integer)
    _require(factor >= 1, "Wrong factor for connected components.")

    infection_factor = _field(tokens, "infection_factor", tokens.number)
    mask_protection = _field(tokens, "mask_protection", tokens.number)

    _require(rows == cols, "Board should be square.")

    return Settings(
        nb_players=nb_players,
        rows=rows,
        cols=cols,
        nb_rounds=nb_rounds,
        initial_health=initial_health,
        nb_units=nb_units,
        bonus_per_city_cell=bonus_per_city_cell,
        bonus_per_path_cell=bonus_per_path_cell,
        factor_connected_component=factor,
        infection_factor=infection_factor,
        mask_protection=mask_protection,
    )