import pytest

from pandemic.settings import Settings, read_settings, version
from pandemic.structs import GameError, Pos, TokenStream

BASE = {
    "nb_players": "4",
    "rows": "60",
    "cols": "60",
    "nb_rounds": "200",
    "initial_health": "100",
    "nb_units": "20",
    "bonus_per_city_cell": "1",
    "bonus_per_path_cell": "1",
    "factor_connected_component": "2",
    "infection_factor": "2.5",
    "mask_protection": "3",
}


def config_text(header="Pandemic 1.0", **overrides):
    values = {**BASE, **overrides}
    body = "\n".join(f"{key} {value}" for key, value in values.items())
    return f"{header}\n{body}\n"


def load(**overrides):
    return read_settings(TokenStream(config_text(**overrides)))


def test_version():
    assert version() == "Pandemic 1.0"


def test_read_settings_fields():
    s = load()
    assert (s.nb_players, s.rows, s.cols, s.nb_rounds) == (4, 60, 60, 200)
    assert (s.initial_health, s.nb_units) == (100, 20)
    assert (s.bonus_per_city_cell, s.bonus_per_path_cell) == (1, 1)
    assert s.factor_connected_component == 2
    assert s.infection_factor == 2.5
    assert s.mask_protection == 3.0


def test_format_round_trip():
    s = load()
    assert read_settings(TokenStream(s.format())) == s


def test_format_layout():
    lines = load().format().splitlines()
    assert lines[0] == version()
    assert lines[1].startswith("nb_players ")
    assert lines[1][28:] == "4"
    assert lines[-2][28:] == "2.5"
    assert lines[-1][28:] == "3"


def test_wrong_version():
    with pytest.raises(GameError, match="Problems when reading"):
        read_settings(TokenStream(config_text(header="Pandemic 2.0")))


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"nb_players": "3"}, "Wrong number of players"),
        ({"rows": "19", "cols": "19"}, "Wrong number of rows"),
        ({"cols": "19"}, "Wrong number of columns"),
        ({"nb_rounds": "0"}, "Wrong number of rounds"),
        ({"initial_health": "0"}, "Wrong initial health"),
        ({"nb_units": "0"}, "Wrong number of units"),
        ({"nb_units": "37"}, "Wrong parameters"),
        ({"bonus_per_city_cell": "0"}, "Wrong bonus per city cell"),
        ({"bonus_per_path_cell": "0"}, "Wrong bonus per path cell"),
        ({"factor_connected_component": "0"}, "Wrong factor for connected components"),
        ({"cols": "61"}, "Board should be square"),
    ],
)
def test_invalid_values(overrides, message):
    with pytest.raises(GameError, match=message):
        load(**overrides)


def test_wrong_key():
    text = config_text().replace("nb_rounds", "rounds")
    with pytest.raises(GameError, match="Expected 'nb_rounds'"):
        read_settings(TokenStream(text))


def test_truncated_input():
    text = config_text().rsplit("\n", 2)[0]
    with pytest.raises(GameError):
        read_settings(TokenStream(text))


def test_player_ok():
    s = load()
    assert [s.player_ok(pl) for pl in (-1, 0, 3, 4)] == [False, True, True, False]


def test_pos_ok():
    s = load()
    assert s.pos_ok(Pos(0, 0))
    assert s.pos_ok(Pos(59, 59))
    assert not s.pos_ok(Pos(60, 0))
    assert not s.pos_ok(Pos(0, -1))


def test_settings_are_immutable():
    s = load()
    with pytest.raises(AttributeError):
        s.rows = 10
    assert isinstance(s, Settings) and s.rows == 60