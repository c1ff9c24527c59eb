import pytest

from pandemic.action import (
    Action,
    Command,
    char_to_dir,
    dir_to_char,
    format_commands,
    parse_action,
)
from pandemic.structs import Dir, GameError, TokenStream


@pytest.mark.parametrize("direction", list(Dir))
def test_dir_char_round_trip(direction):
    assert char_to_dir(dir_to_char(direction)) == direction


def test_dir_letters_are_fixed():
    assert [dir_to_char(d) for d in Dir] == ["b", "r", "t", "l", "n"]


def test_unknown_letter_gives_none():
    assert char_to_dir("x") is None


def test_dir_to_char_invalid_raises():
    with pytest.raises(GameError):
        dir_to_char(None)


def test_move_records_command():
    action = Action()
    action.move(3, Dir.LEFT)
    action.execute(Command(5, Dir.TOP))
    assert action.commands == [Command(3, Dir.LEFT), Command(5, Dir.TOP)]


def test_second_command_for_unit_is_ignored(capsys):
    action = Action()
    action.move(3, Dir.LEFT)
    action.move(3, Dir.RIGHT)
    assert action.commands == [Command(3, Dir.LEFT)]
    assert "warning: command already requested for unit 3" in capsys.readouterr().err


def test_too_many_commands():
    action = Action()
    for unit_id in range(Action.MAX_COMMANDS):
        action.move(unit_id, Dir.NONE)
    assert len(action.commands) == Action.MAX_COMMANDS
    with pytest.raises(GameError, match="Too many commands"):
        action.move(Action.MAX_COMMANDS, Dir.NONE)


def test_repeated_commands_count_towards_limit(capsys):
    action = Action()
    for _ in range(Action.MAX_COMMANDS):
        action.move(0, Dir.BOTTOM)
    with pytest.raises(GameError):
        action.move(1, Dir.BOTTOM)
    assert len(action.commands) == 1


def test_format_commands():
    text = format_commands([Command(3, Dir.BOTTOM), Command(7, Dir.LEFT)])
    assert text == "3 b\n7 l\n-1\n"


def test_format_no_commands():
    assert format_commands([]) == "-1\n"


def test_parse_round_trip():
    commands = [Command(i, d) for i, d in enumerate(Dir)]
    parsed = parse_action(TokenStream(format_commands(commands)))
    assert parsed.commands == commands


def test_parse_stops_at_terminator():
    tokens = TokenStream("2 r -1 next")
    parsed = parse_action(tokens)
    assert parsed.commands == [Command(2, Dir.RIGHT)]
    assert tokens.word() == "next"


def test_parse_stops_at_non_integer():
    tokens = TokenStream("2 t units")
    parsed = parse_action(tokens)
    assert parsed.commands == [Command(2, Dir.TOP)]
    assert tokens.word() == "units"


def test_parse_half_operation(capsys):
    parsed = parse_action(TokenStream("1 b 4"))
    assert parsed.commands == [Command(1, Dir.BOTTOM)]
    assert "only half an operation given for unit 4" in capsys.readouterr().err


def test_parse_unknown_letter_keeps_invalid_direction():
    parsed = parse_action(TokenStream("6 z -1"))
    assert parsed.commands == [Command(6, None)]


def test_parsed_action_refuses_duplicates():
    parsed = parse_action(TokenStream("6 b -1"))
    parsed.move(6, Dir.TOP)
    assert parsed.commands == [Command(6, Dir.BOTTOM)]