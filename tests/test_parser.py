from __future__ import annotations

from cloudterm.shell.parser import ParsedCommand, parse_line


def test_parse_splits_word_and_args() -> None:
    command = parse_line("create instance web1 compute")

    assert command == ParsedCommand(
        word="create",
        args=("instance", "web1", "compute"),
        raw="create instance web1 compute",
    )
    assert command.subcommand == "instance"
    assert command.rest == ("web1", "compute")


def test_parse_collapses_surrounding_and_repeated_whitespace() -> None:
    command = parse_line("   ping \t  example.com   ")

    assert command is not None
    assert command.word == "ping"
    assert command.args == ("example.com",)
    assert command.raw == "   ping \t  example.com   "


def test_blank_input_yields_no_command() -> None:
    assert parse_line("") is None
    assert parse_line("   \t ") is None


def test_quotes_are_not_interpreted() -> None:
    command = parse_line('echo "hello world"')

    assert command is not None
    assert command.args == ('"hello', 'world"')


def test_subcommand_defaults_to_empty() -> None:
    command = parse_line("instances")

    assert command is not None
    assert command.subcommand == ""
    assert command.rest == ()
