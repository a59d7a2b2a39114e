"""
Tests for REPL command parsing.
"""

from focodiario.repl.parser import parse_command


def test_empty_input():
    assert parse_command("").command == ""
    assert parse_command("   ").command == ""


def test_command_and_args():
    result = parse_command("TOGGLE 2")
    assert result.command == "toggle"
    assert result.args == ["2"]
    assert result.flags == {}


def test_quoted_title_with_flag():
    result = parse_command('add "Read 20 pages" --category Estudos')
    assert result.command == "add"
    assert result.args == ["Read 20 pages"]
    assert result.flags == {"category": "Estudos"}


def test_boolean_flag_and_unbalanced_quotes():
    result = parse_command("ls --json")
    assert result.flags == {"json": True}

    result = parse_command('add "Broken quote')
    assert result.args == ['"Broken', "quote"]
