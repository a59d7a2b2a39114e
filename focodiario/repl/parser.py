"""
FILE: focodiario/repl/parser.py
PURPOSE: Parse user input into commands and arguments for REPL
EXPORTS:
  - ParseResult (dataclass for parsed commands)
  - parse_command(input_str) -> ParseResult
DEPENDENCIES:
  - shlex (for shell-like parsing with quotes)
NOTES:
  - Handles quoted strings: add "goal with spaces"
  - Supports flags: --category Saúde, --json
  - Case-insensitive command names
"""

import shlex
from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class ParseResult:
    """
    Result of parsing a REPL command.

    Attributes:
        command: The command name (e.g., "add", "toggle", "history")
        args: Positional arguments (e.g., ["Morning run"])
        flags: Flag arguments as dict (e.g., {"category": "Saúde"})
        raw_input: Original input string
    """
    command: str
    args: List[str] = field(default_factory=list)
    flags: Dict[str, str | bool] = field(default_factory=dict)
    raw_input: str = ""


def parse_command(input_str: str) -> ParseResult:
    """
    Parse REPL input into command, args, and flags.

    Examples:
        >>> parse_command('add "Morning run" --category saude')
        ParseResult(command="add", args=["Morning run"], flags={"category": "saude"})

        >>> parse_command("toggle 2")
        ParseResult(command="toggle", args=["2"], flags={})

    Notes:
        - Command is always the first token (case-insensitive)
        - A flag followed by a non-flag token takes it as its value,
          otherwise it is boolean
        - Unbalanced quotes fall back to whitespace splitting
    """
    input_str = input_str.strip()
    if not input_str:
        return ParseResult(command="", raw_input=input_str)

    try:
        tokens = shlex.split(input_str)
    except ValueError:
        tokens = input_str.split()

    if not tokens:
        return ParseResult(command="", raw_input=input_str)

    command = tokens[0].lower()

    args: List[str] = []
    flags: Dict[str, str | bool] = {}
    i = 1

    while i < len(tokens):
        token = tokens[i]

        if token.startswith("--") and len(token) > 2:
            flag_name = token[2:].lower()
            if i + 1 < len(tokens) and not tokens[i + 1].startswith("--"):
                flags[flag_name] = tokens[i + 1]
                i += 2
            else:
                flags[flag_name] = True
                i += 1
        else:
            args.append(token)
            i += 1

    return ParseResult(command=command, args=args, flags=flags, raw_input=input_str)
