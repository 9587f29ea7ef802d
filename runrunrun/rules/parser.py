"""Parse configuration lines into directives, alias definitions and rules."""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from runrunrun.constants import DIRECTIVE_IMPORT, DIRECTIVE_INCLUDE, DIRECTIVE_PROFILE
from runrunrun.errors import ConfigSyntaxError
from runrunrun.rules.patterns import is_alias_reference
from runrunrun.utils import strip_comment, unquote

DIRECTIVES = (DIRECTIVE_PROFILE, DIRECTIVE_INCLUDE, DIRECTIVE_IMPORT)


@dataclass(frozen=True)
class Directive:
    name: str
    argument: str
    line: int


@dataclass(frozen=True)
class AliasDefinition:
    name: str
    command_template: str
    line: int


@dataclass(frozen=True)
class RuleLine:
    pattern_text: str
    command_template: str
    line: int
    alias: Optional[str] = None


ConfigLine = Union[Directive, AliasDefinition, RuleLine]


def _split_first_field(text: str) -> tuple[str, str]:
    if not text:
        return "", ""
    if text.startswith("["):
        # Alias names may contain spaces: "[my browser] firefox".
        end = text.find("]")
        if end > 1 and (end + 1 == len(text) or text[end + 1].isspace()):
            return text[: end + 1], text[end + 1 :].strip()
    if text[0] in ("'", '"'):
        lexer = shlex.shlex(text, posix=True)
        lexer.whitespace_split = True
        lexer.commenters = ""
        field = lexer.get_token()
        rest = lexer.instream.read()
        return field or "", rest.strip()

    parts = text.split(None, 1)
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1].strip()


def _parse_value(text: str) -> str:
    # Only a value that is one quoted field is unquoted; commands keep their quotes.
    if text and text[0] in ("'", '"'):
        parts = shlex.split(text)
        if len(parts) == 1:
            return unquote(text)
    return text


def parse_line(text: str, path: Path, line: int) -> Optional[ConfigLine]:
    stripped = strip_comment(text).strip()
    if not stripped:
        return None

    try:
        if stripped.startswith(":"):
            name, argument = _split_first_field(stripped[1:])
            if name not in DIRECTIVES:
                raise ConfigSyntaxError(path, line, f"unknown directive ':{name}'")
            argument = _parse_value(argument)
            if not argument:
                raise ConfigSyntaxError(path, line, f"':{name}' requires an argument")
            return Directive(name=name, argument=argument, line=line)

        field, rest = _split_first_field(stripped)
        command = _parse_value(rest)

        if is_alias_reference(field) and not stripped.startswith(("'", '"')):
            if not command:
                raise ConfigSyntaxError(path, line, f"alias {field} has no command")
            return AliasDefinition(name=field[1:-1], command_template=command, line=line)

        if not command:
            raise ConfigSyntaxError(path, line, f"pattern '{field}' has no command")
        if is_alias_reference(rest):
            return RuleLine(
                pattern_text=field,
                command_template=rest,
                line=line,
                alias=rest.strip()[1:-1],
            )
        return RuleLine(pattern_text=field, command_template=command, line=line)
    except ValueError as exc:
        raise ConfigSyntaxError(path, line, str(exc)) from exc


def parse_lines(text: str, path: Path) -> list[ConfigLine]:
    entries: list[ConfigLine] = []
    for number, raw in enumerate(text.splitlines(), start=1):
        entry = parse_line(raw, path, number)
        if entry is not None:
            entries.append(entry)
    return entries
