"""Tests for configuration line parsing."""

from pathlib import Path

import pytest

from runrunrun.errors import ConfigSyntaxError
from runrunrun.rules.parser import (
    AliasDefinition,
    Directive,
    RuleLine,
    parse_line,
    parse_lines,
)

CONF = Path("/tmp/rrr.conf")


def test_blank_and_comment_lines_are_ignored() -> None:
    assert parse_line("", CONF, 1) is None
    assert parse_line("   ", CONF, 1) is None
    assert parse_line("# a comment", CONF, 1) is None
    assert parse_line("   # indented comment", CONF, 1) is None


def test_rule_line_splits_pattern_and_command() -> None:
    entry = parse_line("*.pdf   zathura --fork", CONF, 3)

    assert entry == RuleLine(pattern_text="*.pdf", command_template="zathura --fork", line=3)


def test_trailing_comment_is_stripped() -> None:
    entry = parse_line("*.pdf zathura # reader", CONF, 1)

    assert isinstance(entry, RuleLine)
    assert entry.command_template == "zathura"


def test_hash_inside_word_or_quotes_is_kept() -> None:
    entry = parse_line("https://x.org/#top echo 'a # b'", CONF, 1)

    assert isinstance(entry, RuleLine)
    assert entry.pattern_text == "https://x.org/#top"
    assert entry.command_template == "echo 'a # b'"


def test_quoted_pattern_may_contain_spaces() -> None:
    entry = parse_line('"*my file.txt" vim', CONF, 1)

    assert isinstance(entry, RuleLine)
    assert entry.pattern_text == "*my file.txt"
    assert entry.command_template == "vim"


def test_escaped_quotes_in_quoted_pattern_are_unescaped() -> None:
    entry = parse_line(r'"*say \"hi\"*" less', CONF, 1)

    assert isinstance(entry, RuleLine)
    assert entry.pattern_text == '*say "hi"*'


def test_regex_backslashes_are_kept_when_unquoted() -> None:
    entry = parse_line(r"~\.jpe?g$ gimp", CONF, 1)

    assert isinstance(entry, RuleLine)
    assert entry.pattern_text == r"~\.jpe?g$"


def test_fully_quoted_command_is_unquoted() -> None:
    entry = parse_line("*.txt 'vim -R'", CONF, 1)

    assert isinstance(entry, RuleLine)
    assert entry.command_template == "vim -R"


def test_command_with_several_fields_keeps_its_quotes() -> None:
    entry = parse_line("*.txt 'vim' -R %s", CONF, 1)

    assert isinstance(entry, RuleLine)
    assert entry.command_template == "'vim' -R %s"


def test_alias_reference_in_command_position() -> None:
    entry = parse_line("https://* [browser]", CONF, 1)

    assert isinstance(entry, RuleLine)
    assert entry.alias == "browser"


def test_alias_definition() -> None:
    entry = parse_line("[browser] firefox --new-tab", CONF, 2)

    assert entry == AliasDefinition(name="browser", command_template="firefox --new-tab", line=2)


def test_alias_name_may_contain_spaces() -> None:
    entry = parse_line("[my browser] firefox --new-tab", CONF, 4)

    assert entry == AliasDefinition(name="my browser", command_template="firefox --new-tab", line=4)


def test_bracket_glob_is_still_a_rule() -> None:
    entry = parse_line("[a]b cat", CONF, 1)

    assert entry == RuleLine(pattern_text="[a]b", command_template="cat", line=1)


def test_directives() -> None:
    assert parse_line(":profile work", CONF, 1) == Directive(name="profile", argument="work", line=1)
    assert parse_line(':include "~/my dir/extra.conf"', CONF, 2) == Directive(
        name="include", argument="~/my dir/extra.conf", line=2
    )
    assert parse_line(":import /usr/share/applications", CONF, 3) == Directive(
        name="import", argument="/usr/share/applications", line=3
    )


@pytest.mark.parametrize(
    "line",
    [
        ":unknown thing",
        ":",
        ":   ",
        ":include",
        "*.pdf",
        "[browser]",
        '"*.pdf zathura',
    ],
)
def test_malformed_lines_raise_syntax_error(line: str) -> None:
    with pytest.raises(ConfigSyntaxError) as excinfo:
        parse_line(line, CONF, 7)

    assert excinfo.value.line == 7
    assert excinfo.value.path == CONF


def test_parse_lines_keeps_textual_order() -> None:
    text = "# header\n[ed] vim\n\n*.txt [ed]\n:profile work\n*.txt code\n"

    entries = parse_lines(text, CONF)

    assert [type(entry) for entry in entries] == [AliasDefinition, RuleLine, Directive, RuleLine]
    assert [entry.line for entry in entries] == [2, 4, 5, 6]
