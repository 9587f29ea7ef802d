"""Tests for pattern compilation and classification."""

import pytest

from runrunrun.errors import BadPatternError, ErrorKind
from runrunrun.rules.models import PatternKind
from runrunrun.rules.patterns import compile_pattern, glob_to_regex, is_alias_reference


@pytest.mark.parametrize(
    "raw",
    ["*.jpg", "https://*", "photo?.png", "/home/user/notes.txt", "a[b", "x]y", "[a]b"],
)
def test_plain_text_compiles_to_glob(raw: str) -> None:
    assert compile_pattern(raw).kind == PatternKind.GLOB


def test_tilde_prefix_compiles_to_regex() -> None:
    pattern = compile_pattern(r"~\.jpe?g$")

    assert pattern.kind == PatternKind.REGEX
    assert pattern.match("photo.jpeg") is not None


def test_bracketed_name_compiles_to_alias_reference() -> None:
    pattern = compile_pattern("[browser]")

    assert pattern.kind == PatternKind.ALIAS_REF
    assert pattern.alias_name == "browser"
    assert pattern.match("browser") is None


def test_tilde_wins_over_bracket_form() -> None:
    assert compile_pattern("~[browser]").kind == PatternKind.REGEX


def test_invalid_regex_reports_bad_pattern() -> None:
    with pytest.raises(BadPatternError) as excinfo:
        compile_pattern("~(unclosed")

    assert excinfo.value.kind == ErrorKind.BAD_PATTERN
    assert excinfo.value.raw == "~(unclosed"
    assert excinfo.value.detail


def test_glob_star_crosses_slashes() -> None:
    pattern = compile_pattern("https://*")

    assert pattern.match("https://example.com/a/b?q=1") is not None
    assert pattern.match("http://example.com") is None


def test_glob_matches_whole_string_only() -> None:
    pattern = compile_pattern("*.png")

    assert pattern.match("/tmp/shot.png") is not None
    assert pattern.match("/tmp/shot.png.bak") is None


def test_glob_question_mark_matches_one_character() -> None:
    pattern = compile_pattern("file?.txt")

    assert pattern.match("file1.txt") is not None
    assert pattern.match("file.txt") is None
    assert pattern.match("file12.txt") is None


def test_glob_treats_other_characters_literally() -> None:
    pattern = compile_pattern("notes[1].md")

    assert pattern.match("notes[1].md") is not None
    assert pattern.match("notes1.md") is None
    assert glob_to_regex("a.b") == r"a\.b"


def test_regex_is_searched_not_anchored() -> None:
    pattern = compile_pattern("~youtube")

    assert pattern.match("https://www.youtube.com/watch") is not None


def test_matching_is_case_insensitive_by_default() -> None:
    assert compile_pattern("*.JPG").match("photo.jpg") is not None
    assert compile_pattern("*.JPG", case_insensitive=False).match("photo.jpg") is None


def test_is_alias_reference() -> None:
    assert is_alias_reference("[browser]")
    assert is_alias_reference("  [browser] ")
    assert not is_alias_reference("[]")
    assert not is_alias_reference("[a]b")
    assert not is_alias_reference("[a]]")
