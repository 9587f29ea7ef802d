"""Compile raw pattern text into matchable patterns."""

from __future__ import annotations

import re

from runrunrun.errors import BadPatternError
from runrunrun.rules.models import Pattern, PatternKind

_ALIAS_RE = re.compile(r"^\[[^\]]+\]$")


def is_alias_reference(text: str) -> bool:
    return bool(_ALIAS_RE.match(text.strip()))


def glob_to_regex(glob: str) -> str:
    """Translate a glob into an equivalent regex body.

    ``*`` matches any run of characters, ``/`` included, and ``?`` exactly one
    character. Everything else is literal, so ``https://*`` works on whole
    URIs the same way ``*.png`` works on paths.
    """
    parts: list[str] = []
    for char in glob:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return "".join(parts)


def compile_pattern(raw_text: str, case_insensitive: bool = True) -> Pattern:
    flags = re.DOTALL
    if case_insensitive:
        flags |= re.IGNORECASE

    if raw_text.startswith("~"):
        body = raw_text[1:]
        try:
            compiled = re.compile(body, flags)
        except re.error as exc:
            raise BadPatternError(raw_text, str(exc)) from exc
        return Pattern(raw_text=raw_text, kind=PatternKind.REGEX, compiled=compiled)

    if is_alias_reference(raw_text):
        return Pattern(raw_text=raw_text.strip(), kind=PatternKind.ALIAS_REF)

    return Pattern(
        raw_text=raw_text,
        kind=PatternKind.GLOB,
        compiled=re.compile(glob_to_regex(raw_text), flags),
    )
