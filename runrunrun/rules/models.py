"""Rule data models."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class PatternKind(str, Enum):
    GLOB = "glob"
    REGEX = "regex"
    ALIAS_REF = "alias"


# Higher rank wins; alias references never take part in matching.
KIND_RANK: dict[PatternKind, int] = {
    PatternKind.REGEX: 2,
    PatternKind.GLOB: 1,
}


class RuleOrigin(str, Enum):
    CONFIG = "config"
    ALIAS = "alias"
    DESKTOP = "desktop"


@dataclass(frozen=True)
class ConfigOrigin:
    file: Path
    line: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


@dataclass(frozen=True)
class Pattern:
    raw_text: str
    kind: PatternKind
    compiled: Optional[re.Pattern[str]] = field(default=None, compare=False)

    @property
    def alias_name(self) -> str:
        if self.kind != PatternKind.ALIAS_REF:
            raise ValueError(f"Pattern '{self.raw_text}' is not an alias reference")
        return self.raw_text.strip()[1:-1]

    def match(self, target: str) -> Optional[re.Match[str]]:
        if self.compiled is None:
            return None
        if self.kind == PatternKind.REGEX:
            return self.compiled.search(target)
        return self.compiled.fullmatch(target)


@dataclass(frozen=True)
class Rule:
    pattern: Pattern
    command_template: str
    profile: str
    source_order: int
    origin: RuleOrigin = RuleOrigin.CONFIG
    config_origin: Optional[ConfigOrigin] = None
    alias: Optional[str] = None
    imported_from: Optional[Path] = None

    @property
    def priority_key(self) -> tuple[int, int]:
        return KIND_RANK.get(self.pattern.kind, 0), self.source_order


@dataclass(frozen=True)
class Alias:
    name: str
    command_template: str
