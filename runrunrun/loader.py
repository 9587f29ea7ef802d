"""Load configuration files into an immutable rule set.

A configuration is a stream of lines spread over several files: ``:include``
splices another file (or every config file in a directory) in place, and
``:import`` turns desktop entries into rules. Expansion keeps a stack of the
canonical paths currently being read; entering a path that is already on the
stack is a cycle, while reading the same file again from an unrelated branch
is fine.
"""

from __future__ import annotations

import logging
import os
import sys
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator, Optional, Sequence

from runrunrun.aliases import AliasTable
from runrunrun.constants import (
    CONFIG_FILENAME,
    DEFAULT_PROFILE,
    DIRECTIVE_IMPORT,
    DIRECTIVE_INCLUDE,
    DIRECTIVE_PROFILE,
    FREEBSD_SYSTEM_CONFIG_DIR,
    SYSTEM_CONFIG_DIR,
)
from runrunrun.errors import ConfigFileError, IncludeCycleError, MissingConfigError
from runrunrun.imports.desktop import entry_patterns, iter_desktop_entries
from runrunrun.rules.models import ConfigOrigin, RuleOrigin
from runrunrun.rules.parser import AliasDefinition, Directive, RuleLine, parse_lines
from runrunrun.rules.patterns import compile_pattern
from runrunrun.rules.store import Profile, RuleStore, normalize_profile
from runrunrun.utils import canonical_path, expand_path

logger = logging.getLogger(__name__)

IncludeFilter = Callable[[Path], bool]


def default_include_filter(path: Path) -> bool:
    return not path.name.startswith(".") and not path.name.endswith("~")


@dataclass
class LoadedConfig:
    rules: RuleStore
    aliases: AliasTable
    files: list[Path] = field(default_factory=list)

    def profile(self, name: Optional[str]) -> Profile:
        return self.rules.select_profile(name)


class ConfigLoader:
    def __init__(
        self,
        case_insensitive: bool = True,
        include_filter: IncludeFilter = default_include_filter,
    ) -> None:
        self.case_insensitive = case_insensitive
        self.include_filter = include_filter
        self._rules = RuleStore()
        self._aliases = AliasTable()
        self._files: list[Path] = []
        self._stack: list[Path] = []
        self._profile = DEFAULT_PROFILE

    def load(self, path: Path) -> "ConfigLoader":
        """Read a top-level configuration file; rules start in the default profile."""
        self._profile = DEFAULT_PROFILE
        with self._entered(path) as canonical:
            self._load_file(canonical)
        return self

    def build(self) -> LoadedConfig:
        self._rules.freeze()
        self._aliases.freeze()
        return LoadedConfig(rules=self._rules, aliases=self._aliases, files=list(self._files))

    @contextmanager
    def _entered(self, path: Path) -> Iterator[Path]:
        canonical = canonical_path(path)
        if canonical in self._stack:
            raise IncludeCycleError(canonical, stack=self._stack)
        self._stack.append(canonical)
        try:
            yield canonical
        finally:
            self._stack.pop()

    def _load_file(self, path: Path) -> None:
        logger.debug("loading config '%s'", path)
        self._files.append(path)
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise ConfigFileError(path, f"Invalid encoding ({exc.reason})") from exc
        for entry in parse_lines(text, path):
            if isinstance(entry, Directive):
                self._apply_directive(path, entry)
            elif isinstance(entry, AliasDefinition):
                self._aliases.define(entry.name, entry.command_template)
            elif isinstance(entry, RuleLine):
                self._add_rule(path, entry)

    def _apply_directive(self, path: Path, directive: Directive) -> None:
        if directive.name == DIRECTIVE_PROFILE:
            self._profile = normalize_profile(directive.argument)
            self._rules.declare_profile(self._profile)
        elif directive.name == DIRECTIVE_INCLUDE:
            self._include(expand_path(directive.argument, base_dir=path.parent))
        elif directive.name == DIRECTIVE_IMPORT:
            self._import(
                expand_path(directive.argument, base_dir=path.parent),
                ConfigOrigin(file=path, line=directive.line),
            )

    def _add_rule(self, path: Path, entry: RuleLine) -> None:
        pattern = compile_pattern(entry.pattern_text, self.case_insensitive)
        self._rules.add_rule(
            pattern=pattern,
            command_template=entry.command_template,
            active_profile=self._profile,
            origin=RuleOrigin.ALIAS if entry.alias else RuleOrigin.CONFIG,
            config_origin=ConfigOrigin(file=path, line=entry.line),
            alias=entry.alias,
        )

    def _include(self, target: Path) -> None:
        logger.debug("including '%s'", target)
        with self._entered(target) as canonical:
            if canonical.is_dir():
                for child in sorted(canonical.iterdir(), key=lambda item: item.name):
                    if child.is_dir() or (child.is_file() and self.include_filter(child)):
                        self._include(child)
            else:
                self._load_file(canonical)

    def _import(self, target: Path, origin: ConfigOrigin) -> None:
        logger.debug("importing desktop entries from '%s'", target)
        for entry in iter_desktop_entries(target):
            for pattern_text in entry_patterns(entry):
                self._rules.add_rule(
                    pattern=compile_pattern(pattern_text, self.case_insensitive),
                    command_template=entry.exec_command,
                    active_profile=self._profile,
                    origin=RuleOrigin.DESKTOP,
                    config_origin=origin,
                    imported_from=entry.path,
                )


def default_config_paths() -> list[Path]:
    system_dir = (
        FREEBSD_SYSTEM_CONFIG_DIR if sys.platform.startswith("freebsd") else SYSTEM_CONFIG_DIR
    )
    config_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return [Path(system_dir) / CONFIG_FILENAME, Path(config_home) / CONFIG_FILENAME]


def load_config(
    config_path: Optional[Path] = None,
    case_insensitive: bool = True,
    include_filter: IncludeFilter = default_include_filter,
    search_paths: Optional[Sequence[Path]] = None,
) -> LoadedConfig:
    """Load ``config_path``, or every existing default location when it is None."""
    loader = ConfigLoader(case_insensitive=case_insensitive, include_filter=include_filter)
    if config_path is not None:
        return loader.load(config_path).build()

    candidates = list(search_paths) if search_paths is not None else default_config_paths()
    loaded = False
    for candidate in candidates:
        if candidate.is_file():
            loader.load(candidate)
            loaded = True
    if not loaded:
        raise MissingConfigError(candidates)
    return loader.build()
