from enum import Enum
from pathlib import Path
from typing import Sequence


class ErrorKind(str, Enum):
    BAD_PATTERN = "bad_pattern"
    UNDEFINED_ALIAS = "undefined_alias"
    UNKNOWN_PROFILE = "unknown_profile"
    INCLUDE_CYCLE = "include_cycle"
    NO_MATCH = "no_match"
    ALL_CANDIDATES_FAILED = "all_candidates_failed"
    CONFIG_SYNTAX = "config_syntax"
    MISSING_CONFIG = "missing_config"


class RrrError(Exception):
    """Base user-facing application error."""

    kind: ErrorKind


class BadPatternError(RrrError):
    kind = ErrorKind.BAD_PATTERN

    def __init__(self, raw: str, detail: str) -> None:
        self.raw = raw
        self.detail = detail
        super().__init__(f"Invalid pattern '{raw}' ({detail})")


class UndefinedAliasError(RrrError):
    kind = ErrorKind.UNDEFINED_ALIAS

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Alias '{name}' is not defined")


class UnknownProfileError(RrrError):
    kind = ErrorKind.UNKNOWN_PROFILE

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Profile '{name}' does not exist")


class NoMatchError(RrrError):
    kind = ErrorKind.NO_MATCH

    def __init__(self, target: str) -> None:
        self.target = target
        super().__init__(f"No match for '{target}'")


class AllCandidatesFailedError(RrrError):
    kind = ErrorKind.ALL_CANDIDATES_FAILED

    def __init__(self, attempts: Sequence) -> None:
        self.attempts = list(attempts)
        details = ", ".join(
            f"'{attempt.command}' ({attempt.disposition.describe()})"
            for attempt in self.attempts
        )
        super().__init__(f"All {len(self.attempts)} candidate(s) failed: {details}")


class ConfigFileError(RrrError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class IncludeCycleError(ConfigFileError):
    kind = ErrorKind.INCLUDE_CYCLE

    def __init__(self, path: Path, stack: Sequence[Path] = ()) -> None:
        self.stack = list(stack)
        super().__init__(path=path, message="Include cycle detected")


class ConfigSyntaxError(ConfigFileError):
    kind = ErrorKind.CONFIG_SYNTAX

    def __init__(self, path: Path, line: int, message: str) -> None:
        self.line = line
        super().__init__(path=path, message=f"Invalid configuration line {line} ({message})")


class MissingConfigError(RrrError):
    kind = ErrorKind.MISSING_CONFIG

    def __init__(self, paths: Sequence[Path]) -> None:
        self.paths = list(paths)
        joined = "' nor '".join(str(path) for path in self.paths)
        super().__init__(f"None of the configuration files '{joined}' could be loaded")
