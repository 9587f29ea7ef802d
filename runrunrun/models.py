from __future__ import annotations

import re
import signal
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from runrunrun.constants import TARGET_PLACEHOLDER
from runrunrun.rules.models import Rule
from runrunrun.utils import quote

_PLACEHOLDER_RE = re.compile(r"%(s|\d+)")


class DispositionKind(str, Enum):
    EXITED_ZERO = "exited_zero"
    EXITED_NON_ZERO = "exited_non_zero"
    TERMINATED_BY_SIGNAL = "terminated_by_signal"


@dataclass(frozen=True)
class ExitDisposition:
    kind: DispositionKind
    code: Optional[int] = None
    signal: Optional[int] = None

    @classmethod
    def from_returncode(cls, returncode: int) -> "ExitDisposition":
        if returncode == 0:
            return cls(DispositionKind.EXITED_ZERO, code=0)
        if returncode < 0:
            return cls(DispositionKind.TERMINATED_BY_SIGNAL, signal=-returncode)
        return cls(DispositionKind.EXITED_NON_ZERO, code=returncode)

    @property
    def succeeded(self) -> bool:
        # A signal usually means the user interrupted the program on purpose.
        return self.kind in (DispositionKind.EXITED_ZERO, DispositionKind.TERMINATED_BY_SIGNAL)

    @property
    def exit_code(self) -> int:
        if self.kind == DispositionKind.TERMINATED_BY_SIGNAL:
            return 128 + (self.signal or 0)
        return self.code or 0

    def describe(self) -> str:
        if self.kind == DispositionKind.EXITED_ZERO:
            return "exited 0"
        if self.kind == DispositionKind.EXITED_NON_ZERO:
            return f"exited {self.code}"
        try:
            name = signal.Signals(self.signal or 0).name
        except ValueError:
            name = str(self.signal)
        return f"terminated by {name}"


@dataclass(frozen=True)
class ResolvedCommand:
    rule: Rule
    command_template: str
    target: str
    captures: tuple[str, ...] = ()

    @property
    def rule_priority_key(self) -> tuple[int, int]:
        return self.rule.priority_key

    def render(self) -> str:
        """Substitute the quoted target for ``%s`` and regex groups for ``%1``, ``%2``..."""
        template = self.command_template
        if TARGET_PLACEHOLDER not in template:
            template = f"{template} {TARGET_PLACEHOLDER}"

        def _replace(match: re.Match[str]) -> str:
            token = match.group(1)
            if token == "s":
                return quote(self.target)
            index = int(token)
            if index < 1 or index > len(self.captures):
                return match.group(0)
            return quote(self.captures[index - 1])

        return _PLACEHOLDER_RE.sub(_replace, template)


@dataclass(frozen=True)
class Attempt:
    command: str
    argv: list[str]
    disposition: ExitDisposition


@dataclass
class ExecutionOutcome:
    attempts: list[Attempt] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return bool(self.attempts) and self.attempts[-1].disposition.succeeded

    @property
    def successful_attempt(self) -> Optional[Attempt]:
        if self.succeeded:
            return self.attempts[-1]
        return None

    @property
    def exit_code(self) -> int:
        if not self.attempts:
            return 0
        return self.attempts[-1].disposition.exit_code
